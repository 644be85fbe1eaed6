"""
regressionAPP

Градієнтний спуск для прямої ŷ = intercept + slope * x за критерієм SSE.
"""

from .app import compare_update_orders, create_optimizer, fit_line, run_learning_rate_sweep
from .core.config import ConfigurationError, Hyperparameters
from .core.convergence import ExitState, LossDeltaCriterion, StepSizeCriterion
from .core.dataset import Dataset, DatasetError
from .core.engine import OptimizationEngine, OptimizationRunResult
from .core.iteration_result import StepRecord

__all__ = [
    "ConfigurationError",
    "Dataset",
    "DatasetError",
    "ExitState",
    "Hyperparameters",
    "LossDeltaCriterion",
    "OptimizationEngine",
    "OptimizationRunResult",
    "StepRecord",
    "StepSizeCriterion",
    "compare_update_orders",
    "create_optimizer",
    "fit_line",
    "run_learning_rate_sweep",
]
