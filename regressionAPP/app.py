"""
app.py

Фасад для підбору прямої градієнтним спуском.

Зв'язує:
    - core.config.Hyperparameters (перевірена конфігурація)
    - core.functions (SSE та аналітичні похідні)
    - правила оновлення з core.gradient_descent
    - core.engine.OptimizationEngine
    - core.results_summary.ResultsSummary

Функціонал:
    - create_optimizer()         : правило оновлення за гіперпараметрами;
    - fit_line()                 : один запуск, повертає OptimizationRunResult;
    - run_learning_rate_sweep()  : незалежні запуски для кількох learning rate
                                   (послідовно, без спільного стану) + зведення;
    - compare_update_orders()    : sequential проти simultaneous на тих самих даних.

Побудова графіків та закрита формула OLS поза цим пакетом: вони
отримують OptimizationRunResult (траса, θ*) як вхід.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .core.config import (
    UPDATE_SEQUENTIAL,
    UPDATE_SIMULTANEOUS,
    ConfigurationError,
    Hyperparameters,
)
from .core.convergence import ConvergenceCriterion
from .core.dataset import Dataset
from .core.engine import IterationCallback, OptimizationEngine, OptimizationRunResult
from .core.functions import GradientComputer, LossFunction
from .core.gradient_descent import (
    SequentialGradientDescent,
    SimultaneousGradientDescent,
    SlopeGradientDescent,
)
from .core.optimizer_base import Optimizer
from .core.results_summary import ResultsSummary

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Фабрика Optimizer-ів
# ---------------------------------------------------------------------------

def create_optimizer(dataset: Dataset, hyperparameters: Hyperparameters) -> Optimizer:
    """
    Створити правило оновлення для вибірки та гіперпараметрів.

        fit_intercept = False                  -> SlopeGradientDescent
        fit_intercept = True, "sequential"     -> SequentialGradientDescent
        fit_intercept = True, "simultaneous"   -> SimultaneousGradientDescent
    """
    model = hyperparameters.model
    loss = LossFunction(dataset, model)
    gradient = GradientComputer(dataset, model)
    lr = hyperparameters.learning_rate

    if not model.fit_intercept:
        return SlopeGradientDescent(loss=loss, gradient=gradient, learning_rate=lr)

    if hyperparameters.update_order == UPDATE_SEQUENTIAL:
        return SequentialGradientDescent(loss=loss, gradient=gradient, learning_rate=lr)

    if hyperparameters.update_order == UPDATE_SIMULTANEOUS:
        return SimultaneousGradientDescent(loss=loss, gradient=gradient, learning_rate=lr)

    raise ConfigurationError(f"Невідомий порядок оновлення: {hyperparameters.update_order}")


# ---------------------------------------------------------------------------
# Запуски
# ---------------------------------------------------------------------------

def fit_line(
    dataset: Dataset,
    hyperparameters: Hyperparameters,
    callback: Optional[IterationCallback] = None,
    criterion: Optional[ConvergenceCriterion] = None,
    engine: Optional[OptimizationEngine] = None,
) -> OptimizationRunResult:
    """
    Підібрати пряму градієнтним спуском.

    criterion за замовчуванням: StepSizeCriterion(min_step, max_steps)
    з гіперпараметрів.
    """
    if not isinstance(dataset, Dataset):
        dataset = Dataset.from_pairs(dataset)

    optimizer = create_optimizer(dataset, hyperparameters)
    engine = engine or OptimizationEngine()

    return engine.run(
        optimizer=optimizer,
        initial_parameters=hyperparameters.initial_parameters,
        max_steps=hyperparameters.max_steps,
        min_step=hyperparameters.min_step,
        criterion=criterion,
        callback=callback,
        detect_divergence=hyperparameters.detect_divergence,
    )


def run_learning_rate_sweep(
    dataset: Dataset,
    hyperparameters: Hyperparameters,
    learning_rates: Iterable[float],
) -> ResultsSummary:
    """
    Запустити fit_line() для кожного learning rate.

    Невалідний learning rate перериває перебір ConfigurationError ще до
    першого запуску. Розбіжні запуски потрапляють у зведення зі станом
    DIVERGED.
    """
    configs = [hyperparameters.replace(learning_rate=lr) for lr in learning_rates]

    summary = ResultsSummary()
    for cfg in configs:
        result = fit_line(dataset, cfg)
        logger.info(
            "learning_rate=%g: %s за %d кроків",
            cfg.learning_rate, result.exit_state.value, result.steps,
        )
        summary.add_run(result)

    return summary


def compare_update_orders(
    dataset: Dataset,
    hyperparameters: Hyperparameters,
) -> ResultsSummary:
    """Запуски з послідовним та одночасним оновленням (intercept, slope)."""
    if not hyperparameters.fit_intercept:
        raise ConfigurationError(
            "Порівняння порядку оновлення має сенс лише при fit_intercept = True."
        )

    summary = ResultsSummary()
    for order in (UPDATE_SEQUENTIAL, UPDATE_SIMULTANEOUS):
        summary.add_run(fit_line(dataset, hyperparameters.replace(update_order=order)))
    return summary


__all__ = [
    "create_optimizer",
    "fit_line",
    "run_learning_rate_sweep",
    "compare_update_orders",
]
