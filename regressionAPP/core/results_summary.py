"""
results_summary.py

Зведена таблиця результатів кількох запусків на одній вибірці
(наприклад, перебір learning rate або порівняння порядку оновлення).

Працює поверх об'єктів OptimizationRunResult:
    - method_name
    - learning_rate
    - parameters / intercept / slope
    - loss
    - steps
    - exit_state
    - loss_evals, grad_evals
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .convergence import ExitState
from .engine import OptimizationRunResult


@dataclass
class ResultsSummary:
    """
    Зведення результатів кількох запусків.

    Приклад використання:
        summary = ResultsSummary()
        summary.add_run(run_a)
        summary.add_run(run_b)
        rows = summary.as_rows()  # для pandas / CSV / таблиць
    """
    runs: List[OptimizationRunResult] = field(default_factory=list)

    def add_run(self, run: OptimizationRunResult) -> None:
        self.runs.append(run)

    def __len__(self) -> int:
        return len(self.runs)

    # ------------------------------------------------------------------
    # Перетворення в "табличний" вигляд
    # ------------------------------------------------------------------

    def as_rows(self) -> List[Dict[str, Any]]:
        """
        Список dict-рядків з полями:
            method, learning_rate, intercept, slope, loss,
            steps, exit_state, loss_evals, grad_evals
        """
        rows: List[Dict[str, Any]] = []

        for run in self.runs:
            rows.append(
                {
                    "method": run.method_name,
                    "learning_rate": float(run.learning_rate),
                    "intercept": run.intercept,
                    "slope": run.slope,
                    "loss": float(run.loss),
                    "steps": int(run.steps),
                    "exit_state": run.exit_state.value,
                    "loss_evals": int(run.loss_evals),
                    "grad_evals": int(run.grad_evals),
                }
            )

        return rows

    # ------------------------------------------------------------------
    # Вибір "найкращого" запуску
    # ------------------------------------------------------------------

    def best_by_loss(self) -> Optional[OptimizationRunResult]:
        """
        Запуск з найменшим SSE серед тих, що не розбіглися.
        Якщо таких немає, то None.
        """
        best_run = None
        best_loss = None

        for run in self.runs:
            if run.exit_state == ExitState.DIVERGED or not math.isfinite(run.loss):
                continue
            if best_loss is None or run.loss < best_loss:
                best_loss = run.loss
                best_run = run

        return best_run

    def to_dataframe(self):
        """pandas.DataFrame зі зведеною таблицею."""
        import pandas as pd

        return pd.DataFrame(self.as_rows())


__all__ = ["ResultsSummary"]
