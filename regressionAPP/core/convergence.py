"""
convergence.py

Критерії зупинки ітераційного процесу.

Критерій є чистим предикатом над (кількість кроків, величина останнього
кроку, зміна SSE). Движок викликає should_continue() перед кожною
ітерацією, а після виходу з циклу викликає exit_state(), щоб назвати причину
зупинки. Заміна критерію не змінює тіла циклу.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum

from .config import check_max_steps, check_threshold


class ExitState(str, Enum):
    """Стан автомата оптимізації."""
    RUNNING = "running"
    CONVERGED = "converged"
    MAX_STEPS_REACHED = "max_steps_reached"
    DIVERGED = "diverged"


class ConvergenceCriterion(ABC):
    """
    Базовий клас критерію зупинки.

    Аргументи предиката:
        steps               - кількість виконаних ітерацій
        last_step_magnitude - max |step_i| останньої ітерації (+inf до першої)
        loss_delta          - |SSE_k - SSE_{k-1}| (+inf до першої ітерації)
    """

    def __init__(self, max_steps: int) -> None:
        self.max_steps = check_max_steps(max_steps)

    @abstractmethod
    def is_converged(self, last_step_magnitude: float, loss_delta: float) -> bool:
        raise NotImplementedError

    def should_continue(
        self,
        steps: int,
        last_step_magnitude: float = math.inf,
        loss_delta: float = math.inf,
    ) -> bool:
        return steps < self.max_steps and not self.is_converged(last_step_magnitude, loss_delta)

    def exit_state(
        self,
        steps: int,
        last_step_magnitude: float = math.inf,
        loss_delta: float = math.inf,
    ) -> ExitState:
        """Причина зупинки; якщо виконано обидві умови, перевага за збіжністю."""
        if self.is_converged(last_step_magnitude, loss_delta):
            return ExitState.CONVERGED
        if steps >= self.max_steps:
            return ExitState.MAX_STEPS_REACHED
        return ExitState.RUNNING


class StepSizeCriterion(ConvergenceCriterion):
    """
    Продовжуємо, поки steps < max_steps і last_step_magnitude > min_step.

    NaN у величині кроку порівнюється як False, тобто цикл зупиняється
    (так само, як у простому while з двома умовами).
    """

    def __init__(self, min_step: float, max_steps: int) -> None:
        super().__init__(max_steps)
        self.min_step = check_threshold("min_step", min_step)

    def is_converged(self, last_step_magnitude: float, loss_delta: float) -> bool:
        return not (last_step_magnitude > self.min_step)


class LossDeltaCriterion(ConvergenceCriterion):
    """Зупинка, коли |SSE_k - SSE_{k-1}| <= min_loss_delta."""

    def __init__(self, min_loss_delta: float, max_steps: int) -> None:
        super().__init__(max_steps)
        self.min_loss_delta = check_threshold("min_loss_delta", min_loss_delta)

    def is_converged(self, last_step_magnitude: float, loss_delta: float) -> bool:
        return not (loss_delta > self.min_loss_delta)


__all__ = [
    "ExitState",
    "ConvergenceCriterion",
    "StepSizeCriterion",
    "LossDeltaCriterion",
]
