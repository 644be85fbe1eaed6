"""
gradient_descent.py

Правила оновлення градієнтного спуску з фіксованим learning rate
як стратегії Optimizer.

Ідея:
    θ_{k+1} = θ_k - step,   step = learning_rate * ∇SSE

Три варіанти:
    - SlopeGradientDescent       : θ = (slope,), intercept фіксований;
    - SequentialGradientDescent  : θ = (intercept, slope); спочатку
      оновлюється intercept, потім похідна по slope перераховується вже
      з новим intercept (Gauss-Seidel). Це порядок за замовчуванням;
    - SimultaneousGradientDescent: θ = (intercept, slope); обидві похідні
      в точці θ_k (Jacobi). Траєкторія інша, але теж збігається.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .optimizer_base import Optimizer, StepResult
from .functions import INTERCEPT, SLOPE, GradientComputer, LossFunction
from .config import UPDATE_SEQUENTIAL, UPDATE_SIMULTANEOUS


def step_magnitude(step: np.ndarray) -> float:
    """max |step_i|; nan, якщо хоч одна компонента nan."""
    return float(np.max(np.abs(step)))


class _AffineGradientDescent(Optimizer):
    """Спільна частина: перевірка схеми параметрів та індекси."""

    fits_intercept: bool = True

    def __init__(
        self,
        loss: LossFunction,
        gradient: GradientComputer,
        learning_rate: float,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(
            loss=loss,
            gradient=gradient,
            learning_rate=learning_rate,
            name=name,
        )
        if self.model.fit_intercept != self.fits_intercept:
            raise ValueError(
                f"{self.__class__.__name__}: схема параметрів "
                f"{self.model.parameter_names} не підходить для цього правила."
            )
        self.slope_index = self.model.index_of(SLOPE)
        self.intercept_index = self.model.index_of(INTERCEPT) if self.fits_intercept else None


class SlopeGradientDescent(_AffineGradientDescent):
    """
    Градієнтний спуск лише по slope (intercept відомий).

        step  = learning_rate * ∂SSE/∂slope
        slope = slope - step
    """

    fits_intercept = False

    def __init__(
        self,
        loss: LossFunction,
        gradient: GradientComputer,
        learning_rate: float,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(loss, gradient, learning_rate,
                         name or "Gradient descent (slope)")

    def _step_impl(self, theta_k: np.ndarray) -> StepResult:
        g_slope = self.eval_d_slope(theta_k)
        step = np.array([self.learning_rate * g_slope], dtype=float)

        theta_new = theta_k
        theta_new[self.slope_index] -= step[0]

        return StepResult(
            parameters=theta_new,
            loss=self.eval_loss(theta_new),
            step=step,
            step_magnitude=step_magnitude(step),
            gradient=np.array([g_slope], dtype=float),
        )


class SequentialGradientDescent(_AffineGradientDescent):
    """
    Послідовне оновлення (intercept, slope).

        step_b    = learning_rate * ∂SSE/∂intercept (b_k, s_k)
        b_{k+1}   = b_k - step_b
        step_s    = learning_rate * ∂SSE/∂slope (b_{k+1}, s_k)
        s_{k+1}   = s_k - step_s
    """

    def __init__(
        self,
        loss: LossFunction,
        gradient: GradientComputer,
        learning_rate: float,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(loss, gradient, learning_rate,
                         name or "Gradient descent (sequential)")

    def _step_impl(self, theta_k: np.ndarray) -> StepResult:
        theta_new = theta_k
        step = np.zeros_like(theta_new)
        grad = np.zeros_like(theta_new)

        grad[self.intercept_index] = self.eval_d_intercept(theta_new)
        step[self.intercept_index] = self.learning_rate * grad[self.intercept_index]
        theta_new[self.intercept_index] -= step[self.intercept_index]

        # похідна по slope вже з оновленим intercept
        grad[self.slope_index] = self.eval_d_slope(theta_new)
        step[self.slope_index] = self.learning_rate * grad[self.slope_index]
        theta_new[self.slope_index] -= step[self.slope_index]

        return StepResult(
            parameters=theta_new,
            loss=self.eval_loss(theta_new),
            step=step,
            step_magnitude=step_magnitude(step),
            gradient=grad,
            meta={"update_order": UPDATE_SEQUENTIAL},
        )


class SimultaneousGradientDescent(_AffineGradientDescent):
    """Одночасне оновлення: step = learning_rate * ∇SSE(θ_k)."""

    def __init__(
        self,
        loss: LossFunction,
        gradient: GradientComputer,
        learning_rate: float,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(loss, gradient, learning_rate,
                         name or "Gradient descent (simultaneous)")

    def _step_impl(self, theta_k: np.ndarray) -> StepResult:
        grad = self.eval_grad(theta_k)
        step = self.learning_rate * grad
        theta_new = theta_k - step

        return StepResult(
            parameters=theta_new,
            loss=self.eval_loss(theta_new),
            step=step,
            step_magnitude=step_magnitude(step),
            gradient=grad,
            meta={"update_order": UPDATE_SIMULTANEOUS},
        )


__all__ = [
    "step_magnitude",
    "SlopeGradientDescent",
    "SequentialGradientDescent",
    "SimultaneousGradientDescent",
]
