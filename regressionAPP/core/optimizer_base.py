"""
optimizer_base.py

Базові класи та типи для правил оновлення параметрів (Strategy).

Ідея:
    - Є абстрактний клас Optimizer, від якого наслідуються всі правила
      оновлення з модуля gradient_descent:
        * SlopeGradientDescent
        * SequentialGradientDescent
        * SimultaneousGradientDescent
    - Кожне правило реалізує _step_impl(), а движок викликає step().
    - Optimizer не тримає стану запуску (θ, кількість кроків, трасу):
      усе це належить одному виклику OptimizationEngine.run().

Формат:
    step(theta_k: np.ndarray) -> StepResult
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from .config import check_learning_rate
from .functions import ArrayLike, AffineModel, GradientComputer, LossFunction


# ---------------------------------------------------------------------------
# Результат одного кроку
# ---------------------------------------------------------------------------

@dataclass
class StepResult:
    """
    Результат одного кроку градієнтного спуску.

    Атрибути:
        parameters     - новий вектор θ_{k+1}
        loss           - SSE(θ_{k+1})
        step           - знакове оновлення: θ_{k+1} = θ_k - step
        step_magnitude - max |step_i|
        gradient       - похідні, з яких отримано step (step = learning_rate * gradient)
        meta           - додаткова інформація
    """
    parameters: np.ndarray
    loss: float
    step: np.ndarray
    step_magnitude: float
    gradient: np.ndarray
    meta: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Базовий клас Optimizer (Strategy)
# ---------------------------------------------------------------------------

class Optimizer(ABC):
    """
    Абстрактний базовий клас для правил оновлення.

    Використання:
        opt = SequentialGradientDescent(loss=..., gradient=..., learning_rate=0.01)
        opt.reset()
        res = opt.step(theta_k)  # StepResult
    """

    def __init__(
        self,
        loss: LossFunction,
        gradient: GradientComputer,
        learning_rate: float,
        name: Optional[str] = None,
    ) -> None:
        """
        Parameters
        ----------
        loss : LossFunction
            SSE(θ) для вибірки.
        gradient : GradientComputer
            Аналітичні похідні SSE.
        learning_rate : float
            Множник градієнта; скінченне число > 0, інакше ConfigurationError.
        name : Optional[str]
            Людяна назва (для логів і зведених таблиць).
        """
        self.loss = loss
        self.gradient = gradient
        self.learning_rate = check_learning_rate(learning_rate)
        self.name: str = name or self.__class__.__name__

        # Лічильники викликів (для зведеної таблиці)
        self.loss_evals: int = 0
        self.grad_evals: int = 0

    @property
    def model(self) -> AffineModel:
        return self.loss.model

    # ------------------------------------------------------------------
    # Сервісні методи з підрахунком викликів
    # ------------------------------------------------------------------

    def eval_loss(self, theta: ArrayLike) -> float:
        """Обчислити SSE(θ) та збільшити лічильник."""
        self.loss_evals += 1
        return self.loss(np.asarray(theta, dtype=float))

    def eval_d_slope(self, theta: ArrayLike) -> float:
        self.grad_evals += 1
        return self.gradient.d_slope(np.asarray(theta, dtype=float))

    def eval_d_intercept(self, theta: ArrayLike) -> float:
        self.grad_evals += 1
        return self.gradient.d_intercept(np.asarray(theta, dtype=float))

    def eval_grad(self, theta: ArrayLike) -> np.ndarray:
        """Повний градієнт в одній точці (одна похідна = один виклик)."""
        self.grad_evals += self.model.n_parameters
        return self.gradient(np.asarray(theta, dtype=float))

    # ------------------------------------------------------------------
    # Життєвий цикл
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Скинути лічильники перед новим запуском."""
        self.loss_evals = 0
        self.grad_evals = 0

    # ------------------------------------------------------------------
    # Головний публічний метод step()
    # ------------------------------------------------------------------

    def step(self, theta_k: ArrayLike) -> StepResult:
        """
        Виконати одне оновлення з поточної точки θ_k.

        Вхідний масив не змінюється: StepResult містить новий вектор.
        """
        theta_arr = np.array(theta_k, dtype=float)
        result = self._step_impl(theta_arr)

        if not isinstance(result, StepResult):
            raise TypeError(
                f"{self.__class__.__name__}._step_impl() "
                f"повинен повертати StepResult, отримано: {type(result)}"
            )

        return result

    @abstractmethod
    def _step_impl(self, theta_k: np.ndarray) -> StepResult:
        """
        Реалізація одного оновлення.

        Parameters
        ----------
        theta_k : np.ndarray
            Поточний вектор параметрів (власна копія, можна змінювати).

        Returns
        -------
        StepResult
        """
        raise NotImplementedError


__all__ = [
    "StepResult",
    "Optimizer",
]
