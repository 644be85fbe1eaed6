"""
functions.py

Цільова функція (сума квадратів відхилень, SSE) для прямої
ŷ = intercept + slope * x та її аналітичні похідні.

Формат:
    - вектор параметрів θ: numpy.ndarray форми (1,) або (2,):
        (slope,)             - intercept зафіксований (AffineModel.fit_intercept = False)
        (intercept, slope)   - підбираються обидва параметри
    - SSE(θ)           = Σ (y_i - ŷ_i)^2
    - ∂SSE/∂slope      = Σ -2 * x_i * (y_i - ŷ_i)
    - ∂SSE/∂intercept  = Σ -2 * (y_i - ŷ_i)
    - чисельного диференціювання тут немає: потрібні відтворювані значення
      кроків, які збігаються з обчисленими вручну.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .dataset import Dataset

ArrayLike = np.ndarray

INTERCEPT = "intercept"
SLOPE = "slope"


# ---------------------------------------------------------------------------
# Схема параметрів прямої
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AffineModel:
    """
    Опис того, які коефіцієнти прямої є параметрами оптимізації.

    Атрибути:
        fit_intercept   - True: θ = (intercept, slope); False: θ = (slope,)
        fixed_intercept - значення intercept, якщо він не підбирається
    """
    fit_intercept: bool = True
    fixed_intercept: float = 0.0

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        if self.fit_intercept:
            return (INTERCEPT, SLOPE)
        return (SLOPE,)

    @property
    def n_parameters(self) -> int:
        return len(self.parameter_names)

    def index_of(self, name: str) -> int:
        return self.parameter_names.index(name)

    def pack(self, intercept: float, slope: float) -> np.ndarray:
        """Зібрати θ з коефіцієнтів прямої (intercept ігнорується, якщо він фіксований)."""
        if self.fit_intercept:
            return np.array([intercept, slope], dtype=float)
        return np.array([slope], dtype=float)

    def unpack(self, theta: ArrayLike) -> Tuple[float, float]:
        """Повернути (intercept, slope) для вектора θ."""
        theta = np.asarray(theta, dtype=float)
        if theta.shape != (self.n_parameters,):
            raise ValueError(
                f"Очікувався вектор параметрів форми ({self.n_parameters},), "
                f"отримано: {theta.shape}"
            )
        if self.fit_intercept:
            return float(theta[0]), float(theta[1])
        return float(self.fixed_intercept), float(theta[0])


# ---------------------------------------------------------------------------
# SSE та її градієнт
# ---------------------------------------------------------------------------

class LossFunction:
    """
    SSE(θ) для заданої вибірки.

    Для скінченних θ завжди повертає число; при переповненні inf/nan
    (без винятків), щоб двигун міг зафіксувати розбіжність.
    """

    def __init__(self, dataset: Dataset, model: AffineModel) -> None:
        self.dataset = dataset
        self.model = model

    def predict(self, theta: ArrayLike) -> np.ndarray:
        intercept, slope = self.model.unpack(theta)
        with np.errstate(over="ignore", invalid="ignore"):
            return intercept + slope * self.dataset.x

    def residuals(self, theta: ArrayLike) -> np.ndarray:
        """y_i - ŷ_i(θ)."""
        with np.errstate(over="ignore", invalid="ignore"):
            return self.dataset.y - self.predict(theta)

    def __call__(self, theta: ArrayLike) -> float:
        r = self.residuals(theta)
        with np.errstate(over="ignore", invalid="ignore"):
            return float(np.sum(r ** 2))


class GradientComputer:
    """
    Аналітичні частинні похідні SSE.

    d_slope / d_intercept рахуються окремо, бо послідовне оновлення
    (спочатку intercept, потім slope) перераховує похідну по slope
    вже з новим intercept.
    """

    def __init__(self, dataset: Dataset, model: AffineModel) -> None:
        self.dataset = dataset
        self.model = model
        self._loss = LossFunction(dataset, model)

    def d_slope(self, theta: ArrayLike) -> float:
        """∂SSE/∂slope = Σ -2 * x_i * (y_i - ŷ_i)."""
        r = self._loss.residuals(theta)
        with np.errstate(over="ignore", invalid="ignore"):
            return float(np.sum(-2.0 * self.dataset.x * r))

    def d_intercept(self, theta: ArrayLike) -> float:
        """∂SSE/∂intercept = Σ -2 * (y_i - ŷ_i)."""
        r = self._loss.residuals(theta)
        with np.errstate(over="ignore", invalid="ignore"):
            return float(np.sum(-2.0 * r))

    def __call__(self, theta: ArrayLike) -> np.ndarray:
        """Повний градієнт у порядку model.parameter_names."""
        if self.model.fit_intercept:
            return np.array([self.d_intercept(theta), self.d_slope(theta)], dtype=float)
        return np.array([self.d_slope(theta)], dtype=float)


__all__ = [
    "ArrayLike",
    "INTERCEPT",
    "SLOPE",
    "AffineModel",
    "LossFunction",
    "GradientComputer",
]
