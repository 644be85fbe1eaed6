"""
config.py

Гіперпараметри запуску градієнтного спуску та їх перевірка.

Некоректна конфігурація відхиляється ще до першої ітерації
(ConfigurationError), інакше цикл міг би крутитися без кінця
або рухатися не в бік мінімуму.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, replace as dc_replace
from typing import Any

from .functions import AffineModel

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Порядок оновлення параметрів (для схеми intercept + slope)
# ---------------------------------------------------------------------------

# спочатку intercept, потім slope з похідною, перерахованою при новому intercept
UPDATE_SEQUENTIAL = "sequential"
# обидві похідні в одній точці θ_k (Jacobi)
UPDATE_SIMULTANEOUS = "simultaneous"

UPDATE_ORDERS = (UPDATE_SEQUENTIAL, UPDATE_SIMULTANEOUS)


class ConfigurationError(ValueError):
    """Некоректні гіперпараметри запуску."""


def _reject(message: str) -> None:
    logger.debug("Конфігурацію відхилено: %s", message)
    raise ConfigurationError(message)


# ---------------------------------------------------------------------------
# Перевірки окремих значень (спільні для Hyperparameters, Optimizer,
# критеріїв зупинки та OptimizationEngine.run)
# ---------------------------------------------------------------------------

def check_learning_rate(value: Any) -> float:
    """learning_rate: скінченне число > 0."""
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        _reject(f"learning_rate має бути числом, отримано: {value!r}")
    if not math.isfinite(value) or value <= 0.0:
        _reject(f"learning_rate має бути скінченним і > 0, отримано: {value}")
    return float(value)


def check_max_steps(value: Any) -> int:
    """max_steps: ціле число > 0."""
    if not isinstance(value, numbers.Integral) or isinstance(value, bool):
        _reject(f"max_steps має бути цілим числом, отримано: {value!r}")
    if value <= 0:
        _reject(f"max_steps має бути > 0, отримано: {value}")
    return int(value)


def check_threshold(name: str, value: Any) -> float:
    """Поріг збіжності (min_step, min_loss_delta): число >= 0, не NaN."""
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        _reject(f"{name} має бути числом, отримано: {value!r}")
    if math.isnan(value) or value < 0.0:
        _reject(f"{name} має бути >= 0, отримано: {value}")
    return float(value)


def check_finite(name: str, value: Any) -> float:
    if not isinstance(value, numbers.Real) or isinstance(value, bool) \
            or not math.isfinite(value):
        _reject(f"{name} має бути скінченним числом, отримано: {value!r}")
    return float(value)


def check_flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        _reject(f"{name} має бути bool, отримано: {value!r}")
    return value


@dataclass(frozen=True)
class Hyperparameters:
    """
    Налаштування одного запуску.

    Атрибути:
        initial_slope      : початкове значення slope
        learning_rate      : множник градієнта (> 0)
        min_step           : поріг збіжності для max |step_i| (>= 0)
        max_steps          : жорстке обмеження кількості ітерацій (> 0)
        initial_intercept  : початковий intercept (лише якщо fit_intercept)
        fit_intercept      : True - підбираємо (intercept, slope); False - лише slope
        fixed_intercept    : intercept, що тримається сталим при fit_intercept = False
        update_order       : "sequential" (за замовчуванням) або "simultaneous"
        detect_divergence  : зупиняти цикл зі станом DIVERGED при inf/nan
    """
    initial_slope: float = 0.0
    learning_rate: float = 0.01
    min_step: float = 1e-3
    max_steps: int = 1000
    initial_intercept: float = 0.0
    fit_intercept: bool = True
    fixed_intercept: float = 0.0
    update_order: str = UPDATE_SEQUENTIAL
    detect_divergence: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        check_learning_rate(self.learning_rate)
        check_max_steps(self.max_steps)
        check_threshold("min_step", self.min_step)

        for name in ("initial_slope", "initial_intercept", "fixed_intercept"):
            check_finite(name, getattr(self, name))

        check_flag("fit_intercept", self.fit_intercept)
        check_flag("detect_divergence", self.detect_divergence)

        if self.update_order not in UPDATE_ORDERS:
            _reject(
                f"Невідомий порядок оновлення: {self.update_order!r} "
                f"(допустимі: {', '.join(UPDATE_ORDERS)})"
            )

        if not self.fit_intercept and self.initial_intercept != 0.0:
            logger.debug(
                "fit_intercept = False: initial_intercept=%g ігнорується, "
                "використовується fixed_intercept=%g",
                self.initial_intercept, self.fixed_intercept,
            )

    # ------------------------------------------------------------------
    # Похідні величини
    # ------------------------------------------------------------------

    @property
    def model(self) -> AffineModel:
        return AffineModel(
            fit_intercept=self.fit_intercept,
            fixed_intercept=float(self.fixed_intercept),
        )

    @property
    def initial_parameters(self):
        """Початковий вектор θ_0 у порядку model.parameter_names."""
        return self.model.pack(float(self.initial_intercept), float(self.initial_slope))

    def replace(self, **changes: Any) -> "Hyperparameters":
        """Копія з іншими значеннями полів (нова копія проходить перевірку)."""
        return dc_replace(self, **changes)


__all__ = [
    "UPDATE_SEQUENTIAL",
    "UPDATE_SIMULTANEOUS",
    "UPDATE_ORDERS",
    "ConfigurationError",
    "check_learning_rate",
    "check_max_steps",
    "check_threshold",
    "check_finite",
    "check_flag",
    "Hyperparameters",
]
