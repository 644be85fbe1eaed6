"""
iteration_result.py

Структура даних для представлення результатів окремих ітерацій
градієнтного спуску. Використовується движком (траса запуску) та
зовнішнім шаром візуалізації (криві SSE, точки траєкторії).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np


@dataclass
class StepRecord:
    """
    Опис однієї завершеної ітерації.

    Атрибути:
        index          - номер ітерації (1, 2, 3, ...)
        parameters     - вектор параметрів θ_k після оновлення
        loss           - SSE(θ_k)
        step           - знакове оновлення, яке було віднято від кожного параметра
        step_magnitude - max |step_i| (для одного параметра = |step|)
        gradient       - значення похідних, використані для оновлення
        meta           - довільна додаткова інформація (порядок оновлення, ...)
    """
    index: int
    parameters: np.ndarray
    loss: float
    step: np.ndarray
    step_magnitude: float
    gradient: np.ndarray
    meta: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "StepRecord",
]
