"""
dataset.py

Незмінна вибірка пар (x, y) для задачі лінійної регресії.

Формат:
    - x, y зберігаються як numpy.ndarray (float64) однакової довжини;
    - після створення масиви позначені як read-only;
    - порожня вибірка не допускається (SSE та градієнт на ній не визначені).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import numpy as np


class DatasetError(ValueError):
    """Некоректні вхідні дані для Dataset."""


@dataclass(frozen=True, init=False)
class Dataset:
    """
    Впорядкована послідовність пар (x_i, y_i).

    Атрибути:
        x - значення незалежної змінної (float64, read-only)
        y - значення залежної змінної (float64, read-only)

    Повтори серед x допускаються.
    """
    x: np.ndarray
    y: np.ndarray

    def __init__(self, x: Iterable[float], y: Iterable[float]) -> None:
        try:
            x_arr = np.array(x, dtype=float)
            y_arr = np.array(y, dtype=float)
        except (TypeError, ValueError) as exc:
            raise DatasetError(f"Dataset: x та y повинні бути числами ({exc}).") from exc

        if x_arr.ndim != 1 or y_arr.ndim != 1:
            raise DatasetError("Dataset: x та y повинні бути одновимірними.")
        if x_arr.shape != y_arr.shape:
            raise DatasetError(
                f"Dataset: довжини x ({x_arr.size}) та y ({y_arr.size}) не збігаються."
            )
        if x_arr.size == 0:
            raise DatasetError("Dataset: вибірка не може бути порожньою.")
        if not (np.all(np.isfinite(x_arr)) and np.all(np.isfinite(y_arr))):
            raise DatasetError("Dataset: усі значення x та y повинні бути скінченними.")

        x_arr.setflags(write=False)
        y_arr.setflags(write=False)

        object.__setattr__(self, "x", x_arr)
        object.__setattr__(self, "y", y_arr)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, float]]) -> "Dataset":
        """Створити Dataset зі списку пар [(x1, y1), (x2, y2), ...]."""
        pairs = list(pairs)
        if not pairs:
            raise DatasetError("Dataset: вибірка не може бути порожньою.")
        for i, item in enumerate(pairs):
            try:
                size = len(item)
            except TypeError:
                size = None
            if size != 2:
                raise DatasetError(
                    f"Dataset: елемент {i} має бути парою (x, y), отримано: {item!r}"
                )
        xs, ys = zip(*pairs)
        return cls(xs, ys)

    def __len__(self) -> int:
        return int(self.x.size)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(self.pairs())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return bool(np.array_equal(self.x, other.x) and np.array_equal(self.y, other.y))

    def __hash__(self) -> int:
        return hash((self.x.tobytes(), self.y.tobytes()))

    def pairs(self) -> List[Tuple[float, float]]:
        return [(float(xi), float(yi)) for xi, yi in zip(self.x, self.y)]

    @property
    def n_distinct_x(self) -> int:
        """Кількість різних значень x (для однозначності OLS потрібно >= 2)."""
        return int(np.unique(self.x).size)


__all__ = [
    "Dataset",
    "DatasetError",
]
