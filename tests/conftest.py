import numpy as np
import pytest

from regressionAPP.core.dataset import Dataset


def ols_fit(dataset):
    """Закрита формула OLS як еталон: (intercept, slope)."""
    slope, intercept = np.polyfit(dataset.x, dataset.y, deg=1)
    return float(intercept), float(slope)


@pytest.fixture
def three_points():
    return Dataset.from_pairs([(0.0, 1.0), (1.0, 3.0), (2.0, 10.0)])


@pytest.fixture
def noisy_line():
    rng = np.random.default_rng(12345)
    x = np.linspace(0.0, 3.0, 25)
    y = 2.0 - 1.5 * x + rng.normal(scale=0.3, size=x.size)
    return Dataset(x, y)
