"""tests/conftest.py"""

from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def short_series() -> list[float]:
    return [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.fixture
def trend_series() -> list[float]:
    # y_t = 2t + 1 for t = 1..20, no noise
    return [2.0 * t + 1.0 for t in range(1, 21)]


@pytest.fixture
def noisy_series() -> list[float]:
    rng = np.random.default_rng(7)
    base = 50.0 + np.cumsum(rng.normal(0.3, 1.0, size=30))
    return base.round(3).tolist()


@pytest.fixture
def seasonal_series() -> list[float]:
    # quarterly pattern on a gentle upward trend
    pattern = [3.0, -1.0, -4.0, 2.0]
    return [20.0 + 0.5 * t + pattern[t % 4] for t in range(24)]
