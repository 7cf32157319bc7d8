"""src/smoothcast/modeling/baselines.py"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from smoothcast.modeling.ets import DEFAULT_HORIZON
from smoothcast.validation.checks import check_horizon, check_levels, check_seasonal_period, check_series


DEFAULT_LEVELS = (80.0, 95.0)


@dataclass(frozen=True)
class BaselineModel:
    """
    Common fields for the baseline forecasters.

    level: confidence levels (percent) for the prediction intervals.
    """
    y: Sequence[float]
    h: int = DEFAULT_HORIZON
    level: Sequence[float] = DEFAULT_LEVELS

    def __post_init__(self) -> None:
        object.__setattr__(self, "y", check_series(self.y))
        object.__setattr__(self, "h", check_horizon(self.h))
        object.__setattr__(self, "level", check_levels(self.level))

    def point_forecast(self) -> np.ndarray:
        raise NotImplementedError


@dataclass(frozen=True)
class MeanForecast(BaselineModel):
    """Forecast = sample mean of the series, repeated."""

    def point_forecast(self) -> np.ndarray:
        return np.full(shape=(self.h,), fill_value=float(np.mean(self.y)), dtype=float)


@dataclass(frozen=True)
class NaiveForecast(BaselineModel):
    """Forecast = last observed value repeated."""

    def point_forecast(self) -> np.ndarray:
        return np.full(shape=(self.h,), fill_value=float(self.y[-1]), dtype=float)


@dataclass(frozen=True)
class SeasonalNaiveForecast(BaselineModel):
    """
    Forecast at step i = the observation in the same phase of the last
    observed season:
      yhat[T+i] = y[T + i - m*(k+1)],  k = (i-1) // m
    k is computed per step i, not from the horizon h, so every step stays
    inside the last observed season.
    """
    m: int | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "m", check_seasonal_period(self.m, n_obs=len(self.y)))

    def point_forecast(self) -> np.ndarray:
        n, m = len(self.y), self.m
        out = np.empty(self.h, dtype=float)
        for i in range(1, self.h + 1):
            k = (i - 1) // m
            out[i - 1] = self.y[n + i - m * (k + 1) - 1]
        return out
