"""src/smoothcast/forecasting/intervals.py"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
import pandas as pd
from scipy.stats import norm

from smoothcast.forecasting.recursion import RecursionResult
from smoothcast.modeling.baselines import BaselineModel, MeanForecast


# z multipliers used by the mean forecast, independent of the requested levels
MEAN_Z = ((80.0, 1.28), (95.0, 1.96))


@dataclass(frozen=True, eq=False)
class ForecastResults:
    """
    Point forecast plus prediction intervals.

    fittedvalues: length T + h (in-sample part followed by the forecast).
    lower/upper: shape (len(levels), h); row i belongs to levels[i].
    """
    model: Any
    fittedvalues: np.ndarray
    lower: np.ndarray
    upper: np.ndarray
    levels: tuple[float, ...]

    @property
    def h(self) -> int:
        return int(self.lower.shape[1])

    @property
    def forecast(self) -> np.ndarray:
        return self.fittedvalues[-self.h:]

    def to_frame(self) -> pd.DataFrame:
        out = pd.DataFrame(
            {
                "Step": np.arange(1, self.h + 1, dtype=int),
                "Forecast": self.forecast.astype(float),
            }
        )
        for i, lv in enumerate(self.levels):
            tag = f"{lv:g}"
            out[f"Lower_{tag}"] = self.lower[i].astype(float)
            out[f"Upper_{tag}"] = self.upper[i].astype(float)
        return out


def z_from_level(level: float) -> float:
    """Two-sided standard normal quantile for a level given in percent (95 -> ~1.96)."""
    return float(norm.ppf(0.5 * (1 + float(level) / 100)))


def mean_forecast_intervals(model: MeanForecast) -> ForecastResults:
    """
    Residual-based intervals around the sample mean.

    sigma = sqrt(sum((y - mean)^2) / (T - K)) with K = 0. The first step uses
    sigma directly, later steps are inflated by sqrt(1 + 1/T).
    """
    y = np.asarray(model.y, dtype=float)
    n = y.size
    point = model.point_forecast()

    k = 0
    resid = y - float(np.mean(y))
    sigma = math.sqrt(float(np.sum(resid**2)) / (n - k))

    scale = np.full(model.h, math.sqrt(1 + 1 / n), dtype=float)
    scale[0] = 1.0

    lower = np.zeros((len(MEAN_Z), model.h), dtype=float)
    upper = np.zeros((len(MEAN_Z), model.h), dtype=float)
    for i, (_, z) in enumerate(MEAN_Z):
        half = z * sigma * scale
        lower[i, :] = point - half
        upper[i, :] = point + half

    return ForecastResults(
        model=model,
        fittedvalues=np.concatenate([y, point]),
        lower=lower,
        upper=upper,
        levels=tuple(lv for lv, _ in MEAN_Z),
    )


def scaled_point_intervals(model: BaselineModel) -> ForecastResults:
    """
    Intervals whose half-width is the normal quantile times the point
    forecast itself (naive and seasonal naive).
    """
    y = np.asarray(model.y, dtype=float)
    point = model.point_forecast()

    lower = np.zeros((len(model.level), model.h), dtype=float)
    upper = np.zeros((len(model.level), model.h), dtype=float)
    for i, lv in enumerate(model.level):
        qq = z_from_level(lv)
        lower[i, :] = point - qq * point
        upper[i, :] = point + qq * point

    return ForecastResults(
        model=model,
        fittedvalues=np.concatenate([y, point]),
        lower=lower,
        upper=upper,
        levels=tuple(model.level),
    )


def baseline_intervals(model: BaselineModel) -> ForecastResults:
    if isinstance(model, MeanForecast):
        return mean_forecast_intervals(model)
    return scaled_point_intervals(model)


def residual_intervals(
    model: Any,
    result: RecursionResult,
    levels: Sequence[float],
    n_estimated: int = 0,
) -> ForecastResults:
    """
    Normal intervals for an ETS forecast with constant width z * sigma, where
    sigma = sqrt(SSE / (T - K)) and K counts the estimated parameters.
    """
    n = result.n_obs
    dof = n - n_estimated if n > n_estimated else n
    sigma = math.sqrt(result.sse / dof)
    point = result.forecast

    lower = np.zeros((len(levels), point.size), dtype=float)
    upper = np.zeros((len(levels), point.size), dtype=float)
    for i, lv in enumerate(levels):
        half = z_from_level(lv) * sigma
        lower[i, :] = point - half
        upper[i, :] = point + half

    return ForecastResults(
        model=model,
        fittedvalues=result.fitted.copy(),
        lower=lower,
        upper=upper,
        levels=tuple(float(lv) for lv in levels),
    )
