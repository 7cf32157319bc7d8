"""
src/smoothcast/forecasting/recursion.py

State-space recursions for the exponential smoothing family.

Every function takes fully resolved parameters and returns the one-step-ahead
in-sample values followed by the h-step forecast, together with the sum of
squared one-step residuals. The loops are written out explicitly so the order
of floating point operations is fixed; results are bit-reproducible.

References:
    Hyndman, R.J., & Athanasopoulos, G. (2019) Forecasting: principles and
    practice, 3rd edition, OTexts: Melbourne, Australia. OTexts.com/fpp3.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np
import pandas as pd

from smoothcast.modeling.ets import SES, ETSModel, Holt, HoltWinters


@dataclass(frozen=True, eq=False)
class RecursionResult:
    """
    fitted: length n_obs + h; first n_obs entries are one-step-ahead values
            aligned with the observations, the rest is the forecast.
    sse: sum of squared one-step residuals over the observed part.
    """
    fitted: np.ndarray
    sse: float
    n_obs: int

    @property
    def in_sample(self) -> np.ndarray:
        return self.fitted[: self.n_obs]

    @property
    def forecast(self) -> np.ndarray:
        return self.fitted[self.n_obs:]

    def to_frame(self) -> pd.DataFrame:
        n_total = len(self.fitted)
        return pd.DataFrame(
            {
                "Step": np.arange(1 - self.n_obs, n_total - self.n_obs + 1, dtype=int),
                "Value": self.fitted.astype(float),
                "Kind": ["fitted"] * self.n_obs + ["forecast"] * (n_total - self.n_obs),
            }
        )


def ses_recursion(y: Sequence[float], h: int, alpha: float, init_level: float) -> RecursionResult:
    n = len(y)
    alpha = float(alpha)
    out = np.empty(n + h, dtype=float)

    level = float(init_level)
    sse = 0.0
    for t in range(n):
        out[t] = level
        err = level - y[t]
        sse += err * err
        level = alpha * y[t] + (1 - alpha) * level

    # flat forecast from the last level
    out[n:] = level
    return RecursionResult(fitted=out, sse=sse, n_obs=n)


def damped_trend_coefficient(phi: float, step: int, h: int) -> float:
    """
    Multiplier applied to the final trend at forecast step `step`.

    For a damped trend and step > 1 the geometric term is taken over the full
    horizon h rather than the step itself.
    """
    if phi == 1.0:
        return float(step)
    if step == 1:
        return phi
    return phi * (1 - phi ** h) / (1 - phi)


def holt_recursion(
    y: Sequence[float],
    h: int,
    alpha: float,
    beta: float,
    phi: float,
    init_level: float,
    init_trend: float,
) -> RecursionResult:
    n = len(y)
    alpha, beta, phi = float(alpha), float(beta), float(phi)
    out = np.empty(n + h, dtype=float)

    level = float(init_level)
    trend = float(init_trend)
    sse = 0.0
    for t in range(n):
        yhat = level + phi * trend
        out[t] = yhat
        err = yhat - y[t]
        sse += err * err

        prev_level = level
        level = alpha * y[t] + (1 - alpha) * (prev_level + phi * trend)
        trend = beta * (level - prev_level) + (1 - beta) * phi * trend

    for i in range(1, h + 1):
        out[n + i - 1] = level + damped_trend_coefficient(phi, i, h) * trend
    return RecursionResult(fitted=out, sse=sse, n_obs=n)


def holt_winters_recursion(
    y: Sequence[float],
    h: int,
    alpha: float,
    beta: float,
    gamma: float,
    m: int,
    init_level: float,
    init_trend: float,
    init_season: Sequence[float],
) -> RecursionResult:
    n = len(y)
    alpha, beta, gamma = float(alpha), float(beta), float(gamma)
    out = np.empty(n + h, dtype=float)

    # season[j] holds s_{j-m+1}: the first m slots are s_{1-m}..s_0
    season = [0.0] * (n + m)
    season[:m] = [float(s) for s in init_season]

    level = float(init_level)
    trend = float(init_trend)
    sse = 0.0
    for t in range(n):
        s_prev = season[t]  # s_{t-m}
        yhat = level + trend + s_prev
        out[t] = yhat
        err = yhat - y[t]
        sse += err * err

        prev_level, prev_trend = level, trend
        level = alpha * (y[t] - s_prev) + (1 - alpha) * (prev_level + prev_trend)
        trend = beta * (level - prev_level) + (1 - beta) * prev_trend
        season[t + m] = gamma * (y[t] - prev_level - prev_trend) + (1 - gamma) * s_prev

    for i in range(1, h + 1):
        k = (i - 1) // m
        out[n + i - 1] = level + i * trend + season[n + i - 1 - m * k]
    return RecursionResult(fitted=out, sse=sse, n_obs=n)


def recurse(model: ETSModel, params: Mapping[str, float]) -> RecursionResult:
    """Run the recursion matching the model variant with resolved parameters."""
    if isinstance(model, SES):
        return ses_recursion(model.y, model.h, params["alpha"], params["init_level"])
    if isinstance(model, Holt):
        return holt_recursion(
            model.y,
            model.h,
            params["alpha"],
            params["beta"],
            params["phi"],
            params["init_level"],
            params["init_trend"],
        )
    if isinstance(model, HoltWinters):
        return holt_winters_recursion(
            model.y,
            model.h,
            params["alpha"],
            params["beta"],
            params["gamma"],
            model.m,
            params["init_level"],
            params["init_trend"],
            model.init_season,
        )
    raise TypeError(f"Unsupported model type: {type(model).__name__}")
