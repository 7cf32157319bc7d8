"""src/smoothcast/forecasting/predict.py"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np

from smoothcast.common.errors import NotFitted
from smoothcast.forecasting.fitter import FittedModel
from smoothcast.forecasting.intervals import ForecastResults, baseline_intervals, residual_intervals
from smoothcast.forecasting.recursion import RecursionResult, recurse
from smoothcast.modeling.baselines import DEFAULT_LEVELS, BaselineModel
from smoothcast.modeling.ets import ETSModel
from smoothcast.validation.checks import check_levels


logger = logging.getLogger(__name__)


def _resolve(model: Any) -> tuple[ETSModel, dict[str, float], int]:
    """Return (configuration, complete parameter mapping, number of estimated parameters)."""
    if isinstance(model, FittedModel):
        return model.model, dict(model.params), len(model.diagnostics.free)
    if isinstance(model, ETSModel):
        free = model.free_parameters()
        if free:
            raise NotFitted(
                f"{type(model).__name__} has free parameters {list(free)}; call fit() before predict()."
            )
        return model, model.fixed_parameters(), 0
    raise TypeError(f"Unsupported model type: {type(model).__name__}")


def forecast(model: Any) -> RecursionResult:
    """Full recursion output: one-step in-sample values, the h forecasts and the SSE."""
    config, params, _ = _resolve(model)
    return recurse(config, params)


def predict(model: Any) -> np.ndarray | ForecastResults:
    """
    ETS (fitted, or fully pinned): the h-step point forecast.
    Baselines: ForecastResults with fitted values and interval matrices.
    """
    if isinstance(model, BaselineModel):
        return baseline_intervals(model)
    return forecast(model).forecast.copy()


def predict_intervals(model: Any, level: Sequence[float] = DEFAULT_LEVELS) -> ForecastResults:
    """Point forecast with residual-based normal intervals for an ETS model."""
    if isinstance(model, BaselineModel):
        return baseline_intervals(model)
    levels = check_levels(level)
    config, params, n_estimated = _resolve(model)
    result = recurse(config, params)
    logger.debug("Interval sigma based on SSE=%.6g over %d observations", result.sse, result.n_obs)
    return residual_intervals(model, result, levels, n_estimated=n_estimated)
