"""tests/unit/test_intervals.py"""

from __future__ import annotations

import math

import pytest

from smoothcast.common.errors import LevelOutOfRange
from smoothcast.forecasting import fit, forecast, predict, predict_intervals, z_from_level
from smoothcast.modeling import SES, Holt, NaiveForecast


def test_ets_intervals_for_pinned_model() -> None:
    mdl = SES([3.0, 5.0, 4.0], h=2, alpha=0.5, init_level=2.0)
    res = predict_intervals(mdl, level=[95])
    # SSE = 7.3125 over 3 observations, nothing estimated
    sigma = math.sqrt(7.3125 / 3)
    half = z_from_level(95) * sigma
    assert res.forecast.tolist() == [3.875, 3.875]
    assert res.lower[0].tolist() == pytest.approx([3.875 - half] * 2)
    assert res.upper[0].tolist() == pytest.approx([3.875 + half] * 2)
    assert len(res.fittedvalues) == 5


def test_ets_intervals_use_estimated_parameter_count(noisy_series) -> None:
    fitted = fit(Holt(noisy_series, h=4))
    res = predict_intervals(fitted)
    sse = forecast(fitted).sse
    k = len(fitted.diagnostics.free)
    sigma = math.sqrt(sse / (len(noisy_series) - k))
    assert res.levels == (80.0, 95.0)
    assert (res.upper[1] - res.forecast).tolist() == pytest.approx([z_from_level(95) * sigma] * 4)
    assert res.forecast.tolist() == pytest.approx(predict(fitted).tolist())


def test_ets_interval_levels_validated() -> None:
    with pytest.raises(LevelOutOfRange):
        predict_intervals(SES([1.0, 2.0], alpha=0.5, init_level=1.0), level=[150])


def test_predict_intervals_on_baseline_matches_predict() -> None:
    mdl = NaiveForecast([2.0, 4.0], h=2)
    assert predict_intervals(mdl).upper.tolist() == predict(mdl).upper.tolist()
