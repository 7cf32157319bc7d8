"""tests/unit/test_evaluation.py"""

from __future__ import annotations

import math

import pytest

from smoothcast.forecasting.evaluation import accuracy, compute_metrics
from smoothcast.forecasting.recursion import ses_recursion


def test_compute_metrics_basic() -> None:
    pack = compute_metrics([1.0, 2.0, 3.0], [1.0, 2.0, 4.0])
    # error: [0,0,1] -> SSE 1, RMSE sqrt(1/3), MAE 1/3
    assert pack.sse == 1.0
    assert pack.rmse == pytest.approx(math.sqrt(1.0 / 3.0))
    assert pack.mae == pytest.approx(1.0 / 3.0)


def test_compute_metrics_empty_returns_nan() -> None:
    pack = compute_metrics([], [])
    assert math.isnan(pack.sse)
    assert math.isnan(pack.rmse)
    assert math.isnan(pack.mae)


def test_compute_metrics_shape_mismatch() -> None:
    with pytest.raises(ValueError):
        compute_metrics([1.0, 2.0], [1.0])


def test_accuracy_agrees_with_recursion_sse() -> None:
    y = [3.0, 5.0, 4.0]
    res = ses_recursion(y, h=2, alpha=0.5, init_level=2.0)
    pack = accuracy(y, res)
    assert pack.sse == pytest.approx(res.sse)
    assert set(pack.as_dict()) == {"SSE", "RMSE", "MAE"}
