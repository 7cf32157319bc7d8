"""src/smoothcast/forecasting/evaluation.py"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from smoothcast.forecasting.recursion import RecursionResult


@dataclass(frozen=True)
class MetricPack:
    sse: float
    rmse: float
    mae: float

    def as_dict(self) -> dict[str, float]:
        return {"SSE": float(self.sse), "RMSE": float(self.rmse), "MAE": float(self.mae)}


def compute_metrics(y_true: Iterable[float], y_pred: Iterable[float]) -> MetricPack:
    yt = np.asarray(list(y_true), dtype=float)
    yp = np.asarray(list(y_pred), dtype=float)
    if yt.shape != yp.shape:
        raise ValueError(f"Shape mismatch: y_true {yt.shape} vs y_pred {yp.shape}")
    if yt.size == 0:
        nan = float("nan")
        return MetricPack(sse=nan, rmse=nan, mae=nan)

    err = yp - yt
    sse = float(np.sum(err**2))
    return MetricPack(
        sse=sse,
        rmse=float(np.sqrt(sse / yt.size)),
        mae=float(np.mean(np.abs(err))),
    )


def accuracy(y: Iterable[float], result: RecursionResult) -> MetricPack:
    """In-sample accuracy of the one-step-ahead values."""
    return compute_metrics(y, result.in_sample)
