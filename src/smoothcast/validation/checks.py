"""src/smoothcast/validation/checks.py"""

from __future__ import annotations

import math
import numbers
from typing import Any, Iterable

import numpy as np

from smoothcast.common.errors import (
    EmptyInput,
    InvalidHorizon,
    InvalidSeasonalPeriod,
    LevelOutOfRange,
    MissingSeasonalPeriod,
    NonFiniteInput,
    NonNumericLevel,
    ParameterOutOfRange,
    SeasonLengthMismatch,
)


def as_float_tuple(values: Any) -> tuple[float, ...]:
    if values is None:
        return ()
    return tuple(float(v) for v in np.asarray(values, dtype=float).ravel())


def check_bounds(value: float | None, name: str, lower: float = 0.0, upper: float = 1.0) -> None:
    """Raise ParameterOutOfRange if value is set and outside [lower, upper]."""
    if value is None:
        return
    v = float(value)
    if not math.isfinite(v) or v < lower or v > upper:
        raise ParameterOutOfRange(name, v, lower, upper)


def check_series(y: Any) -> tuple[float, ...]:
    values = as_float_tuple(y)
    if len(values) <= 0:
        raise EmptyInput("The input series is empty.")
    if not np.all(np.isfinite(values)):
        raise NonFiniteInput("The input series contains NaN or infinite values.")
    return values


def check_finite(value: float | None, name: str) -> None:
    """Raise NonFiniteInput if an unbounded value (initial state) is set to NaN or +-inf."""
    if value is not None and not math.isfinite(float(value)):
        raise NonFiniteInput(f"{name} must be a finite number, got {value!r}")


def check_horizon(h: Any) -> int:
    if isinstance(h, bool) or not isinstance(h, numbers.Integral):
        raise InvalidHorizon(f"h must be a positive integer, got {h!r}")
    if h <= 0:
        raise InvalidHorizon(f"The number of prediction steps must be positive, got h={h}")
    return int(h)


def check_seasonal_period(m: Any, *, n_obs: int | None = None) -> int:
    if m is None:
        raise MissingSeasonalPeriod("A seasonal period m is required for seasonal models.")
    if isinstance(m, bool) or not isinstance(m, numbers.Integral):
        raise InvalidSeasonalPeriod(f"m must be an integer, got {m!r}")
    if m <= 1:
        raise InvalidSeasonalPeriod(f"m must be > 1, got m={m}")
    if n_obs is not None and m > n_obs:
        raise InvalidSeasonalPeriod(f"m={m} exceeds the series length ({n_obs})")
    return int(m)


def check_seasonal(m: Any, init_season: Any) -> tuple[int, tuple[float, ...]]:
    """Validate m together with the caller-supplied initial season vector."""
    period = check_seasonal_period(m)
    if init_season is None:
        raise SeasonLengthMismatch(f"init_season is required and must have length m={period}")
    season = as_float_tuple(init_season)
    if len(season) != period:
        raise SeasonLengthMismatch(f"init_season has length {len(season)}, expected m={period}")
    if not np.all(np.isfinite(season)):
        raise NonFiniteInput("init_season contains NaN or infinite values.")
    return period, season


def check_levels(level: Iterable[Any]) -> tuple[float, ...]:
    """Confidence levels must be numeric and lie strictly between 0 and 100."""
    out: list[float] = []
    for lv in level:
        if isinstance(lv, bool) or not isinstance(lv, numbers.Real):
            raise NonNumericLevel(f"Ensure that all level inputs are numeric, got {lv!r}")
        if not (0.0 < float(lv) < 100.0):
            raise LevelOutOfRange(f"Confidence levels must be in the interval (0, 100), got {lv!r}")
        out.append(float(lv))
    return tuple(out)
