"""src/smoothcast/validation/__init__.py"""

from __future__ import annotations

from .checks import (
    as_float_tuple,
    check_bounds,
    check_finite,
    check_horizon,
    check_levels,
    check_seasonal,
    check_seasonal_period,
    check_series,
)

__all__ = [
    "as_float_tuple",
    "check_bounds",
    "check_finite",
    "check_series",
    "check_horizon",
    "check_seasonal",
    "check_seasonal_period",
    "check_levels",
]
