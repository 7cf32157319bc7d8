"""src/smoothcast/modeling/params.py"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union


@dataclass(frozen=True)
class Fixed:
    """A parameter pinned by the caller."""
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Free:
    """A parameter left for the fitter to estimate."""

    def __repr__(self) -> str:
        return "FREE"


FREE = Free()

Param = Union[Fixed, Free]


def as_param(value: Any) -> Param:
    """Normalize None / float / Fixed / Free into a Param."""
    if value is None:
        return FREE
    if isinstance(value, (Fixed, Free)):
        return value
    return Fixed(float(value))


def fixed_value(p: Param) -> float | None:
    return p.value if isinstance(p, Fixed) else None


@dataclass(frozen=True)
class ParamSpec:
    """
    How the fitter treats one parameter when it is free.

    seed: starting point, either a constant or a function of the series.
    """
    name: str
    lower: float
    upper: float
    seed: float | Callable[[Sequence[float]], float]

    @property
    def bounds(self) -> tuple[float, float]:
        return (self.lower, self.upper)

    def start(self, y: Sequence[float]) -> float:
        if callable(self.seed):
            return float(self.seed(y))
        return float(self.seed)


def first_observation(y: Sequence[float]) -> float:
    return float(y[0])


UNIT = (0.0, 1.0)
# optimizer box for phi; a caller-pinned phi must sit in the narrower range
DAMPING_FIT = (0.80, 0.995)
DAMPING_FIXED = (0.80, 0.98)
UNBOUNDED = (-math.inf, math.inf)
