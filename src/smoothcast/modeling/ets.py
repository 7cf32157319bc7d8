"""src/smoothcast/modeling/ets.py"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from smoothcast.modeling.params import (
    DAMPING_FIT,
    DAMPING_FIXED,
    UNBOUNDED,
    UNIT,
    Fixed,
    Free,
    Param,
    ParamSpec,
    as_param,
    first_observation,
    fixed_value,
)
from smoothcast.validation.checks import check_bounds, check_finite, check_horizon, check_seasonal, check_series


logger = logging.getLogger(__name__)

DEFAULT_HORIZON = 5


class ETSModel:
    """
    Shared behaviour of the exponential smoothing configurations.

    Subclasses are frozen dataclasses; parameters are stored as Fixed/Free.
    """

    y: tuple[float, ...]
    h: int

    def parameters(self) -> dict[str, Param]:
        raise NotImplementedError

    def param_specs(self) -> tuple[ParamSpec, ...]:
        raise NotImplementedError

    def free_parameters(self) -> tuple[str, ...]:
        return tuple(name for name, p in self.parameters().items() if isinstance(p, Free))

    def fixed_parameters(self) -> dict[str, float]:
        return {name: p.value for name, p in self.parameters().items() if isinstance(p, Fixed)}

    @property
    def is_resolved(self) -> bool:
        return not self.free_parameters()


def _init_common(model: ETSModel, smoothing: Sequence[str]) -> None:
    object.__setattr__(model, "y", check_series(model.y))
    object.__setattr__(model, "h", check_horizon(model.h))
    for name in smoothing:
        p = as_param(getattr(model, name))
        check_bounds(fixed_value(p), name, *UNIT)
        object.__setattr__(model, name, p)
    for name in ("init_level", "init_trend"):
        if hasattr(model, name):
            p = as_param(getattr(model, name))
            check_finite(fixed_value(p), name)
            object.__setattr__(model, name, p)


@dataclass(frozen=True)
class SES(ETSModel):
    """
    Simple exponential smoothing: level only, flat forecast.

    Parameters left as None are estimated by fit():
      alpha in [0, 1], init_level unconstrained.
    """
    y: Sequence[float]
    h: int = DEFAULT_HORIZON
    alpha: Param | float | None = None
    init_level: Param | float | None = None

    def __post_init__(self) -> None:
        _init_common(self, ("alpha",))

    def parameters(self) -> dict[str, Param]:
        return {"alpha": self.alpha, "init_level": self.init_level}

    def param_specs(self) -> tuple[ParamSpec, ...]:
        return (
            ParamSpec("alpha", *UNIT, seed=0.0),
            ParamSpec("init_level", *UNBOUNDED, seed=first_observation),
        )


@dataclass(frozen=True)
class Holt(ETSModel):
    """
    Holt's linear trend method, optionally damped.

    damped=False and phi=None pins phi to 1 (no damping). An explicit phi
    always wins: with damped=False it switches damping on and logs a warning.
    A caller-supplied phi must lie in [0.80, 0.98].
    """
    y: Sequence[float]
    h: int = DEFAULT_HORIZON
    alpha: Param | float | None = None
    beta: Param | float | None = None
    phi: Param | float | None = None
    init_level: Param | float | None = None
    init_trend: Param | float | None = None
    damped: bool = False

    def __post_init__(self) -> None:
        _init_common(self, ("alpha", "beta"))

        phi = as_param(self.phi)
        damped = bool(self.damped)
        if not damped and phi == Fixed(1.0):
            pass  # undamped record, phi already pinned
        elif not damped and isinstance(phi, Fixed):
            check_bounds(phi.value, "phi", *DAMPING_FIXED)
            logger.warning("damped=False but phi=%s was given; damping will be applied.", phi.value)
            damped = True
        elif not damped:
            phi = Fixed(1.0)
        else:
            check_bounds(fixed_value(phi), "phi", *DAMPING_FIXED)

        object.__setattr__(self, "phi", phi)
        object.__setattr__(self, "damped", damped)

    def parameters(self) -> dict[str, Param]:
        return {
            "alpha": self.alpha,
            "beta": self.beta,
            "phi": self.phi,
            "init_level": self.init_level,
            "init_trend": self.init_trend,
        }

    def param_specs(self) -> tuple[ParamSpec, ...]:
        return (
            ParamSpec("alpha", *UNIT, seed=0.1),
            ParamSpec("beta", *UNIT, seed=0.1),
            ParamSpec("phi", *DAMPING_FIT, seed=0.9),
            ParamSpec("init_level", *UNBOUNDED, seed=first_observation),
            ParamSpec("init_trend", *UNBOUNDED, seed=first_observation),
        )


@dataclass(frozen=True)
class HoltWinters(ETSModel):
    """
    Additive Holt-Winters with seasonal period m.

    init_season = (s_{1-m}, ..., s_0) is always supplied by the caller and is
    never estimated.
    """
    y: Sequence[float]
    h: int = DEFAULT_HORIZON
    alpha: Param | float | None = None
    beta: Param | float | None = None
    gamma: Param | float | None = None
    m: int | None = None
    init_level: Param | float | None = None
    init_trend: Param | float | None = None
    init_season: Sequence[float] | None = None

    def __post_init__(self) -> None:
        _init_common(self, ("alpha", "beta", "gamma"))
        m, season = check_seasonal(self.m, self.init_season)
        object.__setattr__(self, "m", m)
        object.__setattr__(self, "init_season", season)

    def parameters(self) -> dict[str, Param]:
        return {
            "alpha": self.alpha,
            "beta": self.beta,
            "gamma": self.gamma,
            "init_level": self.init_level,
            "init_trend": self.init_trend,
        }

    def param_specs(self) -> tuple[ParamSpec, ...]:
        return (
            ParamSpec("alpha", *UNIT, seed=0.0),
            ParamSpec("beta", *UNIT, seed=0.0),
            ParamSpec("gamma", *UNIT, seed=0.0),
            ParamSpec("init_level", *UNBOUNDED, seed=first_observation),
            ParamSpec("init_trend", *UNBOUNDED, seed=first_observation),
        )
