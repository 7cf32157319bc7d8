"""src/smoothcast/forecasting/fitter.py"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Protocol, Sequence

import numpy as np
from scipy.optimize import minimize

from smoothcast.common.errors import OptimizationDidNotConverge
from smoothcast.forecasting.recursion import recurse
from smoothcast.modeling.baselines import BaselineModel
from smoothcast.modeling.ets import ETSModel


logger = logging.getLogger(__name__)

Objective = Callable[[np.ndarray], float]


@dataclass(frozen=True)
class MinimizeOutcome:
    x: np.ndarray
    fun: float
    success: bool
    message: str
    nfev: int


class Minimizer(Protocol):
    """Bounded minimizer: objective, start point, per-coordinate bounds."""
    def __call__(self, objective: Objective, x0: np.ndarray, bounds: Sequence[tuple[float, float]]) -> MinimizeOutcome: ...


@dataclass(frozen=True)
class ScipyMinimizer:
    """scipy.optimize.minimize with a bounded quasi-Newton method (L-BFGS-B by default)."""
    method: str = "L-BFGS-B"
    maxiter: int | None = None
    ftol: float | None = None

    def __call__(self, objective: Objective, x0: np.ndarray, bounds: Sequence[tuple[float, float]]) -> MinimizeOutcome:
        options: dict[str, Any] = {}
        if self.maxiter is not None:
            options["maxiter"] = int(self.maxiter)
        if self.ftol is not None:
            options["ftol"] = float(self.ftol)

        res = minimize(objective, x0, method=self.method, bounds=list(bounds), options=options or None)
        return MinimizeOutcome(
            x=np.asarray(res.x, dtype=float),
            fun=float(res.fun),
            success=bool(res.success),
            message=str(res.message),
            nfev=int(getattr(res, "nfev", 0)),
        )


@dataclass(frozen=True)
class FitOptions:
    """
    strict: raise OptimizationDidNotConverge when the minimizer reports
            failure instead of keeping the last point it reached.
    """
    minimizer: Minimizer = field(default_factory=ScipyMinimizer)
    strict: bool = False


@dataclass(frozen=True)
class FitDiagnostics:
    free: tuple[str, ...]
    advisories: tuple[str, ...]
    sse: float
    success: bool = True
    message: str = ""
    n_evaluations: int = 0
    trace: tuple[dict[str, float], ...] = ()


@dataclass(frozen=True)
class FittedModel:
    """
    An ETS configuration plus a complete set of parameter values.

    `model` is the caller's configuration, untouched; `params` maps every
    parameter name to a float (estimates for the ones that were free).
    `params` is a read-only view.
    """
    model: ETSModel
    params: Mapping[str, float]
    diagnostics: FitDiagnostics

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def h(self) -> int:
        return self.model.h

    @property
    def y(self) -> tuple[float, ...]:
        return self.model.y

    def __getitem__(self, name: str) -> float:
        return self.params[name]


def _fmt_params(params: Mapping[str, float]) -> str:
    return ", ".join(f"{k}={v:.6g}" for k, v in params.items())


def fit_ets(model: ETSModel, verbosity: int = 0, options: FitOptions | None = None) -> FittedModel:
    options = options or FitOptions()
    fixed = model.fixed_parameters()
    free = set(model.free_parameters())
    free_specs = [s for s in model.param_specs() if s.name in free]
    names = [s.name for s in free_specs]

    advisories: list[str] = []
    for name in names:
        logger.warning("No value given for '%s'; it will be estimated", name)
        advisories.append(f"No value given for '{name}'; it will be estimated")

    if not free_specs:
        result = recurse(model, fixed)
        return FittedModel(
            model=model,
            params=dict(fixed),
            diagnostics=FitDiagnostics(free=(), advisories=(), sse=result.sse),
        )

    trace: list[dict[str, float]] = []

    def objective(x: np.ndarray) -> float:
        # fresh mapping per evaluation; nothing shared between trial points
        trial = dict(fixed)
        trial.update(zip(names, (float(v) for v in x)))
        sse = recurse(model, trial).sse
        if verbosity > 0:
            logger.info("SSE: %.6g, %s", sse, _fmt_params(trial))
            trace.append({**trial, "sse": sse})
        return sse

    x0 = np.array([s.start(model.y) for s in free_specs], dtype=float)
    bounds = [s.bounds for s in free_specs]

    try:
        outcome = options.minimizer(objective, x0, bounds)
    except Exception as e:
        raise OptimizationDidNotConverge(
            f"Minimizer failed while estimating {names} for {type(model).__name__}: {e}"
        ) from e

    if not outcome.success:
        if options.strict:
            raise OptimizationDidNotConverge(
                f"Minimizer did not converge for {type(model).__name__}: {outcome.message}"
            )
        logger.warning("Minimizer did not converge (%s); keeping the last point reached.", outcome.message)

    estimates = {
        s.name: float(np.clip(v, s.lower, s.upper)) for s, v in zip(free_specs, outcome.x)
    }
    params = {name: estimates.get(name, fixed.get(name)) for name in model.parameters()}
    sse = recurse(model, params).sse
    if not np.isfinite(sse):
        raise OptimizationDidNotConverge(f"Non-finite SSE at the estimated parameters: {_fmt_params(params)}")

    if verbosity > 0:
        logger.info("Fitted %s: %s (SSE=%.6g)", type(model).__name__, _fmt_params(params), sse)

    return FittedModel(
        model=model,
        params=params,
        diagnostics=FitDiagnostics(
            free=tuple(names),
            advisories=tuple(advisories),
            sse=sse,
            success=outcome.success,
            message=outcome.message,
            n_evaluations=outcome.nfev,
            trace=tuple(trace),
        ),
    )


def fit(model: Any, verbosity: int = 0, options: FitOptions | None = None) -> Any:
    """
    Estimate the free parameters of an ETS configuration.

    Returns a FittedModel; the input is never modified. Baseline models have
    nothing to estimate and are returned as is.
    """
    if isinstance(model, BaselineModel):
        return model
    if isinstance(model, FittedModel):
        return model
    if isinstance(model, ETSModel):
        return fit_ets(model, verbosity=verbosity, options=options)
    raise TypeError(f"Unsupported model type: {type(model).__name__}")
