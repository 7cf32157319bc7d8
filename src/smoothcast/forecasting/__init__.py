"""src/smoothcast/forecasting/__init__.py"""

from .evaluation import MetricPack, accuracy, compute_metrics
from .fitter import FitDiagnostics, FitOptions, FittedModel, MinimizeOutcome, ScipyMinimizer, fit
from .intervals import ForecastResults, z_from_level
from .predict import forecast, predict, predict_intervals
from .recursion import (
    RecursionResult,
    damped_trend_coefficient,
    holt_recursion,
    holt_winters_recursion,
    recurse,
    ses_recursion,
)

__all__ = [
    "fit",
    "predict",
    "forecast",
    "predict_intervals",
    "FitOptions",
    "FitDiagnostics",
    "FittedModel",
    "MinimizeOutcome",
    "ScipyMinimizer",
    "ForecastResults",
    "z_from_level",
    "RecursionResult",
    "recurse",
    "ses_recursion",
    "holt_recursion",
    "holt_winters_recursion",
    "damped_trend_coefficient",
    "MetricPack",
    "compute_metrics",
    "accuracy",
]
