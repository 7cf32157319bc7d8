"""src/smoothcast/modeling/__init__.py"""

from .baselines import BaselineModel, MeanForecast, NaiveForecast, SeasonalNaiveForecast
from .ets import SES, ETSModel, Holt, HoltWinters
from .params import FREE, Fixed, Free, Param, ParamSpec, as_param

__all__ = [
    "ETSModel",
    "SES",
    "Holt",
    "HoltWinters",
    "BaselineModel",
    "MeanForecast",
    "NaiveForecast",
    "SeasonalNaiveForecast",
    "Fixed",
    "Free",
    "FREE",
    "Param",
    "ParamSpec",
    "as_param",
]
