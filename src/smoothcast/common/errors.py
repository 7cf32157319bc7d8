"""src/smoothcast/common/errors.py"""

from __future__ import annotations


class ForecastError(ValueError):
    """Base class for invalid model configurations."""


class EmptyInput(ForecastError):
    """The observation series has no values."""


class InvalidHorizon(ForecastError):
    """The forecast horizon is not a positive integer."""


class ParameterOutOfRange(ForecastError):
    """A caller-supplied parameter lies outside its admissible interval."""

    def __init__(self, name: str, value: float, lower: float, upper: float) -> None:
        self.name = name
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(f"{name}={value!r} needs to be in the range [{lower}, {upper}]")


class NonFiniteInput(ForecastError):
    """An observation or initial state value is NaN or infinite."""


class MissingSeasonalPeriod(ForecastError):
    """A seasonal model was built without a seasonal period m."""


class InvalidSeasonalPeriod(ForecastError):
    """The seasonal period is not usable (m <= 1, or longer than the series)."""


class SeasonLengthMismatch(ForecastError):
    """The initial season vector does not have exactly m entries."""


class NonNumericLevel(ForecastError):
    """A prediction-interval confidence level is not a number."""


class LevelOutOfRange(ForecastError):
    """A prediction-interval confidence level lies outside (0, 100)."""


class NotFitted(ForecastError):
    """predict() was called on a configuration that still has free parameters."""


class OptimizationDidNotConverge(RuntimeError):
    """The bounded minimizer failed while estimating free parameters."""
