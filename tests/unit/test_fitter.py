"""tests/unit/test_fitter.py"""

from __future__ import annotations

import copy
import logging

import numpy as np
import pytest

from smoothcast.common.errors import NotFitted, OptimizationDidNotConverge
from smoothcast.forecasting import FitOptions, FittedModel, MinimizeOutcome, fit, forecast, predict
from smoothcast.forecasting.recursion import recurse
from smoothcast.modeling import FREE, SES, Fixed, Holt, HoltWinters, MeanForecast


def test_predict_length_matches_horizon(noisy_series, seasonal_series) -> None:
    models = [
        SES(noisy_series, h=7),
        Holt(noisy_series, h=3),
        Holt(noisy_series, h=4, damped=True),
        HoltWinters(seasonal_series, h=9, m=4, init_season=[3.0, -1.0, -4.0, 2.0]),
    ]
    for mdl in models:
        yhat = predict(fit(mdl))
        assert yhat.shape == (mdl.h,)
        assert np.all(np.isfinite(yhat))


def test_fit_does_not_mutate_input(noisy_series) -> None:
    mdl = Holt(noisy_series, h=5, beta=0.2, damped=True)
    snapshot = copy.deepcopy(mdl)
    fields_before = dict(vars(mdl))

    fitted = fit(mdl)

    assert mdl == snapshot
    assert dict(vars(mdl)) == fields_before
    assert mdl.alpha is FREE
    assert mdl.phi is FREE
    assert fitted.model is mdl
    assert isinstance(fitted, FittedModel)


def test_pinned_parameters_are_kept(noisy_series) -> None:
    fitted = fit(Holt(noisy_series, alpha=0.3, init_trend=0.0))
    assert fitted.params["alpha"] == 0.3
    assert fitted.params["init_trend"] == 0.0
    assert fitted.params["phi"] == 1.0
    assert set(fitted.diagnostics.free) == {"beta", "init_level"}


def test_estimates_respect_bounds(noisy_series, seasonal_series) -> None:
    holt = fit(Holt(noisy_series, damped=True))
    for name in ("alpha", "beta"):
        assert 0.0 <= holt[name] <= 1.0
    assert 0.80 <= holt["phi"] <= 0.995

    hw = fit(HoltWinters(seasonal_series, m=4, init_season=[3.0, -1.0, -4.0, 2.0]))
    for name in ("alpha", "beta", "gamma"):
        assert 0.0 <= hw[name] <= 1.0
    assert "init_season" not in hw.params


def test_fit_does_not_increase_sse_from_seed(noisy_series) -> None:
    mdl = SES(noisy_series, init_level=noisy_series[0])
    seed_sse = recurse(mdl, {"alpha": 0.0, "init_level": noisy_series[0]}).sse
    fitted = fit(mdl)
    assert fitted.diagnostics.sse <= seed_sse
    assert fitted.diagnostics.sse == pytest.approx(forecast(fitted).sse)


def test_constant_series_forecasts_constant() -> None:
    fitted = fit(SES([5.0] * 12, h=3))
    assert predict(fitted) == pytest.approx([5.0, 5.0, 5.0])


def test_holt_tracks_linear_trend(trend_series) -> None:
    fitted = fit(Holt(trend_series, h=3))
    # y_t = 2t + 1 continues as 43, 45, 47
    assert predict(fitted) == pytest.approx([43.0, 45.0, 47.0], rel=0.02)


def test_nothing_free_skips_optimizer(short_series) -> None:
    def exploding_minimizer(objective, x0, bounds):
        raise AssertionError("should not be called")

    mdl = SES(short_series, alpha=0.5, init_level=1.0)
    fitted = fit(mdl, options=FitOptions(minimizer=exploding_minimizer))
    assert fitted.params == {"alpha": 0.5, "init_level": 1.0}
    assert fitted.diagnostics.free == ()
    assert fitted.diagnostics.advisories == ()


def test_advisory_for_each_free_parameter(short_series, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="smoothcast"):
        fitted = fit(SES(short_series, alpha=0.4))
    assert "'init_level'; it will be estimated" in caplog.text
    assert "'alpha'" not in caplog.text
    assert len(fitted.diagnostics.advisories) == 1


def test_damping_advisory_when_phi_given_without_damped(short_series, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="smoothcast"):
        mdl = Holt(short_series, phi=0.9)
    assert "damping will be applied" in caplog.text
    assert mdl.damped is True
    assert mdl.phi == Fixed(0.9)


def test_verbosity_records_trace(short_series, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="smoothcast"):
        fitted = fit(SES(short_series, init_level=1.0), verbosity=1)
    trace = fitted.diagnostics.trace
    assert len(trace) > 0
    assert all("sse" in row and "alpha" in row for row in trace)
    assert "SSE:" in caplog.text

    quiet = fit(SES(short_series, init_level=1.0))
    assert quiet.diagnostics.trace == ()


def test_minimizer_exception_is_surfaced(short_series) -> None:
    def broken(objective, x0, bounds):
        raise RuntimeError("line search failed")

    with pytest.raises(OptimizationDidNotConverge) as exc:
        fit(SES(short_series), options=FitOptions(minimizer=broken))
    assert isinstance(exc.value.__cause__, RuntimeError)


def _stalled(objective, x0, bounds):
    return MinimizeOutcome(x=np.asarray(x0), fun=objective(x0), success=False, message="budget exhausted", nfev=1)


def test_non_converged_result_kept_unless_strict(short_series) -> None:
    fitted = fit(SES(short_series), options=FitOptions(minimizer=_stalled))
    assert fitted.diagnostics.success is False
    assert fitted.params == {"alpha": 0.0, "init_level": 1.0}

    with pytest.raises(OptimizationDidNotConverge):
        fit(SES(short_series), options=FitOptions(minimizer=_stalled, strict=True))


def test_seeds_follow_variant(short_series, seasonal_series) -> None:
    seen = {}

    def record(objective, x0, bounds):
        seen["x0"] = list(x0)
        seen["bounds"] = list(bounds)
        return _stalled(objective, x0, bounds)

    fit(Holt(short_series, damped=True), options=FitOptions(minimizer=record))
    assert seen["x0"] == [0.1, 0.1, 0.9, 1.0, 1.0]
    assert seen["bounds"][2] == (0.80, 0.995)

    fit(HoltWinters(seasonal_series, m=4, init_season=[0, 0, 0, 0]), options=FitOptions(minimizer=record))
    assert seen["x0"] == [0.0, 0.0, 0.0, seasonal_series[0], seasonal_series[0]]


def test_predict_requires_resolved_parameters(short_series) -> None:
    with pytest.raises(NotFitted):
        predict(SES(short_series, alpha=0.5))
    # fully pinned configurations predict without fit
    yhat = predict(SES(short_series, h=2, alpha=1.0, init_level=0.0))
    assert yhat.tolist() == [5.0, 5.0]


def test_fit_passes_baselines_through(short_series) -> None:
    mdl = MeanForecast(short_series)
    assert fit(mdl) is mdl
    with pytest.raises(TypeError):
        fit("not a model")


def test_predict_is_repeatable(noisy_series) -> None:
    fitted = fit(SES(noisy_series))
    assert np.array_equal(predict(fitted), predict(fitted))


def test_fitted_params_are_read_only(short_series) -> None:
    fitted = fit(SES(short_series, alpha=0.5, init_level=1.0))
    with pytest.raises(TypeError):
        fitted.params["alpha"] = 5.0
    assert fitted["alpha"] == 0.5
    assert predict(fitted)[0] == pytest.approx(forecast(fitted).forecast[0])
