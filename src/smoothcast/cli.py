"""src/smoothcast/cli.py"""

from __future__ import annotations

from typing import Any, Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from smoothcast.common.config import DEFAULT_CONFIG, AppConfig, load_config_or_default
from smoothcast.common.errors import ForecastError, OptimizationDidNotConverge
from smoothcast.common.logging import setup_logging
from smoothcast.forecasting import FittedModel, ForecastResults, accuracy, fit, forecast, predict, predict_intervals
from smoothcast.modeling import SES, Holt, HoltWinters, MeanForecast, NaiveForecast, SeasonalNaiveForecast

app = typer.Typer(help="Exponential smoothing and baseline forecasting CLI")

MODELS = ("ses", "holt", "holt-winters", "mean", "naive", "seasonal-naive")


def _parse_floats(text: Optional[str]) -> Optional[list[float]]:
    if text is None:
        return None
    parts = [p.strip() for p in text.split(",") if p.strip()]
    try:
        return [float(p) for p in parts]
    except ValueError as e:
        raise typer.BadParameter(f"expected comma-separated numbers, got {text!r}") from e


def _build_model(model: str, y: list[float], h: int, levels: tuple[float, ...], **kw: Any) -> Any:
    if model == "ses":
        return SES(y, h=h, alpha=kw["alpha"], init_level=kw["init_level"])
    if model == "holt":
        return Holt(
            y,
            h=h,
            alpha=kw["alpha"],
            beta=kw["beta"],
            phi=kw["phi"],
            init_level=kw["init_level"],
            init_trend=kw["init_trend"],
            damped=kw["damped"],
        )
    if model == "holt-winters":
        return HoltWinters(
            y,
            h=h,
            alpha=kw["alpha"],
            beta=kw["beta"],
            gamma=kw["gamma"],
            m=kw["m"],
            init_level=kw["init_level"],
            init_trend=kw["init_trend"],
            init_season=kw["init_season"],
        )
    if model == "mean":
        return MeanForecast(y, h=h, level=levels)
    if model == "naive":
        return NaiveForecast(y, h=h, level=levels)
    if model == "seasonal-naive":
        return SeasonalNaiveForecast(y, h=h, level=levels, m=kw["m"])
    raise typer.BadParameter(f"unknown model {model!r}; choose from {', '.join(MODELS)}")


def _results_table(res: ForecastResults, title: str) -> Table:
    frame = res.to_frame()
    table = Table(title=title)
    for col in frame.columns:
        table.add_column(str(col), justify="right")
    for row in frame.itertuples(index=False):
        table.add_row(*(f"{v:.4f}" if isinstance(v, float) else str(v) for v in row))
    return table


@app.command("forecast")
def forecast_cmd(
    values: str = typer.Option(..., help="Comma-separated observations, oldest first"),
    model: str = typer.Option("ses", help=f"One of: {', '.join(MODELS)}"),
    h: Optional[int] = typer.Option(None, help="Forecast horizon (defaults to config)"),
    alpha: Optional[float] = typer.Option(None, help="Level smoothing; estimated if omitted"),
    beta: Optional[float] = typer.Option(None, help="Trend smoothing; estimated if omitted"),
    gamma: Optional[float] = typer.Option(None, help="Season smoothing; estimated if omitted"),
    phi: Optional[float] = typer.Option(None, help="Damping factor for Holt"),
    damped: bool = typer.Option(False, help="Estimate a damped trend (Holt)"),
    m: Optional[int] = typer.Option(None, help="Seasonal period"),
    init_level: Optional[float] = typer.Option(None, help="Initial level; estimated if omitted"),
    init_trend: Optional[float] = typer.Option(None, help="Initial trend; estimated if omitted"),
    init_season: Optional[str] = typer.Option(None, help="Comma-separated initial seasonal components"),
    level: Optional[str] = typer.Option(None, help="Comma-separated interval levels, e.g. 80,95"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Log every optimizer evaluation"),
    config_path: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
) -> None:
    """Fit a model to the given values and print its forecast."""
    cfg: AppConfig = load_config_or_default(config_path)
    setup_logging(cfg, verbosity=verbose)

    y = _parse_floats(values) or []
    levels = tuple(_parse_floats(level) or cfg.default_levels)
    horizon = h if h is not None else cfg.default_h

    try:
        mdl = _build_model(
            model.strip().lower(),
            y,
            horizon,
            levels,
            alpha=alpha,
            beta=beta,
            gamma=gamma,
            phi=phi,
            damped=damped,
            m=m,
            init_level=init_level,
            init_trend=init_trend,
            init_season=_parse_floats(init_season),
        )
        fitted = fit(mdl, verbosity=verbose, options=cfg.fit_options())
        if isinstance(fitted, FittedModel):
            out = predict_intervals(fitted, level=levels)
        else:
            out = predict(fitted)
    except (ForecastError, OptimizationDidNotConverge) as e:
        print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console = Console()
    console.print(_results_table(out, type(mdl).__name__))
    if not isinstance(fitted, FittedModel):
        return

    params = ", ".join(f"{k}={v:.4f}" for k, v in fitted.params.items())
    print(f"Parameters: {params}")
    print(f"In-sample: {accuracy(y, forecast(fitted)).as_dict()}")


@app.command("show-config")
def show_config(config_path: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config")) -> None:
    """Print the resolved configuration."""
    cfg = load_config_or_default(config_path)
    print(f"Config file: {cfg.config_path}")
    print(f"Forecast defaults: h={cfg.default_h}, level={list(cfg.default_levels)}")
    print(f"Fit options: {cfg.fit_options()}")


if __name__ == "__main__":
    app()
