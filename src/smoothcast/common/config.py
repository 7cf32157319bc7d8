"""src/smoothcast/common/config.py"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from smoothcast.forecasting.fitter import FitOptions, ScipyMinimizer


DEFAULT_CONFIG = "configs/config.yaml"


def _as_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


@dataclass(frozen=True)
class AppConfig:
    """Config wrapper with project-root relative paths."""

    raw: Dict[str, Any]
    config_path: Path

    @property
    def project_root(self) -> Path:
        # configs/config.yaml -> project root is parent of "configs"
        return self.config_path.parent.parent.resolve()

    @property
    def logging(self) -> Dict[str, Any]:
        return self.raw.get("logging", {}) or {}

    @property
    def fit(self) -> Dict[str, Any]:
        return self.raw.get("fit", {}) or {}

    @property
    def forecast(self) -> Dict[str, Any]:
        return self.raw.get("forecast", {}) or {}

    @property
    def default_h(self) -> int:
        return int(self.forecast.get("h", 5))

    @property
    def default_levels(self) -> tuple[float, ...]:
        return tuple(float(v) for v in self.forecast.get("level", (80, 95)))

    def fit_options(self) -> FitOptions:
        f = self.fit
        maxiter = f.get("maxiter")
        ftol = f.get("ftol")
        minimizer = ScipyMinimizer(
            method=str(f.get("method", "L-BFGS-B")),
            maxiter=None if maxiter is None else int(maxiter),
            ftol=None if ftol is None else float(ftol),
        )
        return FitOptions(minimizer=minimizer, strict=bool(f.get("strict", False)))


def load_config(config_path: str | Path) -> AppConfig:
    config_path = _as_path(config_path).resolve()
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig(raw=raw, config_path=config_path)


def load_config_or_default(config_path: str | Path = DEFAULT_CONFIG) -> AppConfig:
    """Load the YAML config if it exists, otherwise fall back to built-in defaults."""
    path = _as_path(config_path)
    if path.exists():
        return load_config(path)
    return AppConfig(raw={}, config_path=path.resolve())
