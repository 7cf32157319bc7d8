"""src/smoothcast/common/logging.py"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from smoothcast.common.config import AppConfig


DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(cfg: AppConfig, verbosity: int = 0) -> int:
    """Configured level, lowered to INFO (-v) or DEBUG (-vv) by the CLI verbosity count."""
    level_str = str(cfg.logging.get("level", "WARNING")).upper()
    level = getattr(logging, level_str, logging.WARNING)
    if verbosity >= 2:
        return min(level, logging.DEBUG)
    if verbosity == 1:
        return min(level, logging.INFO)
    return level


def _file_handler(cfg: AppConfig, level: int) -> logging.Handler | None:
    log_file = cfg.logging.get("file")
    if not log_file:
        return None

    path = (cfg.project_root / Path(log_file)).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=int(cfg.logging.get("max_bytes", 2_000_000)),
        backupCount=int(cfg.logging.get("backup_count", 3)),
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_logging(cfg: AppConfig, *, verbosity: int = 0) -> None:
    level = resolve_level(cfg, verbosity)

    console = logging.StreamHandler()
    console.setLevel(level)
    handlers: list[logging.Handler] = [console]

    file_handler = _file_handler(cfg, level)
    if file_handler is not None:
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=str(cfg.logging.get("format", DEFAULT_FORMAT)),
        handlers=handlers,
        force=True,
    )

    # overflow warnings from trial points far outside the data range go through logging
    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(max(level, logging.WARNING))
