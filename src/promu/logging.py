from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

_LEVEL_NAMES = ("debug", "info", "warning", "error")


def _min_level(debug: bool) -> int:
    if debug:
        return logging.DEBUG
    name = os.environ.get("PROMU_LOG_LEVEL", "").strip().lower()
    if name not in _LEVEL_NAMES:
        return logging.INFO
    return getattr(logging, name.upper())


def _use_colors() -> bool:
    override = os.environ.get("PROMU_LOG_COLOR")
    if override is None:
        return sys.stderr.isatty()
    return override.strip().lower() in {"1", "true", "yes", "on"}


def get_logger(name: str | None = None) -> Any:
    if name:
        return structlog.get_logger(logger=name)
    return structlog.get_logger()


def setup_logging(
    *, debug: bool = False, cache_logger_on_first_use: bool = True
) -> None:
    """Send logs to stderr so stdout only carries command output.

    Level comes from PROMU_LOG_LEVEL (``--debug`` wins), rendering from
    PROMU_LOG_FORMAT (``console`` or ``json``) and PROMU_LOG_COLOR.
    """
    if os.environ.get("PROMU_LOG_FORMAT", "").strip().lower() == "json":
        renderer: Any = structlog.processors.JSONRenderer(default=str)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=_use_colors())

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_min_level(debug)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=cache_logger_on_first_use,
    )
