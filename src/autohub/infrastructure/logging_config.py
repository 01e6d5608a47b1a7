"""structlog setup shared by every entry point."""

from __future__ import annotations

import logging
import os
import sys

import structlog

DEFAULT_LOG_LEVEL = "WARNING"


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Resolved per call so a swapped sys.stderr (click's test runner) is honoured.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: str | None = None) -> None:
    """Route structlog events to stderr, filtered at ``level``.

    Falls back to AUTOHUB_LOG_LEVEL, then WARNING. Stdout stays free for
    command output.
    """
    name = (level or os.environ.get("AUTOHUB_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {name}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
