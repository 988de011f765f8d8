"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog


def _processors(fmt: str) -> list[Any]:
    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
        renderer,
    ]


def setup_logging(level: str = "info", fmt: str = "console", stream: TextIO | None = None) -> None:
    """Configure structlog defaults for module-level loggers."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=_processors(fmt),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )


def build_logger(stream: TextIO, level: str = "info", fmt: str = "console") -> structlog.stdlib.BoundLogger:
    """Build a logger bound to *stream* without touching global structlog state.

    Used for the per-run log stream so that callers (and tests) own where
    progress lines end up.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    return structlog.wrap_logger(  # type: ignore[no-any-return]
        structlog.PrintLogger(file=stream),
        processors=_processors(fmt),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
