# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""structlog setup for rezlog.

Engine modules only call ``get_logger``. Whoever owns the process (a host
integration, or ``LogComposer`` when it builds its own engine) calls
``configure_logging`` once. ``console`` output is for a developer terminal;
``json`` writes one object per line for hosts that forward logs. Values
bound with ``structlog.contextvars`` (the composer binds the log action it
is producing) are merged into every event.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from rezlog.settings import Settings

__all__ = ["build_processors", "configure_logging", "get_logger"]


def build_processors(log_format: str) -> list[Any]:
    """Processor chain for ``console`` or ``json`` output."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(settings: Settings | None = None, *, stream: TextIO | None = None) -> None:
    """Configure structlog from ``settings`` (REZLOG_LOG_LEVEL, REZLOG_LOG_FORMAT).

    Args:
        settings: Settings instance (read from the environment if None)
        stream: Output stream, stderr by default; stdout belongs to the host
    """
    if settings is None:
        from rezlog.settings import Settings

        settings = Settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.WARNING)

    structlog.configure(
        processors=build_processors(settings.log_format),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)
