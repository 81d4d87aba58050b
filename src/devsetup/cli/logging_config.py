"""
Logging configuration for the devsetup CLI.

User-facing progress is printed with rich; structlog carries diagnostics.
By default only warnings and errors are shown, as one short line each.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_cli_logging(verbose: bool = False, level: str = "WARNING") -> None:
    """
    Configure logging for CLI usage.

    Args:
        verbose: If True, show all debug logs with full context.
        level: Minimum level when not verbose.
    """
    log_level = logging.DEBUG if verbose else logging.getLevelName(level.upper())

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("devsetup").setLevel(log_level)

    if verbose:
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
    else:
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_log_level,
                structlog.processors.UnicodeDecoder(),
                _quiet_renderer,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )


def _quiet_renderer(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict,
) -> str:
    """Render an event as ``[LEVEL] event`` without its key/value context."""
    level = event_dict.get("level", method_name)
    event = event_dict.get("event", "")
    return f"[{level.upper()}] {event}"
