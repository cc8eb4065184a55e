"""Structured logging configuration with structlog.

Log entries are key-value events:

    2024-01-01T00:00:00Z [info] update_planned name=example.eth family=ENS ...

Call ``configure_logging`` once at startup; modules then use
``structlog.get_logger(__name__)``. Secrets are never passed to a
logger anywhere in the package.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog
from structlog.typing import Processor

LOG_LEVEL_ENV = "DDNS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level(verbose: bool) -> int:
    if verbose:
        return logging.DEBUG
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(verbose: bool = False, json_output: bool = False) -> None:
    """Configure structlog for the process.

    Args:
        verbose: Emit DEBUG events (chain reads, derived identifiers).
        json_output: Render JSON lines instead of console output.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(verbose)),
        context_class=dict,
        # stdout is reserved for command output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
