"""
Structured logging configuration for secret-args.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

LOG_FORMATS = ("console", "json")


def setup_logging(level: str = "WARNING", fmt: str = "console") -> None:
    """Configure structured logging on stderr."""
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format '{fmt}', expected one of {', '.join(LOG_FORMATS)}")
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level}'")

    # stderr keeps stdout free for command output
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if fmt == "json":
        processors.extend(
            [
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.JSONRenderer(),
            ]
        )
    else:
        processors.extend(
            [
                structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
                structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "secret_args") -> structlog.stdlib.BoundLogger:
    """Get a logger instance backed by the stdlib logger of the same name.

    Until setup_logging() runs, events go through stdlib levels and handlers,
    so debug events are dropped and nothing is written to stdout.
    """
    return structlog.wrap_logger(logging.getLogger(name))
