"""Logging configuration for simulimmo.

Structured logging through structlog, wrapping the standard library
logging module. Console rendering by default, JSON on demand.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

import structlog

from simulimmo.core.exceptions import ConfigurationError
from simulimmo.core.settings import get_settings

# Module-level state for lazy initialization
_configured: bool = False


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
    log_file: str | None = None,
) -> structlog.BoundLogger:
    """Configure structured logging for the library.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to SIMULIMMO_LOG_LEVEL.
        json_output: Render JSON lines instead of console output. Defaults to SIMULIMMO_LOG_JSON.
        log_file: Optional path of a rotating log file. Defaults to SIMULIMMO_LOG_FILE.

    Returns:
        Configured logger instance.

    Raises:
        ConfigurationError: If the level is unknown or the log file cannot be opened
    """
    global _configured

    if _configured:
        return structlog.get_logger()

    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Unknown log level: {log_level}")
    as_json = settings.log_json if json_output is None else json_output
    file_path = log_file or settings.log_file

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if file_path:
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.RotatingFileHandler(
                    str(path), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
                )
            )
        except OSError as e:
            raise ConfigurationError(f"Cannot open log file {file_path}: {e}") from e

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if as_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _configured = True
    return structlog.get_logger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, optionally bound to a module name.

    Logging is configured lazily on first call.
    """
    if not _configured:
        configure_logging()

    logger = structlog.get_logger()
    if name:
        return logger.bind(logger_name=name)
    return logger
