"""
Logging configuration and utilities for the Privacy Intelligence System.

All loggers live under the "privacy_intel" root so a single call to
setup_logging() configures console and optional rotating file output
for every module.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from privacy_intel.config.settings import LoggingSettings


ROOT_LOGGER_NAME = "privacy_intel"

_logging_configured = False


def setup_logging(
    settings: "LoggingSettings | None" = None,
    level: str | None = None,
) -> logging.Logger:
    """
    Configure the application logging system.

    Should be called once at application startup; later calls return
    the already configured logger.

    Args:
        settings: Logging configuration. If None, uses sensible defaults.
        level: Optional level name overriding settings.level (e.g. "DEBUG")

    Returns:
        The configured root logger for the application.
    """
    global _logging_configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    if _logging_configured:
        return logger

    logger.handlers.clear()

    if settings is None:
        log_level = logging.INFO
        log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        date_format = "%Y-%m-%d %H:%M:%S"
        log_to_console = True
        file_path = None
        max_file_size_mb = 20
        backup_count = 5
    else:
        log_level = getattr(logging, settings.level)
        log_format = settings.format
        date_format = settings.date_format
        log_to_console = settings.log_to_console
        file_path = settings.file_path
        max_file_size_mb = settings.max_file_size_mb
        backup_count = settings.backup_count

    if level is not None:
        log_level = getattr(logging, level.upper(), log_level)

    logger.setLevel(log_level)
    formatter = logging.Formatter(fmt=log_format, datefmt=date_format)

    if log_to_console:
        # stderr keeps stdout clean for JSON output from the CLI
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if file_path is not None:
        logger.addHandler(
            _create_file_handler(
                file_path=file_path,
                max_bytes=max_file_size_mb * 1024 * 1024,
                backup_count=backup_count,
                level=log_level,
                formatter=formatter,
            )
        )

    logger.propagate = False
    _logging_configured = True

    return logger


def _create_file_handler(
    file_path: Path,
    max_bytes: int,
    backup_count: int,
    level: int,
    formatter: logging.Formatter,
) -> RotatingFileHandler:
    """Create a rotating file handler, creating the log directory if needed."""
    file_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(file_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)

    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger that is a child of the application root logger.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Fetching page")
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Remove all handlers and allow setup_logging() to run again."""
    global _logging_configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    logger.propagate = True
    _logging_configured = False


class LoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that appends [key=value] context to every message.

    Example:
        >>> logger = LoggerAdapter(get_logger(__name__), {"url": "https://example.com"})
        >>> logger.info("Main page fetched")  # "Main page fetched [url=https://example.com]"
    """

    def process(
        self, msg: str, kwargs: dict
    ) -> tuple[str, dict]:
        if self.extra:
            context_str = " ".join(f"[{k}={v}]" for k, v in self.extra.items())
            msg = f"{msg} {context_str}"
        return msg, kwargs


def get_logger_with_context(
    name: str | None = None,
    **context: str,
) -> LoggerAdapter:
    """Get a logger whose messages carry the given context pairs."""
    return LoggerAdapter(get_logger(name), context)
