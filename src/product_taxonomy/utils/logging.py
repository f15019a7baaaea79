"""Centralised logging configuration built on loguru."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Any

from loguru import logger

from ..config.settings import Settings, get_settings

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[command]}</cyan> | "
    "<magenta>{extra[taxonomy]}</magenta> | "
    "{message}"
)


def configure_logging(settings: Settings | None = None, level: str | None = None) -> None:
    """Initialise loguru sinks according to the active settings."""

    cfg = settings or get_settings()
    resolved_level = (level or cfg.logging.level).upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved_level,
        backtrace=False,
        diagnose=False,
        format=_LOG_FORMAT,
    )
    if cfg.logging.log_file is not None:
        log_path = cfg.logging.log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            rotation="10 MB",
            retention="14 days",
            format=_LOG_FORMAT,
            level=resolved_level,
        )
    logger.configure(extra={"command": "-", "taxonomy": "-"})


def get_logger(**context: Any):
    """Return a contextualised logger instance."""

    return logger.bind(**context)


@contextmanager
def logging_context(**context: Any):
    """Context manager that temporarily binds structured context fields."""

    with logger.contextualize(**context):
        yield logger


__all__ = ["configure_logging", "get_logger", "logging_context"]
