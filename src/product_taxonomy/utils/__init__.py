"""Utility helpers shared across product taxonomy modules."""

from .helpers import absint, fold_diacritics, serialize_json, slugify
from .logging import configure_logging, get_logger, logging_context

__all__ = [
    "absint",
    "fold_diacritics",
    "serialize_json",
    "slugify",
    "configure_logging",
    "get_logger",
    "logging_context",
]
