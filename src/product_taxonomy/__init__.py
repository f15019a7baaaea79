"""Command-line administration of product categories and product tags."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("product-taxonomy")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .exceptions import TermCommandError, TermStorageError
from .terms import PRODUCT_CATEGORY, PRODUCT_TAG, TaxonomyCommand, TaxonomyKind

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "TermCommandError",
    "TermStorageError",
    "TaxonomyCommand",
    "TaxonomyKind",
    "PRODUCT_CATEGORY",
    "PRODUCT_TAG",
]
