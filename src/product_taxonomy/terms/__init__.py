"""Taxonomy term commands shared by product categories and product tags."""

from .command import TaxonomyCommand, filter_core_keys, merge_term_values
from .kinds import (
    CATEGORY_DISPLAY_TYPES,
    CORE_TERM_KEYS,
    PRODUCT_CATEGORY,
    PRODUCT_TAG,
    TaxonomyKind,
)

__all__ = [
    "TaxonomyCommand",
    "TaxonomyKind",
    "filter_core_keys",
    "merge_term_values",
    "CATEGORY_DISPLAY_TYPES",
    "CORE_TERM_KEYS",
    "PRODUCT_CATEGORY",
    "PRODUCT_TAG",
]
