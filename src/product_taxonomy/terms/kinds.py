"""Descriptors for the product taxonomies managed by the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Tuple

from .records import category_record, tag_record

RecordShaper = Callable[[Mapping[str, Any], Mapping[str, Any]], Dict[str, Any]]

# Keys written to the term row itself; anything else supplied is term metadata.
CORE_TERM_KEYS: Tuple[str, ...] = ("name", "slug", "parent", "description", "alias_of")

CATEGORY_DISPLAY_TYPES: Tuple[str, ...] = ("default", "products", "subcategories", "both")


@dataclass(frozen=True, slots=True)
class TaxonomyKind:
    """Everything that differs between the category and tag commands."""

    taxonomy: str
    label: str
    invalid_id_code: str
    shape: RecordShaper
    hierarchical: bool = False
    default_fields: Tuple[str, ...] = ("id", "name", "slug", "description", "count")
    # CLI option names that are stored under a different metadata key.
    meta_aliases: Mapping[str, str] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return self.label[:1].upper() + self.label[1:]

    def invalid_id_message(self, term_id: Any) -> str:
        return f'Invalid {self.label} ID "{term_id}"'

    def meta_key(self, option: str) -> str:
        return self.meta_aliases.get(option, option)


PRODUCT_CATEGORY = TaxonomyKind(
    taxonomy="product_cat",
    label="product category",
    invalid_id_code="woocommerce_cli_invalid_product_category_id",
    shape=category_record,
    hierarchical=True,
    default_fields=("id", "name", "slug", "parent", "description", "display", "image", "menu_order", "count"),
    meta_aliases={"display": "display_type", "image": "thumbnail_id", "menu_order": "order"},
)

PRODUCT_TAG = TaxonomyKind(
    taxonomy="product_tag",
    label="product tag",
    invalid_id_code="woocommerce_cli_invalid_product_tag_id",
    shape=tag_record,
)


__all__ = [
    "CATEGORY_DISPLAY_TYPES",
    "CORE_TERM_KEYS",
    "PRODUCT_CATEGORY",
    "PRODUCT_TAG",
    "TaxonomyKind",
]
