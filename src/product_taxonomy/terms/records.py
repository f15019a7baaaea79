"""Shape host term rows into the records printed by the CLI."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from product_taxonomy.utils.helpers import absint


def tag_record(term: Mapping[str, Any], meta: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": int(term["term_id"]),
        "name": term.get("name", ""),
        "slug": term.get("slug", ""),
        "description": term.get("description", ""),
        "count": int(term.get("count") or 0),
    }


def category_record(term: Mapping[str, Any], meta: Mapping[str, Any]) -> Dict[str, Any]:
    """Category fields, with display type, image and ordering read from metadata."""

    image = meta.get("thumbnail_id")
    return {
        "id": int(term["term_id"]),
        "name": term.get("name", ""),
        "slug": term.get("slug", ""),
        "parent": int(term.get("parent") or 0),
        "description": term.get("description", ""),
        "display": meta.get("display_type") or "default",
        "image": "" if image in (None, "", 0, "0") else str(image),
        "menu_order": absint(meta.get("order", 0)),
        "count": int(term.get("count") or 0),
    }


__all__ = ["tag_record", "category_record"]
