"""General-purpose helpers shared by the storage and command layers."""

from __future__ import annotations

import json
import re
import unicodedata
from pathlib import Path
from typing import Any

from .logging import get_logger

_SLUG_SEPARATOR_PATTERN = re.compile(r"[^a-z0-9]+")

_LOGGER = get_logger(module=__name__)


def fold_diacritics(text: str) -> str:
    """Remove diacritics by decomposing unicode characters."""

    normalized = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def slugify(text: str) -> str:
    """Derive a URL slug: lowercase ASCII words joined with hyphens."""

    lowered = fold_diacritics(text).lower()
    return _SLUG_SEPARATOR_PATTERN.sub("-", lowered).strip("-")


def absint(value: Any) -> int:
    """Coerce ``value`` to a non-negative integer, returning 0 when impossible."""

    try:
        return abs(int(str(value).strip()))
    except (TypeError, ValueError):
        return 0


def serialize_json(data: object, destination: Path | str, *, indent: int = 2) -> Path:
    """Serialize data to JSON with deterministic ordering.

    The payload is written to a sibling temporary file first and then moved
    into place so readers never observe a half-written snapshot.
    """

    dest_path = Path(destination)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = dest_path.with_name(dest_path.name + ".tmp")
    tmp_path.write_text(
        json.dumps(data, indent=indent, sort_keys=True, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    tmp_path.replace(dest_path)
    _LOGGER.debug("Serialized JSON", path=str(dest_path), size=dest_path.stat().st_size)
    return dest_path


__all__ = [
    "fold_diacritics",
    "slugify",
    "absint",
    "serialize_json",
]
