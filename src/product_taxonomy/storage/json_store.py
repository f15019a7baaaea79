"""Term storage persisted as a local JSON snapshot."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from product_taxonomy.exceptions import TermStorageError
from product_taxonomy.utils.helpers import absint, serialize_json, slugify
from product_taxonomy.utils.logging import get_logger

from .base import ensure_taxonomy


def _empty_snapshot() -> Dict[str, Any]:
    return {"next_id": 1, "terms": {}, "meta": {}}


class JsonTermStore:
    """Reproduces the host term storage rules over a JSON file.

    The snapshot is read once on construction and rewritten after every
    mutation. A missing file is treated as an empty store and only created on
    the first write.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._logger = get_logger(component="json_store", path=str(self.path))
        self._data = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return _empty_snapshot()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise TermStorageError("invalid_snapshot", f"Term snapshot {self.path} is not valid JSON: {exc}") from exc
        snapshot = _empty_snapshot()
        snapshot.update(payload)
        return snapshot

    def _save(self) -> None:
        serialize_json(self._data, self.path)

    # ------------------------------------------------------------------
    # Internal lookups
    # ------------------------------------------------------------------
    def _row(self, term_id: int) -> Optional[Dict[str, Any]]:
        return self._data["terms"].get(str(term_id))

    def _rows(self, taxonomy: str) -> List[Dict[str, Any]]:
        return [row for row in self._data["terms"].values() if row["taxonomy"] == taxonomy]

    def _find_by_slug(self, slug: str, taxonomy: str) -> Optional[Dict[str, Any]]:
        for row in self._rows(taxonomy):
            if row["slug"] == slug:
                return row
        return None

    def _unique_slug(self, slug: str, taxonomy: str) -> str:
        candidate = slug
        suffix = 2
        while self._find_by_slug(candidate, taxonomy) is not None:
            candidate = f"{slug}-{suffix}"
            suffix += 1
        return candidate

    def _resolve_parent(self, args: Mapping[str, Any], taxonomy: str, hierarchical: bool) -> int:
        if not hierarchical:
            return 0
        parent = absint(args.get("parent", 0))
        if parent:
            row = self._row(parent)
            if row is None or row["taxonomy"] != taxonomy:
                raise TermStorageError("missing_parent", "Parent term does not exist.")
        return parent

    def _ancestors(self, term_id: int) -> List[int]:
        """Walk the parent chain upwards from ``term_id`` (inclusive)."""

        chain: List[int] = []
        while term_id and term_id not in chain:
            chain.append(term_id)
            row = self._row(term_id)
            term_id = int(row["parent"]) if row is not None else 0
        return chain

    def _resolve_group(self, args: Mapping[str, Any], taxonomy: str, current: int) -> int:
        alias_slug = str(args.get("alias_of") or "").strip()
        if not alias_slug:
            return current
        alias = self._find_by_slug(alias_slug, taxonomy)
        if alias is None:
            return current
        if not alias.get("term_group"):
            groups = [row.get("term_group", 0) for row in self._data["terms"].values()]
            alias["term_group"] = max(groups, default=0) + 1
        return alias["term_group"]

    # ------------------------------------------------------------------
    # TermStore API
    # ------------------------------------------------------------------
    def get_term(self, term_id: int, taxonomy: str) -> Optional[Dict[str, Any]]:
        ensure_taxonomy(taxonomy)
        row = self._row(absint(term_id))
        if row is None or row["taxonomy"] != taxonomy:
            return None
        return copy.deepcopy(row)

    def get_terms(self, taxonomy: str, *, hide_empty: bool = False) -> List[int]:
        ensure_taxonomy(taxonomy)
        rows = self._rows(taxonomy)
        if hide_empty:
            rows = [row for row in rows if int(row.get("count", 0)) > 0]
        rows.sort(key=lambda row: (row["name"].lower(), row["term_id"]))
        return [row["term_id"] for row in rows]

    def insert_term(self, name: str, taxonomy: str, args: Mapping[str, Any]) -> int:
        hierarchical = ensure_taxonomy(taxonomy)
        name = str(name or "").strip()
        if not name:
            raise TermStorageError("empty_term_name", "A name is required for this term.")
        parent = self._resolve_parent(args, taxonomy, hierarchical)

        for row in self._rows(taxonomy):
            if row["name"].lower() == name.lower() and row["parent"] == parent:
                raise TermStorageError(
                    "term_exists", "A term with the name provided already exists with this parent."
                )

        requested_slug = slugify(str(args.get("slug") or ""))
        if requested_slug:
            if self._find_by_slug(requested_slug, taxonomy) is not None:
                raise TermStorageError("term_exists", "A term with the slug provided already exists.")
            slug = requested_slug
        else:
            slug = self._unique_slug(slugify(name) or "term", taxonomy)

        term_id = int(self._data["next_id"])
        self._data["next_id"] = term_id + 1
        self._data["terms"][str(term_id)] = {
            "term_id": term_id,
            "name": name,
            "slug": slug,
            "description": str(args.get("description") or ""),
            "parent": parent,
            "taxonomy": taxonomy,
            "count": 0,
            "term_group": self._resolve_group(args, taxonomy, 0),
        }
        self._save()
        self._logger.info("Inserted term", term_id=term_id, taxonomy=taxonomy, slug=slug)
        return term_id

    def update_term(self, term_id: int, taxonomy: str, args: Mapping[str, Any]) -> int:
        hierarchical = ensure_taxonomy(taxonomy)
        term_id = absint(term_id)
        row = self._row(term_id)
        if row is None or row["taxonomy"] != taxonomy:
            raise TermStorageError("invalid_term", "Empty Term.")

        name = str(args.get("name", row["name"]) or "").strip()
        if not name:
            raise TermStorageError("empty_term_name", "A name is required for this term.")

        slug = slugify(str(args.get("slug", row["slug"]) or "")) or slugify(name) or row["slug"]
        duplicate = self._find_by_slug(slug, taxonomy)
        if duplicate is not None and duplicate["term_id"] != term_id:
            raise TermStorageError(
                "duplicate_term_slug", f'The slug "{slug}" is already in use by another term.'
            )

        merged = dict(row)
        merged["parent"] = self._resolve_parent({"parent": args.get("parent", row["parent"])}, taxonomy, hierarchical)
        if merged["parent"] == term_id:
            raise TermStorageError("invalid_parent", "A term cannot be its own parent.")
        if term_id in self._ancestors(merged["parent"]):
            raise TermStorageError("invalid_parent", "A term cannot be moved under one of its descendants.")
        merged.update(
            name=name,
            slug=slug,
            description=str(args.get("description", row["description"]) or ""),
            term_group=self._resolve_group(args, taxonomy, row.get("term_group", 0)),
        )
        self._data["terms"][str(term_id)] = merged
        self._save()
        self._logger.info("Updated term", term_id=term_id, taxonomy=taxonomy)
        return term_id

    def delete_term(self, term_id: int, taxonomy: str) -> None:
        ensure_taxonomy(taxonomy)
        term_id = absint(term_id)
        row = self._row(term_id)
        if row is None or row["taxonomy"] != taxonomy:
            raise TermStorageError("invalid_term", "Term does not exist.")

        for child in self._rows(taxonomy):
            if child["parent"] == term_id:
                child["parent"] = row["parent"]
        del self._data["terms"][str(term_id)]
        self._data["meta"].pop(str(term_id), None)
        self._save()
        self._logger.info("Deleted term", term_id=term_id, taxonomy=taxonomy)

    def get_term_meta(self, term_id: int, taxonomy: str) -> Dict[str, Any]:
        ensure_taxonomy(taxonomy)
        return dict(self._data["meta"].get(str(absint(term_id)), {}))

    def update_term_meta(self, term_id: int, taxonomy: str, key: str, value: Any) -> None:
        ensure_taxonomy(taxonomy)
        term_id = absint(term_id)
        row = self._row(term_id)
        if row is None or row["taxonomy"] != taxonomy:
            raise TermStorageError("invalid_term", "Term does not exist.")
        if not key:
            raise TermStorageError("invalid_meta_key", "Metadata keys must not be empty.")
        self._data["meta"].setdefault(str(term_id), {})[key] = value
        self._save()
        self._logger.debug("Updated term meta", term_id=term_id, key=key)


__all__ = ["JsonTermStore"]
