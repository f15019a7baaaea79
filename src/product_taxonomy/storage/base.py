"""Storage boundary: the host platform's taxonomy term API."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from product_taxonomy.exceptions import TermStorageError

# Registered taxonomies and whether their terms may have parents.
TAXONOMIES: Dict[str, bool] = {
    "product_cat": True,
    "product_tag": False,
}


def ensure_taxonomy(taxonomy: str) -> bool:
    """Return whether ``taxonomy`` is hierarchical, failing for unknown names."""

    try:
        return TAXONOMIES[taxonomy]
    except KeyError:
        raise TermStorageError("invalid_taxonomy", "Invalid taxonomy.") from None


@runtime_checkable
class TermStore(Protocol):
    """Operations the command layer needs from the host taxonomy storage.

    Terms are plain dictionaries keyed like the host's term rows
    (``term_id``, ``name``, ``slug``, ``description``, ``parent``,
    ``taxonomy``, ``count``). Failures are raised as
    :class:`~product_taxonomy.exceptions.TermStorageError`.
    """

    def get_term(self, term_id: int, taxonomy: str) -> Optional[Dict[str, Any]]:
        """Return the term or ``None`` when no term has this id."""

    def get_terms(self, taxonomy: str, *, hide_empty: bool = False) -> List[int]:
        """Return the ids of every term in ``taxonomy``."""

    def insert_term(self, name: str, taxonomy: str, args: Mapping[str, Any]) -> int:
        """Create a term and return its id."""

    def update_term(self, term_id: int, taxonomy: str, args: Mapping[str, Any]) -> int:
        """Apply ``args`` to an existing term and return its id."""

    def delete_term(self, term_id: int, taxonomy: str) -> None:
        """Remove a term together with its metadata."""

    def get_term_meta(self, term_id: int, taxonomy: str) -> Dict[str, Any]:
        """Return every metadata entry attached to the term."""

    def update_term_meta(self, term_id: int, taxonomy: str, key: str, value: Any) -> None:
        """Create or replace a single metadata entry."""


__all__ = ["TAXONOMIES", "TermStore", "ensure_taxonomy"]
