"""Shared get/list/create/update/delete routine for product taxonomy terms."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from product_taxonomy.exceptions import TermCommandError, TermStorageError
from product_taxonomy.storage.base import TermStore
from product_taxonomy.utils.helpers import absint
from product_taxonomy.utils.logging import get_logger

from .kinds import CATEGORY_DISPLAY_TYPES, CORE_TERM_KEYS, TaxonomyKind


def filter_core_keys(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``overrides`` without the keys applied to the term row."""

    return {key: value for key, value in overrides.items() if key not in CORE_TERM_KEYS}


def merge_term_values(term: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay caller-supplied values onto the stored term; the caller wins."""

    merged = dict(term)
    merged.update(overrides)
    return merged


class TaxonomyCommand:
    """Term administration for one taxonomy.

    Every store call is wrapped so that host storage errors surface as
    :class:`TermCommandError` with the host's error code. Metadata writes are
    not transactional: a failure partway through leaves the earlier writes in
    place.
    """

    def __init__(self, store: TermStore, kind: TaxonomyKind) -> None:
        self.store = store
        self.kind = kind
        self._logger = get_logger(component="taxonomy_command", taxonomy=kind.taxonomy)

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------
    @contextmanager
    def assert_no_storage_error(self) -> Iterator[None]:
        """Translate host storage failures raised inside the block."""

        try:
            yield
        except TermStorageError as exc:
            self._logger.warning("Storage error", code=exc.code, message=exc.message)
            raise TermCommandError.from_storage_error(exc) from exc

    def assert_term_exists(self, term_id: Any) -> Dict[str, Any]:
        """Return the stored term, failing with the invalid-id error when absent."""

        resolved = absint(term_id)
        term: Optional[Dict[str, Any]] = None
        if resolved:
            with self.assert_no_storage_error():
                term = self.store.get_term(resolved, self.kind.taxonomy)
        if not term:
            raise TermCommandError(self.kind.invalid_id_code, self.kind.invalid_id_message(term_id))
        return term

    def _validate_fields(self, fields: Mapping[str, Any]) -> None:
        if self.kind.hierarchical and "display" in fields:
            display = str(fields["display"])
            if display not in CATEGORY_DISPLAY_TYPES:
                raise TermCommandError(
                    "woocommerce_cli_invalid_display_type",
                    f'Invalid display type "{display}"; expected one of: {", ".join(CATEGORY_DISPLAY_TYPES)}',
                )

    def metadata_from_overrides(self, overrides: Mapping[str, Any]) -> Dict[str, Any]:
        """Non-core overrides keyed by their metadata key, in argument order."""

        return {self.kind.meta_key(key): value for key, value in filter_core_keys(overrides).items()}

    def _write_metadata(self, term_id: int, overrides: Mapping[str, Any]) -> None:
        for meta_key, meta_value in self.metadata_from_overrides(overrides).items():
            with self.assert_no_storage_error():
                self.store.update_term_meta(term_id, self.kind.taxonomy, meta_key, meta_value)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def get(self, term_id: Any) -> Dict[str, Any]:
        term = self.assert_term_exists(term_id)
        with self.assert_no_storage_error():
            meta = self.store.get_term_meta(term["term_id"], self.kind.taxonomy)
        return self.kind.shape(term, meta)

    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Every term of the taxonomy, including empty ones.

        ``filters`` keep only records whose field equals the given value
        (compared as strings, since CLI values are strings).
        """

        with self.assert_no_storage_error():
            term_ids = self.store.get_terms(self.kind.taxonomy, hide_empty=False)
        records = [self.get(term_id) for term_id in term_ids]

        for key, expected in (filters or {}).items():
            if key not in self.kind.default_fields:
                raise TermCommandError(
                    "woocommerce_cli_invalid_filter_field",
                    f'Invalid {self.kind.label} field "{key}"',
                )
            records = [record for record in records if str(record[key]) == str(expected)]
        return records

    def create(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a term from ``fields``; non-core fields become metadata."""

        fields = dict(fields)
        name = str(fields.get("name") or "").strip()
        if not name:
            raise TermCommandError("woocommerce_cli_missing_name", "Missing parameter name")
        self._validate_fields(fields)

        core_args = {key: fields[key] for key in CORE_TERM_KEYS if key in fields and key != "name"}
        with self.assert_no_storage_error():
            term_id = self.store.insert_term(name, self.kind.taxonomy, core_args)
        self._write_metadata(term_id, fields)

        self._logger.info("Created term", term_id=term_id)
        return self.get(term_id)

    def update(self, term_id: Any, overrides: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``overrides`` onto an existing term and persist the result.

        Core keys go to the term row through the store's update call; every
        other supplied key is written as term metadata once the row update
        has succeeded. The returned record is re-read from the store.
        """

        overrides = dict(overrides)
        term = self.assert_term_exists(term_id)
        self._validate_fields(overrides)

        updated_term_values = merge_term_values(term, overrides)
        with self.assert_no_storage_error():
            updated_id = self.store.update_term(term["term_id"], self.kind.taxonomy, updated_term_values)

        # Only the caller's overrides are metadata; the merged values also
        # carry row columns such as term_id and count.
        self._write_metadata(updated_id, overrides)

        self._logger.info("Updated term", term_id=updated_id, keys=sorted(overrides))
        return self.get(updated_id)

    def delete(self, term_id: Any) -> Dict[str, Any]:
        """Delete a term and return the record it had before deletion."""

        record = self.get(term_id)
        with self.assert_no_storage_error():
            self.store.delete_term(record["id"], self.kind.taxonomy)
        self._logger.info("Deleted term", term_id=record["id"])
        return record


__all__ = ["TaxonomyCommand", "filter_core_keys", "merge_term_values"]
