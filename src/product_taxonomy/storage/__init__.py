"""Access to the host platform's taxonomy term storage."""

from __future__ import annotations

from product_taxonomy.config.settings import StoreConfig

from .base import TAXONOMIES, TermStore, ensure_taxonomy
from .json_store import JsonTermStore
from .rest import RestTermStore


def build_store(config: StoreConfig) -> TermStore:
    """Instantiate the backend selected by ``config.backend``."""

    if config.backend == "rest":
        if not config.base_url:
            raise ValueError("store.base_url is required for the REST backend")
        return RestTermStore(
            config.base_url,
            username=config.username,
            application_password=config.application_password,
            timeout=config.timeout_seconds,
            verify=config.verify_tls,
        )
    return JsonTermStore(config.snapshot_path)


__all__ = [
    "TAXONOMIES",
    "TermStore",
    "ensure_taxonomy",
    "JsonTermStore",
    "RestTermStore",
    "build_store",
]
