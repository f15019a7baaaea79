"""Term storage backed by the host platform's REST API."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import requests
from requests import Response
from requests.exceptions import RequestException

from product_taxonomy.exceptions import TermStorageError
from product_taxonomy.utils.helpers import absint
from product_taxonomy.utils.logging import get_logger

from .base import ensure_taxonomy

_API_PREFIX = "/wp-json/wp/v2"
_PAGE_SIZE = 100
_WRITABLE_FIELDS = ("name", "slug", "description", "parent")


def _term_from_payload(payload: Mapping[str, Any], taxonomy: str) -> Dict[str, Any]:
    return {
        "term_id": int(payload["id"]),
        "name": payload.get("name", ""),
        "slug": payload.get("slug", ""),
        "description": payload.get("description", ""),
        "parent": int(payload.get("parent") or 0),
        "taxonomy": payload.get("taxonomy", taxonomy),
        "count": int(payload.get("count") or 0),
        "term_group": 0,
    }


class RestTermStore:
    """Talks to ``/wp-json/wp/v2/<taxonomy>`` on the host site.

    Authentication uses an application password over HTTP basic auth. Error
    bodies returned by the host (``{"code", "message", "data"}``) are raised as
    :class:`TermStorageError` with the same code.
    """

    def __init__(
        self,
        base_url: str,
        *,
        username: str | None = None,
        application_password: str | None = None,
        timeout: float = 20.0,
        verify: bool = True,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify
        self.session.headers.setdefault("Accept", "application/json")
        if username and application_password:
            self.session.auth = (username, application_password)
        self._logger = get_logger(component="rest_store", base_url=self.base_url)

    def _url(self, taxonomy: str, term_id: int | None = None) -> str:
        url = f"{self.base_url}{_API_PREFIX}/{taxonomy}"
        if term_id is not None:
            url = f"{url}/{term_id}"
        return url

    def _request(self, method: str, url: str, **kwargs: Any) -> Response:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except RequestException as exc:
            self._logger.warning("Host request failed", method=method, url=url, error=str(exc))
            raise TermStorageError("http_request_failed", str(exc)) from exc
        self._logger.debug("Host request", method=method, url=url, status=response.status_code)
        return response

    @staticmethod
    def _raise_for_error(response: Response) -> None:
        if response.ok:
            return
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        code = str(body.get("code") or f"http_{response.status_code}")
        message = str(body.get("message") or response.reason or "Request failed")
        raise TermStorageError(code, message, status=response.status_code)

    # ------------------------------------------------------------------
    # TermStore API
    # ------------------------------------------------------------------
    def get_term(self, term_id: int, taxonomy: str) -> Optional[Dict[str, Any]]:
        ensure_taxonomy(taxonomy)
        term_id = absint(term_id)
        if not term_id:
            return None
        response = self._request("GET", self._url(taxonomy, term_id), params={"context": "edit"})
        if response.status_code == 404:
            return None
        self._raise_for_error(response)
        return _term_from_payload(response.json(), taxonomy)

    def get_terms(self, taxonomy: str, *, hide_empty: bool = False) -> List[int]:
        ensure_taxonomy(taxonomy)
        ids: List[int] = []
        page = 1
        while True:
            response = self._request(
                "GET",
                self._url(taxonomy),
                params={
                    "per_page": _PAGE_SIZE,
                    "page": page,
                    "hide_empty": "true" if hide_empty else "false",
                    "_fields": "id",
                },
            )
            self._raise_for_error(response)
            ids.extend(int(item["id"]) for item in response.json())
            total_pages = int(response.headers.get("X-WP-TotalPages", "1") or 1)
            if page >= total_pages:
                break
            page += 1
        return ids

    def _payload(self, args: Mapping[str, Any], hierarchical: bool) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for key in _WRITABLE_FIELDS:
            if key not in args:
                continue
            if key == "parent":
                if hierarchical:
                    payload["parent"] = absint(args["parent"])
                continue
            payload[key] = args[key]
        if args.get("alias_of"):
            self._logger.warning("alias_of is not supported by the REST API; ignored", alias_of=args["alias_of"])
        return payload

    def insert_term(self, name: str, taxonomy: str, args: Mapping[str, Any]) -> int:
        hierarchical = ensure_taxonomy(taxonomy)
        payload = self._payload(args, hierarchical)
        payload["name"] = name
        response = self._request("POST", self._url(taxonomy), json=payload)
        self._raise_for_error(response)
        term_id = int(response.json()["id"])
        self._logger.info("Inserted term", term_id=term_id, taxonomy=taxonomy)
        return term_id

    def update_term(self, term_id: int, taxonomy: str, args: Mapping[str, Any]) -> int:
        hierarchical = ensure_taxonomy(taxonomy)
        term_id = absint(term_id)
        response = self._request("POST", self._url(taxonomy, term_id), json=self._payload(args, hierarchical))
        self._raise_for_error(response)
        self._logger.info("Updated term", term_id=term_id, taxonomy=taxonomy)
        return int(response.json().get("id", term_id))

    def delete_term(self, term_id: int, taxonomy: str) -> None:
        ensure_taxonomy(taxonomy)
        term_id = absint(term_id)
        # Terms do not support trashing; force is mandatory.
        response = self._request("DELETE", self._url(taxonomy, term_id), params={"force": "true"})
        self._raise_for_error(response)
        self._logger.info("Deleted term", term_id=term_id, taxonomy=taxonomy)

    def get_term_meta(self, term_id: int, taxonomy: str) -> Dict[str, Any]:
        ensure_taxonomy(taxonomy)
        response = self._request(
            "GET",
            self._url(taxonomy, absint(term_id)),
            params={"context": "edit", "_fields": "meta"},
        )
        if response.status_code == 404:
            return {}
        self._raise_for_error(response)
        meta = response.json().get("meta") or {}
        return dict(meta) if isinstance(meta, dict) else {}

    def update_term_meta(self, term_id: int, taxonomy: str, key: str, value: Any) -> None:
        ensure_taxonomy(taxonomy)
        term_id = absint(term_id)
        response = self._request("POST", self._url(taxonomy, term_id), json={"meta": {key: value}})
        self._raise_for_error(response)
        # Unregistered keys (no show_in_rest) are dropped without an error.
        try:
            meta = response.json().get("meta")
        except ValueError:
            meta = None
        if not isinstance(meta, dict) or key not in meta:
            self._logger.warning("Host dropped term meta", term_id=term_id, key=key)
            raise TermStorageError(
                "rest_meta_not_registered",
                f'The meta key "{key}" is not registered for the REST API on {taxonomy}.',
                status=response.status_code,
            )
        self._logger.debug("Updated term meta", term_id=term_id, key=key)


__all__ = ["RestTermStore"]
