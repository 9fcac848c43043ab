"""
OData store access for Catalog Sync.

ODataStore is the open connection handle the sync routine reads pages
through. It speaks OData JSON over HTTP with ``requests``:

- V2 (verbose JSON): ``{"d": {"results": [...], "__next": "<url>"}}``
- V4: ``{"value": [...], "@odata.nextLink": "<url>"}``

Server-side paging is followed through the next link, which is turned back
into a resource path relative to the service root. ``read`` performs exactly
one request and never retries; only opening the store (the service document
round-trip) retries transient connection errors, using tenacity.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from catalog_sync.config import Settings, get_settings
from catalog_sync.domain.decoding import RawRecord
from catalog_sync.errors import SourceUnavailable, TransportFailure
from catalog_sync.sync.abstract import DataStore, Page
from catalog_sync.utils.logging import get_logger

log = get_logger(__name__)

_JSON_HEADERS = {"Accept": "application/json"}

# Backoff between attempts to open the store.
_CONNECT_WAIT = wait_exponential(multiplier=1, min=1, max=10)


def _is_deferred(value: Any) -> bool:
    return isinstance(value, dict) and "__deferred" in value


def _clean_record(entity: Dict[str, Any]) -> RawRecord:
    """Drop OData bookkeeping (metadata, unexpanded navigation links)."""
    return {
        name: value
        for name, value in entity.items()
        if name != "__metadata" and not name.startswith("@odata.") and not _is_deferred(value)
    }


def parse_feed(payload: Any) -> Tuple[List[Dict[str, Any]], Optional[str]]:
    """
    Extract ``(entities, next_link)`` from an OData JSON entity-set payload.

    Raises
    ------
    TransportFailure
        If the payload is not a recognised entity-set shape.
    """
    entities: Any = None
    next_link: Optional[str] = None

    if isinstance(payload, dict) and "d" in payload:
        body = payload["d"]
        if isinstance(body, list):
            entities = body
        elif isinstance(body, dict) and isinstance(body.get("results"), list):
            entities = body["results"]
            next_link = body.get("__next")
    elif isinstance(payload, dict) and isinstance(payload.get("value"), list):
        entities = payload["value"]
        next_link = payload.get("@odata.nextLink")

    if entities is None:
        raise TransportFailure("Response is not an OData entity set")
    if not all(isinstance(entity, dict) for entity in entities):
        raise TransportFailure("OData entity set contains non-object entries")
    return entities, next_link


class ODataStore:
    """
    Ready-to-query handle on one OData service.

    Parameters
    ----------
    service_url : str
        Service root, e.g. ``https://services.odata.org/V2/Northwind/Northwind.svc``.
    session : requests.Session | None
        Session to reuse; a private one is created (and closed by ``close``)
        when omitted.
    timeout_seconds : float
        Per-request timeout; the store owns connection-level timeouts.
    """

    def __init__(
        self,
        service_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.service_url = service_url.rstrip("/")
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout = timeout_seconds

    def resolve(self, resource_path: str) -> str:
        """Absolute URL for a resource path (absolute URLs pass through)."""
        if resource_path.startswith(("http://", "https://")):
            return resource_path
        return f"{self.service_url}/{resource_path.lstrip('/')}"

    def relativize(self, url: Optional[str]) -> Optional[str]:
        """Resource path for a next link, relative to the service root when possible."""
        if not url:
            return None
        prefix = f"{self.service_url}/"
        if url.startswith(prefix):
            return url[len(prefix):]
        return url

    def ping(self) -> None:
        """Fetch the service document; raises requests errors on failure."""
        resp = self._session.get(
            f"{self.service_url}/", headers=_JSON_HEADERS, timeout=self._timeout
        )
        resp.raise_for_status()

    def read(
        self, resource_path: str, query_options: Optional[Dict[str, Any]] = None
    ) -> Page:
        """
        Read one page of an entity set.

        Raises
        ------
        TransportFailure
            On connection/HTTP errors, a non-JSON body or an unexpected shape.
        """
        url = self.resolve(resource_path)
        try:
            resp = self._session.get(
                url,
                params=query_options or None,
                headers=_JSON_HEADERS,
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise TransportFailure(f"Request for '{resource_path}' failed: {exc}", cause=exc) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TransportFailure(
                f"Response for '{resource_path}' is not valid JSON", cause=exc
            ) from exc

        try:
            entities, next_link = parse_feed(payload)
        except TransportFailure as exc:
            raise TransportFailure(
                f"Malformed response for '{resource_path}': {exc}", cause=exc
            ) from exc

        return Page(
            records=[_clean_record(entity) for entity in entities],
            next_resource_path=self.relativize(next_link),
        )

    def close(self) -> None:
        if self._owns_session:
            self._session.close()


def open_store(
    settings: Optional[Settings] = None,
    *,
    session: Optional[requests.Session] = None,
) -> ODataStore:
    """
    Open and verify a store for the configured service.

    Connection errors and timeouts are retried up to
    ``settings.connect_retries`` attempts with exponential backoff.

    Raises
    ------
    SourceUnavailable
        If the service document cannot be fetched.
    """
    settings = settings or get_settings()
    store = ODataStore(
        settings.service_url, session=session, timeout_seconds=settings.timeout_seconds
    )
    retrying = Retrying(
        stop=stop_after_attempt(max(1, settings.connect_retries)),
        wait=_CONNECT_WAIT,
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    try:
        for attempt in retrying:
            with attempt:
                store.ping()
    except requests.RequestException as exc:
        store.close()
        raise SourceUnavailable(
            f"Unable to open store at {settings.service_url}: {exc}", cause=exc
        ) from exc

    log.info("Store opened", extra={"service_url": store.service_url})
    return store


class StoreProvider:
    """
    Holds the open store handed to the sync routine.

    ``store`` is None until ``open`` succeeds (or after ``close``); the
    coordinator reports SourceUnavailable in that case instead of opening a
    store itself.
    """

    def __init__(self, store: Optional[DataStore] = None) -> None:
        self._store = store

    @property
    def store(self) -> Optional[DataStore]:
        return self._store

    def open(
        self,
        settings: Optional[Settings] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> Optional[ODataStore]:
        """Open the configured store; on failure log and leave the provider empty."""
        try:
            self._store = open_store(settings, session=session)
        except SourceUnavailable as exc:
            log.error(f"Unable to open store: {exc}", extra={"error_kind": exc.kind})
            self._store = None
        return self._store

    def close(self) -> None:
        if isinstance(self._store, ODataStore):
            self._store.close()
        self._store = None


__all__ = ["ODataStore", "StoreProvider", "open_store", "parse_feed"]
