"""
Synchronization coordinator for Catalog Sync.

Usage:
    from catalog_sync.infrastructure import StoreProvider
    from catalog_sync.sync import SyncCoordinator, SyncState

    provider = StoreProvider()
    provider.open(settings)
    state = SyncState()
    result = SyncCoordinator(provider, state).sync()
    if result.ok:
        print(state.names())

A sync is all-or-nothing: pages are fetched in order, every record is
decoded, and only when the last page has been consumed is a new Snapshot
published. Any failure leaves the previously published Snapshot in place.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import List, Literal, Optional

from catalog_sync.config import Settings, get_settings
from catalog_sync.domain.decoding import decode_product
from catalog_sync.domain.models import Product
from catalog_sync.errors import SourceUnavailable, SyncError
from catalog_sync.sync.abstract import StoreSource
from catalog_sync.sync.page_fetcher import PageFetcher, initial_resource_path, iter_pages
from catalog_sync.sync.state import Snapshot, SyncState
from catalog_sync.utils.logging import get_logger

log = get_logger(__name__)

FailurePolicy = Literal["tolerant", "strict"]


@dataclass
class SyncResult:
    """
    Outcome of one sync run.

    ``snapshot`` is the published Snapshot on success; ``error`` carries the
    SyncError (with its ``cause``) on failure.
    """

    ok: bool
    snapshot: Optional[Snapshot] = None
    error: Optional[SyncError] = None
    pages: int = 0
    records: int = 0
    duration_seconds: float = 0.0

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None


class SyncCoordinator:
    """
    Drive full retrieval of one collection and publish the result to a SyncState.
    """

    def __init__(
        self,
        provider: StoreSource,
        state: SyncState,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self._provider = provider
        self._state = state
        self.collection = settings.collection
        self.sort_field = settings.sort_field
        self.failure_policy: FailurePolicy = settings.failure_policy
        self._in_flight = threading.Lock()
        self._pages = 0
        self._records = 0

    @property
    def state(self) -> SyncState:
        return self._state

    def sync(self, failure_policy: Optional[FailurePolicy] = None) -> SyncResult:
        """
        Run one complete sync.

        Parameters
        ----------
        failure_policy : "tolerant" | "strict" | None
            ``tolerant`` returns a failed SyncResult, ``strict`` re-raises the
            SyncError. Defaults to the configured policy.

        Raises
        ------
        RuntimeError
            If another sync on this coordinator is still running.
        """
        policy = failure_policy or self.failure_policy
        if not self._in_flight.acquire(blocking=False):
            raise RuntimeError("A sync is already in progress")

        self._pages = 0
        self._records = 0
        start = time.perf_counter()
        try:
            log.info(
                f"[SYNC START] {self.collection}",
                extra={"collection": self.collection, "sort_field": self.sort_field},
            )
            snapshot = self._collect()
            self._state.publish(snapshot)
        except SyncError as exc:
            duration = time.perf_counter() - start
            log.exception(
                f"[SYNC FAILED] {self.collection}: {exc}",
                extra={
                    "collection": self.collection,
                    "error_kind": exc.kind,
                    "pages": self._pages,
                    "records": self._records,
                },
            )
            if policy == "strict":
                raise
            return SyncResult(
                ok=False,
                error=exc,
                pages=self._pages,
                records=self._records,
                duration_seconds=duration,
            )
        finally:
            self._in_flight.release()

        duration = time.perf_counter() - start
        log.info(
            f"[SYNC SUCCESS] {self.collection}: stored {len(snapshot.index)} items in index",
            extra={
                "collection": self.collection,
                "pages": self._pages,
                "records": self._records,
                "indexed": len(snapshot.index),
                "duration": round(duration, 3),
            },
        )
        return SyncResult(
            ok=True,
            snapshot=snapshot,
            pages=self._pages,
            records=self._records,
            duration_seconds=duration,
        )

    def sync_in_background(self, executor: Executor) -> "Future[SyncResult]":
        """Submit ``sync()`` to ``executor`` so the caller's thread is not blocked."""
        return executor.submit(self.sync)

    def _collect(self) -> Snapshot:
        store = self._provider.store
        if store is None:
            raise SourceUnavailable("Store not open")

        fetcher = PageFetcher(store)
        items: List[Product] = []
        for page in iter_pages(fetcher, initial_resource_path(self.collection, self.sort_field)):
            self._pages += 1
            for record in page.records:
                items.append(decode_product(record, record_index=len(items)))
            self._records = len(items)
        return Snapshot.from_items(items)


__all__ = ["FailurePolicy", "SyncCoordinator", "SyncResult"]
