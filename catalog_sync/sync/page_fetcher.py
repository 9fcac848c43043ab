"""
Page fetching for Catalog Sync.

PageFetcher issues exactly one read per call; iter_pages turns the chain of
continuation paths into a lazy, finite sequence of pages.
"""

from __future__ import annotations

from typing import Iterator

from catalog_sync.errors import SyncError, TransportFailure
from catalog_sync.sync.abstract import DataStore, Page
from catalog_sync.utils.logging import get_logger

log = get_logger(__name__)


def initial_resource_path(collection: str, sort_field: str) -> str:
    """
    Build the first resource path of a sync run.

    The ordering directive keeps server-side paging deterministic: skip
    tokens are only meaningful relative to a fixed sort order.
    """
    return f"{collection}?$orderby={sort_field}"


class PageFetcher:
    """
    Read one page of a collection through a DataStore.

    No retries and no decoding happen here.
    """

    def __init__(self, store: DataStore) -> None:
        self._store = store
        self.calls = 0

    def fetch(self, resource_path: str) -> Page:
        self.calls += 1
        try:
            return self._store.read(resource_path, None)
        except SyncError:
            raise
        except Exception as exc:
            raise TransportFailure(f"Request for '{resource_path}' failed: {exc}", cause=exc) from exc


def iter_pages(fetcher: PageFetcher, resource_path: str) -> Iterator[Page]:
    """
    Yield pages starting at ``resource_path`` until the continuation path is
    absent or empty.

    The generator is not restartable; the next page is only requested when
    the consumer asks for it.
    """
    page_number = 0
    while resource_path:
        page_number += 1
        log.debug(f"[PAGE {page_number}] Requesting {resource_path}", extra={"page": page_number})
        page = fetcher.fetch(resource_path)
        yield page
        resource_path = page.next_resource_path or ""


__all__ = ["PageFetcher", "initial_resource_path", "iter_pages"]
