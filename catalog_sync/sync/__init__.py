"""
Sync package for Catalog Sync.

Re-exports the page contract, the fetcher and the coordinator so callers can
import from `catalog_sync.sync` directly.
"""

from catalog_sync.sync.abstract import DataStore, Page, StoreSource
from catalog_sync.sync.coordinator import SyncCoordinator, SyncResult
from catalog_sync.sync.page_fetcher import PageFetcher, initial_resource_path, iter_pages
from catalog_sync.sync.state import Snapshot, SyncState, build_index

__all__ = [
    # Contracts
    "DataStore",
    "Page",
    "StoreSource",
    # Fetching
    "PageFetcher",
    "initial_resource_path",
    "iter_pages",
    # Coordination
    "SyncCoordinator",
    "SyncResult",
    # State
    "Snapshot",
    "SyncState",
    "build_index",
]
