"""
Catalog Sync - read-only synchronization of a paginated OData collection.

This package pulls every page of a remote OData entity set (the Northwind
``Products`` set by default), decodes each record into a typed Product and
publishes an immutable snapshot made of:

- the products in page-arrival order, for list views
- an index keyed by ProductID, for detail lookups

A sync is all-or-nothing: a failed run never replaces the last published
snapshot.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from catalog_sync.config import Settings, get_settings
from catalog_sync.domain import Product, decode_product, format_currency
from catalog_sync.errors import DecodingFailure, SourceUnavailable, SyncError, TransportFailure
from catalog_sync.infrastructure import ODataStore, StoreProvider, open_store
from catalog_sync.sync import (
    Page,
    PageFetcher,
    Snapshot,
    SyncCoordinator,
    SyncResult,
    SyncState,
    iter_pages,
)
from catalog_sync.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Product",
    "decode_product",
    "format_currency",
    # Errors
    "SyncError",
    "SourceUnavailable",
    "TransportFailure",
    "DecodingFailure",
    # Infrastructure
    "ODataStore",
    "StoreProvider",
    "open_store",
    # Sync
    "Page",
    "PageFetcher",
    "Snapshot",
    "SyncCoordinator",
    "SyncResult",
    "SyncState",
    "iter_pages",
    # Logging
    "configure_logging",
    "get_logger",
]
