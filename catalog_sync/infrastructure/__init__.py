"""
Infrastructure package for Catalog Sync.

Centralizes OData service access (store handle, opening with retries, the
provider handed to the sync routine). Keep this layer focused on I/O,
decoupled from decoding and coordination logic.
"""

from catalog_sync.infrastructure.odata_store import (
    ODataStore,
    StoreProvider,
    open_store,
    parse_feed,
)

__all__ = [
    "ODataStore",
    "StoreProvider",
    "open_store",
    "parse_feed",
]
