"""
Failure taxonomy for Catalog Sync.

Every failure that aborts a sync is a SyncError subclass raised where it
originates, with the underlying exception chained as ``cause``. The
coordinator turns these into failed SyncResult values at its boundary.
"""

from __future__ import annotations

from typing import Optional


class SyncError(RuntimeError):
    """Base class for failures that abort a synchronization run."""

    kind: str = "sync_error"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class SourceUnavailable(SyncError):
    """No usable store handle when the sync starts."""

    kind = "source_unavailable"


class TransportFailure(SyncError):
    """A page request failed or returned a response that is not an OData feed."""

    kind = "transport_failure"


class DecodingFailure(SyncError):
    """A record is missing a field or carries a non-numeric currency value."""

    kind = "decoding_failure"

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        field: Optional[str] = None,
        record_index: Optional[int] = None,
    ) -> None:
        super().__init__(message, cause)
        self.field = field
        self.record_index = record_index


__all__ = [
    "SyncError",
    "SourceUnavailable",
    "TransportFailure",
    "DecodingFailure",
]
