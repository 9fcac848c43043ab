"""
Interfaces and page contract shared by the synchronization routine.

A DataStore is any already-open connection handle able to read one page of
a collection. ODataStore is the production implementation; tests provide
in-memory fakes satisfying the same Protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from catalog_sync.domain.decoding import RawRecord


@dataclass(frozen=True)
class Page:
    """
    One page of a remote collection.

    Attributes
    ----------
    records : list[RawRecord]
        Raw records in service order.
    next_resource_path : str | None
        Resource path of the following page; None or "" on the last page.
    """

    records: List[RawRecord] = field(default_factory=list)
    next_resource_path: Optional[str] = None

    @property
    def is_last(self) -> bool:
        return not self.next_resource_path


@runtime_checkable
class DataStore(Protocol):
    """
    Ready-to-query connection handle.
    """

    def read(
        self, resource_path: str, query_options: Optional[Dict[str, Any]] = None
    ) -> Page:
        """
        Perform one blocking read of ``resource_path``.

        Raises
        ------
        TransportFailure
            On network/protocol errors or a malformed response.
        """
        ...


@runtime_checkable
class StoreSource(Protocol):
    """
    Supplier of the open DataStore; ``store`` is None when no store is open.
    """

    @property
    def store(self) -> Optional[DataStore]:
        ...


__all__ = ["Page", "DataStore", "StoreSource"]
