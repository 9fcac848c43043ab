"""
Published sync state.

A Snapshot pairs the ordered products with an index keyed by product id.
SyncState owns the current Snapshot and swaps it in one assignment, so a
reader holding ``state.snapshot`` always sees a complete pair.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from catalog_sync.domain.models import Product


def build_index(items: Iterable[Product]) -> Mapping[str, Product]:
    """
    Key products by id. A repeated id keeps the last product seen.
    """
    index: dict[str, Product] = {}
    for product in items:
        index[product.product_id] = product
    return MappingProxyType(index)


@dataclass(frozen=True)
class Snapshot:
    """
    Result of one complete sync: ordered products plus the derived index.
    """

    items: Tuple[Product, ...] = ()
    index: Mapping[str, Product] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_items(cls, items: Iterable[Product]) -> "Snapshot":
        ordered = tuple(items)
        return cls(items=ordered, index=build_index(ordered))

    def __len__(self) -> int:
        return len(self.items)

    def names(self) -> List[str]:
        """Product names in list order."""
        return [product.product_name for product in self.items]

    def get(self, product_id: str) -> Optional[Product]:
        return self.index.get(product_id)


class SyncState:
    """
    Holder of the last successfully published Snapshot.

    Created once by the application and handed to both the coordinator
    (writer) and the presentation layer (readers).
    """

    def __init__(self, snapshot: Optional[Snapshot] = None) -> None:
        self._snapshot = snapshot if snapshot is not None else Snapshot()
        self._lock = threading.Lock()
        self.generation = 0

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def items(self) -> Tuple[Product, ...]:
        return self._snapshot.items

    @property
    def index(self) -> Mapping[str, Product]:
        return self._snapshot.index

    def names(self) -> List[str]:
        return self._snapshot.names()

    def get(self, product_id: str) -> Optional[Product]:
        return self._snapshot.get(product_id)

    def publish(self, snapshot: Snapshot) -> None:
        """Replace the current snapshot."""
        with self._lock:
            self._snapshot = snapshot
            self.generation += 1


__all__ = ["Snapshot", "SyncState", "build_index"]
