"""
Pytest configuration for Catalog Sync.

Provides fixtures for:
- Settings pointing at a fake service
- Synthetic Products records
- In-memory stores that serve pre-built pages by resource path
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from catalog_sync.config import Settings, get_settings
from catalog_sync.infrastructure.odata_store import StoreProvider
from catalog_sync.sync.abstract import Page

FIRST_PATH = "Products?$orderby=ProductID"

RecordFactory = Callable[..., Dict[str, Any]]


class FakeStore:
    """
    DataStore serving pages from a dict keyed by resource path.

    A value may be an exception instance, which is raised when that path is read.
    """

    def __init__(self, pages: Dict[str, Union[Page, Exception]]) -> None:
        self._pages = pages
        self.calls: List[str] = []

    def read(self, resource_path: str, query_options: Optional[Dict[str, Any]] = None) -> Page:
        del query_options
        self.calls.append(resource_path)
        outcome = self._pages[resource_path]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        service_url="https://odata.example.test/V2/Northwind.svc",
        collection="Products",
        sort_field="ProductID",
        timeout_seconds=5,
        connect_retries=2,
        failure_policy="tolerant",
        log_level="DEBUG",
    )


@pytest.fixture
def make_record() -> RecordFactory:
    """
    Build a raw Products record as delivered by an OData V2 service.
    """

    def _make(product_id: int, **overrides: Any) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "ProductID": product_id,
            "ProductName": f"Product {product_id}",
            "SupplierID": 1,
            "CategoryID": 2,
            "QuantityPerUnit": "10 boxes x 20 bags",
            "UnitPrice": "18.0000",
            "UnitsInStock": 39,
            "UnitsOnOrder": 0,
            "ReorderLevel": 10,
            "Discontinued": False,
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def make_pages(make_record: RecordFactory) -> Callable[..., Dict[str, Page]]:
    """
    Build a chain of pages with sequential product ids.

    ``make_pages([20, 20, 2])`` serves 20 records at FIRST_PATH, then follows
    continuation paths ``P1``, ``P2`` to the last page, whose continuation is "".
    """

    def _make(sizes: List[int], last_next: Optional[str] = "") -> Dict[str, Page]:
        pages: Dict[str, Page] = {}
        next_id = 1
        for number, size in enumerate(sizes):
            path = FIRST_PATH if number == 0 else f"P{number}"
            is_last = number == len(sizes) - 1
            records = [make_record(pid) for pid in range(next_id, next_id + size)]
            next_id += size
            pages[path] = Page(
                records=records,
                next_resource_path=last_next if is_last else f"P{number + 1}",
            )
        return pages

    return _make


@pytest.fixture
def fake_store_factory() -> Callable[[Dict[str, Union[Page, Exception]]], FakeStore]:
    return FakeStore


@pytest.fixture
def provider_for() -> Callable[[Optional[FakeStore]], StoreProvider]:
    def _make(store: Optional[FakeStore]) -> StoreProvider:
        return StoreProvider(store=store)

    return _make
