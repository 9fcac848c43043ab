from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

import pytest
import requests
from tenacity import wait_none

from catalog_sync.errors import SourceUnavailable, TransportFailure
from catalog_sync.infrastructure import odata_store as odata_store_module
from catalog_sync.infrastructure.odata_store import ODataStore, StoreProvider, open_store, parse_feed

SERVICE_URL = "https://odata.example.test/V2/Northwind.svc"
FIRST_PATH = "Products?$orderby=ProductID"


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)  # type: ignore[arg-type]

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class _FakeSession:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, outcomes: List[Union[_FakeResponse, Exception]]) -> None:
        self._outcomes = list(outcomes)
        self.requests: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url: str, params=None, headers=None, timeout=None) -> _FakeResponse:
        self.requests.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


def _v2_entity(product_id: int) -> Dict[str, Any]:
    return {
        "__metadata": {
            "uri": f"{SERVICE_URL}/Products({product_id})",
            "type": "NorthwindModel.Product",
        },
        "ProductID": product_id,
        "ProductName": "Chai",
        "UnitPrice": "18.0000",
        "Discontinued": False,
        "Category": {"__deferred": {"uri": f"{SERVICE_URL}/Products({product_id})/Category"}},
    }


def _store(outcomes: List[Union[_FakeResponse, Exception]]) -> tuple[ODataStore, _FakeSession]:
    session = _FakeSession(outcomes)
    return ODataStore(SERVICE_URL, session=session, timeout_seconds=5), session  # type: ignore[arg-type]


@pytest.fixture
def no_backoff(monkeypatch):
    monkeypatch.setattr(odata_store_module, "_CONNECT_WAIT", wait_none())


class TestParseFeed:
    def test_v2_results_with_next_link(self):
        entities, next_link = parse_feed(
            {"d": {"results": [{"ProductID": 1}], "__next": f"{SERVICE_URL}/Products?$skiptoken=20"}}
        )
        assert entities == [{"ProductID": 1}]
        assert next_link == f"{SERVICE_URL}/Products?$skiptoken=20"

    def test_v2_bare_list(self):
        entities, next_link = parse_feed({"d": [{"ProductID": 1}, {"ProductID": 2}]})
        assert len(entities) == 2
        assert next_link is None

    def test_v4_value_with_next_link(self):
        entities, next_link = parse_feed(
            {"value": [{"ProductID": 1}], "@odata.nextLink": "Products?$skiptoken=1"}
        )
        assert entities == [{"ProductID": 1}]
        assert next_link == "Products?$skiptoken=1"

    @pytest.mark.parametrize(
        "payload",
        [{}, [], {"d": {"ProductID": 1}}, {"error": {"message": "boom"}}, {"value": [1, 2]}],
    )
    def test_rejects_unknown_shapes(self, payload):
        with pytest.raises(TransportFailure):
            parse_feed(payload)


class TestRead:
    def test_reads_v2_page_and_relativizes_next_link(self):
        payload = {
            "d": {
                "results": [_v2_entity(1), _v2_entity(2)],
                "__next": f"{SERVICE_URL}/Products?$orderby=ProductID&$skiptoken=20",
            }
        }
        store, session = _store([_FakeResponse(payload=payload)])

        page = store.read(FIRST_PATH)

        assert session.requests[0]["url"] == f"{SERVICE_URL}/{FIRST_PATH}"
        assert session.requests[0]["headers"] == {"Accept": "application/json"}
        assert session.requests[0]["timeout"] == 5
        assert page.next_resource_path == "Products?$orderby=ProductID&$skiptoken=20"
        assert [record["ProductID"] for record in page.records] == [1, 2]
        assert "__metadata" not in page.records[0]
        assert "Category" not in page.records[0]
        assert page.records[0]["Discontinued"] is False

    def test_last_page_has_no_continuation(self):
        store, _ = _store([_FakeResponse(payload={"d": {"results": [_v2_entity(77)]}})])

        page = store.read("Products?$orderby=ProductID&$skiptoken=60")

        assert page.is_last
        assert page.next_resource_path is None

    def test_absolute_resource_paths_pass_through(self):
        store, session = _store([_FakeResponse(payload={"value": []})])
        store.read("https://other.example.test/Products")
        assert session.requests[0]["url"] == "https://other.example.test/Products"

    def test_query_options_are_sent_as_params(self):
        store, session = _store([_FakeResponse(payload={"value": []})])
        store.read(FIRST_PATH, {"$top": 5})
        assert session.requests[0]["params"] == {"$top": 5}

    def test_http_error_is_transport_failure(self):
        store, _ = _store([_FakeResponse(status_code=500, payload={})])

        with pytest.raises(TransportFailure) as excinfo:
            store.read(FIRST_PATH)

        assert isinstance(excinfo.value.cause, requests.HTTPError)

    def test_connection_error_is_transport_failure(self):
        origin = requests.ConnectionError("connection refused")
        store, _ = _store([origin])

        with pytest.raises(TransportFailure) as excinfo:
            store.read(FIRST_PATH)

        assert excinfo.value.cause is origin

    def test_non_json_body_is_transport_failure(self):
        store, _ = _store([_FakeResponse(payload=None, text="<html>")])

        with pytest.raises(TransportFailure) as excinfo:
            store.read(FIRST_PATH)

        assert isinstance(excinfo.value.cause, ValueError)

    def test_unexpected_shape_is_transport_failure(self):
        store, _ = _store([_FakeResponse(payload={"odata.error": {}})])

        with pytest.raises(TransportFailure, match="Malformed response"):
            store.read(FIRST_PATH)

    def test_close_leaves_borrowed_session_open(self):
        store, session = _store([])
        store.close()
        assert session.closed is False


class TestOpenStore:
    def test_opens_after_service_document_round_trip(self, test_settings, no_backoff):
        session = _FakeSession([_FakeResponse(payload={"d": {"EntitySets": ["Products"]}})])

        store = open_store(test_settings, session=session)  # type: ignore[arg-type]

        assert isinstance(store, ODataStore)
        assert store.service_url == test_settings.service_url
        assert session.requests[0]["url"] == f"{test_settings.service_url}/"

    def test_retries_transient_connection_errors(self, test_settings, no_backoff):
        session = _FakeSession([requests.ConnectionError("reset"), _FakeResponse(payload={})])

        open_store(test_settings, session=session)  # type: ignore[arg-type]

        assert len(session.requests) == 2

    def test_gives_up_after_configured_attempts(self, test_settings, no_backoff):
        outcomes: List[Union[_FakeResponse, Exception]] = [
            requests.Timeout("slow") for _ in range(test_settings.connect_retries)
        ]
        session = _FakeSession(outcomes)

        with pytest.raises(SourceUnavailable) as excinfo:
            open_store(test_settings, session=session)  # type: ignore[arg-type]

        assert isinstance(excinfo.value.cause, requests.Timeout)
        assert len(session.requests) == test_settings.connect_retries

    def test_http_errors_are_not_retried(self, test_settings, no_backoff):
        session = _FakeSession([_FakeResponse(status_code=401, payload={})])

        with pytest.raises(SourceUnavailable):
            open_store(test_settings, session=session)  # type: ignore[arg-type]

        assert len(session.requests) == 1


class TestStoreProvider:
    def test_open_failure_leaves_provider_empty(self, test_settings, no_backoff):
        session = _FakeSession([_FakeResponse(status_code=503, payload={})])
        provider = StoreProvider()

        opened: Optional[ODataStore] = provider.open(test_settings, session=session)  # type: ignore[arg-type]

        assert opened is None
        assert provider.store is None

    def test_open_and_close(self, test_settings, no_backoff):
        session = _FakeSession([_FakeResponse(payload={})])
        provider = StoreProvider()

        provider.open(test_settings, session=session)  # type: ignore[arg-type]
        assert isinstance(provider.store, ODataStore)

        provider.close()
        assert provider.store is None
