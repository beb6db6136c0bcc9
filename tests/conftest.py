"""Pytest configuration and shared fixtures."""

import logging
from typing import Any, Iterable

import httpx
import pytest

from search_framework.clients.collection.CollectionInterface import CollectionInterface
from search_framework.clients.queue.memory.QueueClientMemory import QueueClientMemory
from search_framework.clients.queue.models.QueueMessage import QueueMessage
from search_framework.clients.search.SearchEngineInterface import SearchEngineInterface
from search_framework.clients.search.models.IndexDocument import IndexDocument
from search_framework.events.EventDispatcher import EventDispatcher
from search_framework.helper.HelperConfig import HelperConfig
from search_framework.logging.logging_setup import ColorLogger
from search_framework.models.limits import NO_LIMIT
from search_framework.schema.Schema import Schema
from search_framework.services.indexing.Indexer import Indexer

LOGGER_NAME = "tests.indexing"


class ListCollection(CollectionInterface):
    """Collection backed by a dict of item id -> source data.

    Options:
        items:   Mapping of item id to source data. Falsy data simulates an item
                 that cannot be loaded.
        schema:  Schema options, defaults to an "id" / "title" schema.
    """

    def init(self, options: dict) -> None:
        self.items: dict[str, Any] = dict(options.get("items", {}))
        self.schema_options: dict = options.get(
            "schema",
            {
                "unique_field": "id",
                "fields": {
                    "id": {"type": "string"},
                    "title": {"type": "fulltext"},
                },
            },
        )
        self.fetch_calls = 0

    def get_schema(self) -> Schema:
        return Schema.from_options(self.schema_options)

    def fetch_scheduled_items(self, limit: int = NO_LIMIT) -> Iterable[Any]:
        self.fetch_calls += 1
        item_ids = list(self.items)
        if limit != NO_LIMIT:
            item_ids = item_ids[:limit]
        return item_ids

    def build_queue_message(self, message: QueueMessage, item: Any) -> None:
        message.body = str(item)

    def load_source_data(self, message: QueueMessage) -> Any:
        return self.items.get(message.body)

    def build_document(self, document: IndexDocument, data: Any) -> None:
        for field_id, value in data.items():
            document.set(field_id, value)


class RecordingSearchEngine(SearchEngineInterface):
    """Search engine whose HTTP traffic goes to an in-process handler.

    Every request is recorded in `requests`; a request whose path contains one
    of the ids in `fail_on` is answered with a 500.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.requests: list[httpx.Request] = []
        self.indexed: list[dict] = []
        self.fail_on: set[str] = set()
        self.events: list = []

    def record_event(self, event) -> None:
        self.events.append(event)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if any(item_id in request.url.path for item_id in self.fail_on):
            return httpx.Response(500, text="boom")
        if request.url.path.endswith("/_search"):
            return httpx.Response(200, json={"hits": [{"id": "1"}, {"id": "2"}]})
        return httpx.Response(200, json={"ok": True})

    def _get_transport(self) -> httpx.BaseTransport:
        return httpx.MockTransport(self._handle)

    def _get_engine_name(self) -> str:
        return "Recording"

    def _get_required_config(self) -> list:
        return []

    def _get_auth_header(self) -> dict:
        return {"Authorization": "Token test"}

    def _get_base_url(self) -> str:
        return "http://search.test"

    def _get_endpoint_healthcheck(self) -> str:
        return "/ping"

    def _get_endpoint_create_index(self) -> str:
        return "/docs"

    def _get_endpoint_index_document(self, collection, document) -> str:
        return f"/docs/{collection.get_id()}/{document.get('id')}"

    def _get_endpoint_search(self) -> str:
        return "/docs/_search"

    def _get_endpoint_delete_index(self) -> str:
        return "/docs"

    def get_create_index_payload(self, indexer, options: dict) -> dict:
        schema = indexer.get_schema()
        return {
            "unique_field": schema.get_unique_field_id(),
            "fields": {field_id: field.type for field_id, field in schema},
            **options,
        }

    def get_document_payload(self, collection, document) -> dict:
        payload = dict(document)
        self.indexed.append(payload)
        return payload

    def get_search_payload(self, keywords: str, options: dict) -> dict:
        return {"q": keywords, **options}

    def extract_search_result(self, raw_response: dict) -> list:
        return [hit["id"] for hit in raw_response["hits"]]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove settings that would change the behavior under test."""
    for key in ("INDEXING_LIMIT", "INDEXING_TIMEOUT", "QUEUE_ENGINE", "QUEUE_MEMORY_NAME", "SEARCH_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def logger() -> ColorLogger:
    test_logger = logging.getLogger(LOGGER_NAME)
    test_logger.setLevel(logging.DEBUG)
    return ColorLogger(test_logger)


@pytest.fixture
def helper_config(logger: ColorLogger) -> HelperConfig:
    return HelperConfig(logger=logger)


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def queue(helper_config: HelperConfig) -> QueueClientMemory:
    return QueueClientMemory(helper_config=helper_config)


@pytest.fixture
def search_engine(helper_config: HelperConfig) -> RecordingSearchEngine:
    engine = RecordingSearchEngine(helper_config=helper_config)
    engine.boot()
    yield engine
    engine.close()


@pytest.fixture
def make_collection(helper_config: HelperConfig):
    """Factory for ListCollection instances."""

    def _make(collection_id: str = "articles", items: dict | None = None, schema: dict | None = None) -> ListCollection:
        options: dict = {"items": items or {}}
        if schema is not None:
            options["schema"] = schema
        return ListCollection(helper_config, collection_id, options)

    return _make


@pytest.fixture
def indexer(helper_config, dispatcher, search_engine, queue) -> Indexer:
    return Indexer(helper_config=helper_config, dispatcher=dispatcher, search_engine=search_engine, queue=queue)
