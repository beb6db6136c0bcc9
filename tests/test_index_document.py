"""Tests for IndexDocument and IndexField."""

import pytest

from search_framework.clients.search.models.IndexField import IndexField
from search_framework.clients.search.normalizers.NormalizerInterface import NormalizerInterface
from search_framework.events.SearchEvents import SearchEvents
from search_framework.models.errors import FieldNotFoundError


class ReverseNormalizer(NormalizerInterface):
    def normalize(self, value):
        return value[::-1]


@pytest.fixture
def document(indexer, search_engine):
    return search_engine.new_document(indexer)


class TestIndexField:
    """Tests for IndexField."""

    def test_name_defaults_to_id(self) -> None:
        assert IndexField(id="title", value="x").name == "title"

    def test_str_joins_multiple_values(self) -> None:
        assert str(IndexField(id="tags", value=["a", "b"])) == "a, b"
        assert str(IndexField(id="count", value=3)) == "3"


class TestIndexDocument:
    """Tests for IndexDocument."""

    def test_set_get_has(self, document) -> None:
        document.set("title", "Hello")

        assert document.has("title")
        assert "title" in document
        assert document.get("title") == "Hello"
        assert len(document) == 1

    def test_add_field_with_name(self, document) -> None:
        document.add_field("title", "Hello", name="headline")

        assert document.get_field_name("title") == "headline"

    def test_missing_field_raises(self, document) -> None:
        """Test reading a field that was never attached is an error."""
        with pytest.raises(FieldNotFoundError):
            document.get_field("missing")
        with pytest.raises(FieldNotFoundError):
            document.get("missing")
        assert document.has("missing") is False

    def test_remove_field(self, document) -> None:
        document.set("title", "Hello")

        document.remove_field("title").remove_field("title")

        assert document.has("title") is False

    def test_iteration_keeps_attachment_order(self, document) -> None:
        document.set("b", "2").set("a", "1")

        assert list(document) == [("b", "2"), ("a", "1")]
        assert list(document.get_fields()) == ["b", "a"]

    def test_set_replaces_existing_field(self, document) -> None:
        document.set("title", "old").set("title", "new")

        assert dict(document) == {"title": "new"}


class TestFieldStages:
    """Tests for the enrich and normalize stages."""

    def test_enrich_is_persisted(self, document, dispatcher) -> None:
        """Test the enriched value is stored once on attach."""
        dispatcher.add_listener(SearchEvents.FIELD_ENRICH, lambda event: event.set_value(event.get_value() + "-enriched"))

        document.set("title", "hello")

        assert document.get_field("title").value == "hello-enriched"
        assert document.get("title") == "hello-enriched"

    def test_normalize_is_not_persisted_nor_cached(self, document, dispatcher) -> None:
        """Test normalization runs on every read and leaves the stored value alone."""
        dispatcher.add_listener(SearchEvents.FIELD_ENRICH, lambda event: event.set_value(event.get_value() + "-enriched"))
        document.set("title", "hello")

        def upper(event) -> None:
            event.set_value(event.get_value().upper())

        dispatcher.add_listener(SearchEvents.FIELD_NORMALIZE, upper)
        assert document.get("title") == "HELLO-ENRICHED"
        assert document.get_field("title").value == "hello-enriched"

        dispatcher.remove_listener(SearchEvents.FIELD_NORMALIZE, upper)
        dispatcher.add_listener(SearchEvents.FIELD_NORMALIZE, lambda event: event.set_value(event.get_value().title()))
        assert document.get("title") == "Hello-Enriched"
        assert document.get("title") == "Hello-Enriched"
        assert document.get_field("title").value == "hello-enriched"

    def test_type_normalizer_runs_before_listeners(self, indexer, search_engine, dispatcher, make_collection) -> None:
        """Test the engine's normalizer for the field type runs first, then the listeners."""
        indexer.attach_collection(make_collection("articles"))
        indexer.get_schema()
        search_engine.attach_normalizer("fulltext", ReverseNormalizer())
        dispatcher.add_listener(SearchEvents.FIELD_NORMALIZE, lambda event: event.set_value(event.get_value() + "!"))
        document = search_engine.new_document(indexer)

        document.set("title", "abc")

        assert document.get("title") == "cba!"
        assert document.get_field("title").value == "abc"

    def test_field_without_type_is_not_normalized(self, document, search_engine) -> None:
        search_engine.attach_normalizer("fulltext", ReverseNormalizer())

        document.set("unknown", "abc")

        assert document.get("unknown") == "abc"

    def test_field_event_carries_context(self, document, dispatcher, indexer, search_engine) -> None:
        events = []
        dispatcher.add_listener(SearchEvents.FIELD_ENRICH, events.append)

        document.set("title", "x")

        assert events[0].agent is indexer
        assert events[0].search_engine is search_engine
        assert events[0].document is document
        assert events[0].field.id == "title"
