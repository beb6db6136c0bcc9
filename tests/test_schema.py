"""Tests for Schema, SchemaField and SchemaLoader."""

import pytest

from search_framework.events.SearchEvents import SearchEvents
from search_framework.models.errors import DuplicateKeyError, FieldNotFoundError
from search_framework.schema.Schema import Schema
from search_framework.schema.SchemaField import SchemaField, SchemaFieldType
from search_framework.schema.SchemaLoader import SchemaLoader
from search_framework.services.indexing.Collector import Collector

OPTIONS = {
    "unique_field": "id",
    "fields": {
        "id": {"type": "string", "store": True},
        "title": {"type": "fulltext", "name": "headline", "analyze": True},
        "published": {"type": "date", "label": "Published at"},
    },
}


class TestSchemaField:
    """Tests for SchemaField."""

    def test_from_options_maps_option_keys(self) -> None:
        """Test the declarative option keys populate the flags."""
        field = SchemaField.from_options("title", {"type": "fulltext", "index": False, "store": True, "multivalue": True, "analyze": True})

        assert field.id == "title"
        assert field.name == "title"
        assert field.type == SchemaFieldType.FULLTEXT
        assert field.indexed is False
        assert field.stored is True
        assert field.multivalued is True
        assert field.analyzed is True

    def test_defaults(self) -> None:
        """Test a field without options is indexed and nothing else."""
        field = SchemaField.from_options("body")

        assert field.indexed is True
        assert field.stored is False
        assert field.size is None
        assert "size" not in field.to_options()

    def test_to_options_round_trips(self) -> None:
        """Test to_options() output rebuilds an equal field."""
        field = SchemaField.from_options("price", {"type": "decimal", "size": "double", "store": True})

        rebuilt = SchemaField.from_options("price", field.to_options())

        assert rebuilt == field

    def test_id_is_frozen(self) -> None:
        """Test the id cannot be assigned directly."""
        field = SchemaField.from_options("title")

        with pytest.raises(Exception):
            field.id = "other"


class TestSchema:
    """Tests for Schema."""

    @pytest.fixture
    def schema(self) -> Schema:
        return Schema.from_options(OPTIONS)

    def test_build_keeps_field_order(self, schema: Schema) -> None:
        """Test fields are kept in definition order."""
        assert [field_id for field_id, _ in schema] == ["id", "title", "published"]
        assert len(schema) == 3
        assert "title" in schema

    def test_build_rejects_non_mapping_fields(self) -> None:
        """Test a list of fields is refused."""
        with pytest.raises(ValueError):
            Schema.from_options({"fields": ["id", "title"]})

    def test_empty_options_build_empty_schema(self) -> None:
        """Test no options give an empty schema without unique field."""
        schema = Schema.from_options(None)

        assert len(schema) == 0
        assert schema.has_unique_field() is False

    def test_get_field_by_name(self, schema: Schema) -> None:
        """Test lookup by display name."""
        assert schema.get_field_by_name("headline").id == "title"
        assert schema.get_field_names() == ["id", "headline", "published"]

    def test_get_missing_field_raises(self, schema: Schema) -> None:
        """Test a missing field is an error, not None."""
        with pytest.raises(FieldNotFoundError):
            schema.get_field("missing")
        with pytest.raises(FieldNotFoundError):
            schema.get_field_by_name("missing")

    def test_unique_field(self, schema: Schema) -> None:
        """Test the unique field pointer."""
        assert schema.has_unique_field() is True
        assert schema.get_unique_field_id() == "id"
        assert schema.get_unique_field().stored is True

    def test_remove_field_updates_name_map(self, schema: Schema) -> None:
        """Test removing a field also drops its name, and removing twice is a no-op."""
        schema.remove_field("title")
        schema.remove_field("title")

        assert schema.has_field("title") is False
        assert "headline" not in schema.get_field_names()

    def test_attach_field_replaces_old_name(self, schema: Schema) -> None:
        """Test re-attaching a field with a new name drops the old name."""
        schema.attach_field(SchemaField.from_options("title", {"name": "caption"}))

        assert schema.get_field_by_name("caption").id == "title"
        assert "headline" not in schema.get_field_names()

    def test_attach_field_with_taken_name_raises(self) -> None:
        """Test a new field cannot take a name another field already carries."""
        schema = Schema.from_options({"fields": {"a": {"name": "x"}}})

        with pytest.raises(DuplicateKeyError):
            schema.attach_field(SchemaField.from_options("b", {"name": "x"}))

        assert schema.has_field("b") is False
        assert schema.get_field_by_name("x").id == "a"

        schema.remove_field("a")
        with pytest.raises(FieldNotFoundError):
            schema.get_field_by_name("x")

    def test_build_rejects_shared_names(self) -> None:
        """Test two field definitions with the same display name are refused."""
        with pytest.raises(DuplicateKeyError):
            Schema.from_options({"fields": {"a": {"name": "x"}, "b": {"name": "x"}}})

    def test_rename_field_keeps_position_and_unique_pointer(self, schema: Schema) -> None:
        """Test renaming the unique field moves the pointer along."""
        renamed = schema.rename_field("id", "uid")

        assert renamed.id == "uid"
        assert [field_id for field_id, _ in schema] == ["uid", "title", "published"]
        assert schema.get_unique_field_id() == "uid"
        assert schema.has_field("id") is False

    def test_rename_field_onto_existing_id_raises(self, schema: Schema) -> None:
        """Test two fields cannot end up with the same id."""
        with pytest.raises(DuplicateKeyError):
            schema.rename_field("title", "published")

        assert schema.has_field("title") is True

    def test_set_field_name(self, schema: Schema) -> None:
        """Test changing the display name updates the name map."""
        schema.set_field_name("published", "date")

        assert schema.get_field("published").name == "date"
        assert schema.get_field_by_name("date").id == "published"
        assert "published" not in schema.get_field_names()

    def test_set_field_name_taken_raises(self, schema: Schema) -> None:
        """Test a display name cannot be shared."""
        with pytest.raises(DuplicateKeyError):
            schema.set_field_name("published", "headline")

    def test_to_options_round_trips(self, schema: Schema) -> None:
        """Test to_options() rebuilds an equal schema."""
        rebuilt = Schema.from_options(schema.to_options())

        assert rebuilt.to_options() == schema.to_options()


class TestSchemaLoader:
    """Tests for SchemaLoader."""

    def test_uses_collection_schema(self, helper_config, dispatcher, make_collection) -> None:
        """Test the collection's own schema is used without listeners."""
        agent = Collector(helper_config=helper_config, dispatcher=dispatcher)
        collection = make_collection()

        schema = SchemaLoader(agent, collection).load()

        assert schema.get_unique_field_id() == "id"
        assert schema.has_field("title")

    def test_listener_supplies_options(self, helper_config, dispatcher, make_collection) -> None:
        """Test options set on the load event replace the collection's schema."""
        agent = Collector(helper_config=helper_config, dispatcher=dispatcher)
        collection = make_collection()
        dispatcher.add_listener(
            SearchEvents.SCHEMA_LOAD,
            lambda event: event.set_options({"unique_field": "path", "fields": {"path": {"type": "string"}}}),
        )

        schema = SchemaLoader(agent, collection).load()

        assert schema.get_unique_field_id() == "path"
        assert schema.has_field("title") is False
