"""Schema: the ordered set of field definitions of a collection."""

from typing import Iterator

from search_framework.models.errors import DuplicateKeyError, FieldNotFoundError
from search_framework.schema.SchemaField import SchemaField


class Schema:
    """Ordered mapping of field id to SchemaField plus a display name index.

    Every operation that changes a field's id or name updates both tables.
    """

    def __init__(self) -> None:
        self._fields: dict[str, SchemaField] = {}
        self._field_name_map: dict[str, str] = {}
        self._unique_field: str = ""

    @classmethod
    def from_options(cls, options: dict | None) -> "Schema":
        schema = cls()
        schema.build(options or {})
        return schema

    ##########################################
    ################ BUILDER #################
    ##########################################

    def build(self, options: dict) -> "Schema":
        """Populates the schema from a definition of the form
        {"unique_field": "id", "fields": {"id": {...}, "title": {...}}}.

        Raises:
            ValueError: If "fields" is not a mapping.
        """
        if "fields" in options and options["fields"] is not None:
            fields = options["fields"]
            if not isinstance(fields, dict):
                raise ValueError(f"Schema option 'fields' must be a mapping of field id to options, got {type(fields).__name__}.")
            for field_id, field_options in fields.items():
                self.attach_field(SchemaField.from_options(field_id, field_options))

        if options.get("unique_field"):
            self.set_unique_field(options["unique_field"])
        return self

    def to_options(self) -> dict:
        """Serializes the schema to the format accepted by build()."""
        return {
            "unique_field": self._unique_field,
            "fields": {field_id: field.to_options() for field_id, field in self._fields.items()},
        }

    ##########################################
    ################ FIELDS ##################
    ##########################################

    def attach_field(self, field: SchemaField) -> "Schema":
        """Adds the field, replacing a field with the same id.

        Raises:
            DuplicateKeyError: If another field already carries the field's name.
        """
        if self._field_name_map.get(field.name, field.id) != field.id:
            raise DuplicateKeyError(f"Field name '{field.name}' already associated with this schema.")
        existing = self._fields.get(field.id)
        if existing is not None:
            self._field_name_map.pop(existing.name, None)
        self._fields[field.id] = field
        self._field_name_map[field.name] = field.id
        return self

    def get_field(self, field_id: str) -> SchemaField:
        if field_id not in self._fields:
            raise FieldNotFoundError(f"Field '{field_id}' not associated with this schema.")
        return self._fields[field_id]

    def get_field_by_name(self, name: str) -> SchemaField:
        if name not in self._field_name_map:
            raise FieldNotFoundError(f"Field name '{name}' not associated with this schema.")
        return self.get_field(self._field_name_map[name])

    def has_field(self, field_id: str) -> bool:
        return field_id in self._fields

    def get_fields(self) -> dict[str, SchemaField]:
        return dict(self._fields)

    def get_field_names(self) -> list[str]:
        return list(self._field_name_map.keys())

    def detach_field(self, field: SchemaField) -> "Schema":
        return self.remove_field(field.id)

    def remove_field(self, field_id: str) -> "Schema":
        field = self._fields.pop(field_id, None)
        if field is not None:
            self._field_name_map.pop(field.name, None)
        return self

    def rename_field(self, field_id: str, new_id: str) -> SchemaField:
        """Changes the id of a field in place, keeping its position and the unique field pointer.

        Raises:
            FieldNotFoundError: If the field is not attached.
            DuplicateKeyError: If another field already uses the new id.
        """
        field = self.get_field(field_id)
        if new_id == field_id:
            return field
        if new_id in self._fields:
            raise DuplicateKeyError(f"Field '{new_id}' already associated with this schema.")

        renamed = field.model_copy(update={"id": new_id})
        self._fields = {
            (new_id if key == field_id else key): (renamed if key == field_id else value)
            for key, value in self._fields.items()
        }
        self._field_name_map[renamed.name] = new_id
        if self._unique_field == field_id:
            self._unique_field = new_id
        return renamed

    def set_field_name(self, field_id: str, name: str) -> SchemaField:
        """Changes the display name of a field.

        Raises:
            FieldNotFoundError: If the field is not attached.
            DuplicateKeyError: If another field already uses the name.
        """
        field = self.get_field(field_id)
        if self._field_name_map.get(name, field_id) != field_id:
            raise DuplicateKeyError(f"Field name '{name}' already associated with this schema.")
        renamed = field.model_copy(update={"name": name})
        self._field_name_map.pop(field.name, None)
        self._fields[field_id] = renamed
        self._field_name_map[name] = field_id
        return renamed

    ##########################################
    ############# UNIQUE FIELD ###############
    ##########################################

    def set_unique_field(self, field_id: str) -> "Schema":
        self._unique_field = field_id
        return self

    def has_unique_field(self) -> bool:
        return self._unique_field != ""

    def get_unique_field(self) -> SchemaField:
        return self.get_field(self._unique_field)

    def get_unique_field_id(self) -> str:
        return self._unique_field

    ##########################################
    ############### PROTOCOLS ################
    ##########################################

    def __iter__(self) -> Iterator[tuple[str, SchemaField]]:
        return iter(list(self._fields.items()))

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._fields
