"""SchemaField model: definition of a single field of a collection's schema."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SchemaFieldType:
    """Data types known to the framework. Search engines may support more."""

    FULLTEXT = "fulltext"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    DATE = "date"
    BOOLEAN = "boolean"
    BINARY = "binary"
    LOCATION = "location"
    UNINDEXED = "unindexed"


class SchemaFieldSize:
    """Size qualifiers for integer and decimal fields."""

    BYTE = "byte"
    SHORT = "short"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"


class SchemaField(BaseModel):
    """Definition of a field in a collection's schema.

    The id and display name are frozen: a field attached to a schema can only
    be re-keyed through Schema.rename_field() and Schema.set_field_name() so
    that both lookup tables of the schema stay consistent.

    The flags are populated from the option keys used in schema definitions
    ("index", "store", "multivalue", "analyze").

    Attributes:
        id:           Unique identifier of the field within the schema.
        name:         Display name, defaults to the id.
        label:        Human-readable label.
        description:  Human-readable description.
        type:         Data type, see SchemaFieldType.
        size:         Optional size qualifier, see SchemaFieldSize.
        indexed:      Whether the field's data is indexed.
        stored:       Whether the field's data is stored.
        multivalued:  Whether the field accepts multiple values.
        analyzed:     Whether the field's data is analyzed (tokenized etc.).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(frozen=True)
    name: str = Field(default="", frozen=True)
    label: str = ""
    description: str = ""
    type: str = ""
    size: str | None = None
    indexed: bool = Field(default=True, alias="index")
    stored: bool = Field(default=False, alias="store")
    multivalued: bool = Field(default=False, alias="multivalue")
    analyzed: bool = Field(default=False, alias="analyze")

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data):
        if isinstance(data, dict) and not data.get("name"):
            data = {**data, "name": data.get("id", "")}
        return data

    @classmethod
    def from_options(cls, field_id: str, options: dict | None = None) -> "SchemaField":
        """Builds a field from a declarative option mapping, e.g. parsed from a definition file."""
        options = dict(options or {})
        options.pop("id", None)
        for key in ("name", "label", "description", "type", "size"):
            if options.get(key) is not None:
                options[key] = str(options[key])
        return cls(id=field_id, **options)

    def to_options(self) -> dict:
        """Returns the option mapping of the field, the inverse of from_options().

        Two fields are structurally identical if their options are equal.
        """
        options = self.model_dump(by_alias=True, exclude={"id"})
        if options.get("size") is None:
            options.pop("size", None)
        return options
