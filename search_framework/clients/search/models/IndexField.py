"""IndexField model: a single field of a document sent to the search engine."""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class IndexField(BaseModel):
    """A field of an index document.

    Attributes:
        id:     Field id, matches the id of the SchemaField it is defined by.
        name:   Display name, defaults to the id.
        value:  Raw value, a string or a list of strings for multivalued fields.
                Enrichment listeners may replace it with any value.
    """

    id: str = Field(frozen=True)
    name: str = ""
    value: Any = ""

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data):
        if isinstance(data, dict) and not data.get("name"):
            data = {**data, "name": data.get("id", "")}
        return data

    def __str__(self) -> str:
        if isinstance(self.value, (list, tuple)):
            return ", ".join(str(v) for v in self.value)
        return str(self.value)
