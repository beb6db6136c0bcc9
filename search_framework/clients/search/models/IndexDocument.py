"""IndexDocument: the document built from an item's source data."""

from typing import TYPE_CHECKING, Any, Iterator

from search_framework.clients.search.models.IndexField import IndexField
from search_framework.events.SearchEvents import SearchEvents
from search_framework.events.models.DocumentEvent import SearchFieldEvent
from search_framework.models.errors import FieldNotFoundError

if TYPE_CHECKING:
    from search_framework.services.indexing.Indexer import Indexer


class IndexDocument:
    """Ordered set of IndexFields keyed by field id.

    Two transformation stages apply to every field:

    * enrich, once, when the field is attached: the FIELD_ENRICH listeners
      may rewrite the value and the result is stored permanently.
    * normalize, on every read through get() or iteration: the search
      engine's normalizer for the field's data type runs first, then the
      FIELD_NORMALIZE listeners. Nothing is cached and the stored value is
      never touched.

    Reading a field that is not attached raises FieldNotFoundError.
    """

    def __init__(self, indexer: "Indexer"):
        self._indexer = indexer
        self._fields: dict[str, IndexField] = {}

    def get_indexer(self) -> "Indexer":
        return self._indexer

    ##########################################
    ################ FIELDS ##################
    ##########################################

    def attach_field(self, field: IndexField) -> "IndexDocument":
        """Enriches the field and attaches it, replacing a field with the same id."""
        event = SearchFieldEvent(self._indexer, self._indexer.get_search_engine(), self, field)
        self._indexer.get_dispatcher().dispatch(SearchEvents.FIELD_ENRICH, event)
        field.value = event.value

        self._fields[field.id] = field
        return self

    def add_field(self, field_id: str, value: Any, name: str | None = None) -> "IndexDocument":
        field = self._indexer.get_search_engine().new_field(field_id, value, name)
        return self.attach_field(field)

    def set(self, field_id: str, value: Any) -> "IndexDocument":
        return self.add_field(field_id, value)

    def get_field(self, field_id: str) -> IndexField:
        if field_id not in self._fields:
            raise FieldNotFoundError(f"Field '{field_id}' not attached to document.")
        return self._fields[field_id]

    def get(self, field_id: str) -> Any:
        """Returns the normalized value of the field."""
        return self.normalize_field(self.get_field(field_id))

    def has(self, field_id: str) -> bool:
        return field_id in self._fields

    def get_fields(self) -> dict[str, IndexField]:
        return dict(self._fields)

    def get_field_name(self, field_id: str) -> str:
        return self.get_field(field_id).name

    def remove_field(self, field_id: str) -> "IndexDocument":
        self._fields.pop(field_id, None)
        return self

    ##########################################
    ############# NORMALIZATION ##############
    ##########################################

    def normalize_field(self, field: IndexField) -> Any:
        value = self._indexer.normalize_field(field)
        event = SearchFieldEvent(self._indexer, self._indexer.get_search_engine(), self, field, value)
        self._indexer.get_dispatcher().dispatch(SearchEvents.FIELD_NORMALIZE, event)
        return event.value

    ##########################################
    ############### PROTOCOLS ################
    ##########################################

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        """Yields (field id, normalized value) pairs in attachment order."""
        for field_id, field in list(self._fields.items()):
            yield field_id, self.normalize_field(field)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._fields
