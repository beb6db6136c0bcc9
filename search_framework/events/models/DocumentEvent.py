from typing import TYPE_CHECKING, Any

from search_framework.events.models.SearchEvent import SearchEvent

_UNSET = object()

if TYPE_CHECKING:
    from search_framework.clients.search.models.IndexDocument import IndexDocument
    from search_framework.clients.search.models.IndexField import IndexField


class IndexDocumentEvent(SearchEvent):
    """Thrown before and after a document is sent to the search engine."""

    def __init__(self, agent: Any, document: "IndexDocument", data: Any):
        super().__init__(agent)
        self.document = document
        self.source_data = data


class SearchFieldEvent(SearchEvent):
    """Thrown to enrich a field when it is attached and to normalize it when it is read.

    Listeners read and replace `value`; the field itself is left alone; the
    document decides what happens with the final value.
    """

    def __init__(self, agent: Any, search_engine: Any, document: "IndexDocument", field: "IndexField", value: Any = _UNSET):
        super().__init__(agent)
        self.search_engine = search_engine
        self.document = document
        self.field = field
        self.value = field.value if value is _UNSET else value

    def get_value(self) -> Any:
        return self.value

    def set_value(self, value: Any) -> None:
        self.value = value
