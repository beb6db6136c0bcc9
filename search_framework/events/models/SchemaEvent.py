from typing import TYPE_CHECKING, Any

from search_framework.events.models.SearchEvent import SearchEvent

if TYPE_CHECKING:
    from search_framework.clients.collection.CollectionInterface import CollectionInterface
    from search_framework.schema.Schema import Schema


class SchemaLoaderEvent(SearchEvent):
    """Thrown before a collection's schema is loaded.

    A listener that sets options replaces the collection's own schema
    definition, e.g. to load it from a configuration store.
    """

    def __init__(self, agent: Any, collection: "CollectionInterface"):
        super().__init__(agent)
        self.collection = collection
        self.options: dict = {}

    def set_options(self, options: dict) -> None:
        self.options = options

    def get_options(self) -> dict:
        return self.options


class SchemaEvent(SearchEvent):
    """Thrown after a collection's schema is loaded so listeners can alter it."""

    def __init__(self, agent: Any, collection: "CollectionInterface", schema: "Schema"):
        super().__init__(agent)
        self.collection = collection
        self.schema = schema
