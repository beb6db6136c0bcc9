from typing import TYPE_CHECKING

from search_framework.clients.collection.CollectionInterface import CollectionInterface
from search_framework.events.SearchEvents import SearchEvents
from search_framework.events.models.SchemaEvent import SchemaLoaderEvent
from search_framework.schema.Schema import Schema

if TYPE_CHECKING:
    from search_framework.services.indexing.CollectionAgent import CollectionAgent


class SchemaLoader:
    """Loads the schema of a collection.

    Listeners of SCHEMA_LOAD may supply the schema options from another source
    (a definition file, a configuration service); otherwise the collection's
    own schema is used.
    """

    def __init__(self, agent: "CollectionAgent", collection: CollectionInterface):
        self._agent = agent
        self._collection = collection

    def load(self) -> Schema:
        log = self._agent.get_logger()
        collection_id = self._collection.get_id()

        event = SchemaLoaderEvent(self._agent, self._collection)
        self._agent.dispatch_event(SearchEvents.SCHEMA_LOAD, event, {"collection": collection_id})

        options = event.get_options()
        if options:
            log.debug("Schema options for collection '%s' loaded from an external source", collection_id)
            return Schema.from_options(options)

        schema = self._collection.get_schema()
        if not len(schema):
            log.notice("Collection '%s' defines no fields", collection_id)
        return schema
