"""Base of the objects that operate on a set of collections (collector, indexer)."""

from abc import ABC
from typing import Any

from search_framework.clients.collection.CollectionInterface import CollectionInterface
from search_framework.clients.queue.QueueClientInterface import QueueClientInterface
from search_framework.clients.queue.memory.QueueClientMemory import QueueClientMemory
from search_framework.events.EventDispatcher import EventDispatcher
from search_framework.events.SearchEvents import SearchEvents
from search_framework.events.models.SchemaEvent import SchemaEvent
from search_framework.events.models.SearchEvent import SearchEvent
from search_framework.helper.HelperConfig import HelperConfig
from search_framework.logging.logging_setup import ColorLogger
from search_framework.models.errors import CollectionNotFoundError, DuplicateKeyError, SchemaConflictError
from search_framework.models.limits import NO_LIMIT
from search_framework.schema.Schema import Schema
from search_framework.schema.SchemaLoader import SchemaLoader


class CollectionAgent(ABC):
    """Owns the attached collections, the queue, the fused schema and the
    limit / timeout settings shared by the workers.

    The fused schema is computed lazily and dropped whenever a collection is
    attached or removed. Not thread-safe: one agent drives one run at a time.

    Settings:
        INDEXING_LIMIT:    Max number of items processed per operation, -1 for no limit.
        INDEXING_TIMEOUT:  Max number of seconds per operation, -1 for no timeout.
    """

    def __init__(
        self,
        helper_config: HelperConfig,
        dispatcher: EventDispatcher,
        queue: QueueClientInterface | None = None,
    ) -> None:
        self._helper_config = helper_config
        self.logging = helper_config.get_logger()
        self._dispatcher = dispatcher
        self._queue = queue
        self._collections: dict[str, CollectionInterface] = {}
        self._schema: Schema | None = None
        # field id -> data type, filled while fusing the schema
        self._field_types: dict[str, str] = {}
        self._limit = helper_config.get_number_val("INDEXING_LIMIT", default=NO_LIMIT)
        self._timeout = helper_config.get_number_val("INDEXING_TIMEOUT", default=NO_LIMIT)

    ##########################################
    ################ EVENTS ##################
    ##########################################

    def get_dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    def dispatch_event(self, name: str, event: SearchEvent, context: dict[str, Any] | None = None) -> SearchEvent:
        """Dispatches the event, wrapped in debug log messages."""
        context = {**(context or {}), "event": name}
        self.logging.debug("Throwing event %s", context)
        self._dispatcher.dispatch(name, event)
        self.logging.debug("Event thrown %s", context)
        return event

    ##########################################
    ############## COLLECTIONS ###############
    ##########################################

    def attach_collection(self, collection: CollectionInterface) -> "CollectionAgent":
        """
        Raises:
            DuplicateKeyError: If a collection with the same id is already attached.
        """
        collection_id = collection.get_id()
        if collection_id in self._collections:
            raise DuplicateKeyError(f"Collection already attached: {collection_id}")

        self._collections[collection_id] = collection
        self.clear_schema()
        self.logging.debug("Collection '%s' attached", collection_id)
        return self

    def set_collections(self, collections: list[CollectionInterface]) -> "CollectionAgent":
        for collection in collections:
            self.attach_collection(collection)
        return self

    def has_collection(self, collection_id: str) -> bool:
        return collection_id in self._collections

    def get_collection(self, collection_id: str) -> CollectionInterface:
        if collection_id not in self._collections:
            raise CollectionNotFoundError(f"Collection not attached: {collection_id}")
        return self._collections[collection_id]

    def get_collections(self) -> list[CollectionInterface]:
        """Returns the attached collections in attachment order."""
        return list(self._collections.values())

    def remove_collection(self, collection_id: str) -> "CollectionAgent":
        """Detaches the collection. Does nothing if it is not attached."""
        self._collections.pop(collection_id, None)
        self.clear_schema()
        self.logging.debug("Collection '%s' removed", collection_id)
        return self

    def __len__(self) -> int:
        return len(self._collections)

    ##########################################
    ################ SCHEMA ##################
    ##########################################

    def clear_schema(self) -> None:
        self._schema = None
        self._field_types = {}

    def get_schema(self) -> Schema:
        """Returns the fused schema of all attached collections, fusing it on first access.

        Raises:
            SchemaConflictError: If the collections' schemata are incompatible.
        """
        if self._schema is None:
            self._schema = self.load_schemata()
        return self._schema

    def get_field_type(self, field_id: str) -> str | None:
        """Returns the data type of a field of the fused schema, None if unknown.

        Only populated once the schema was fused, see get_schema().
        """
        return self._field_types.get(field_id)

    def load_schemata(self) -> Schema:
        """Loads and fuses the schemata of all attached collections.

        The first collection's schema seeds the result. Every other collection
        must use the same unique field and may only add fields or redefine
        existing ones identically. Also rebuilds the field type cache.

        Raises:
            SchemaConflictError: On a unique field mismatch or an incompatible field definition,
                or when two fields of different collections share a display name.
        """
        fused_options: dict | None = None
        fused_from: dict[str, str] = {}

        for collection in self._collections.values():
            collection_id = collection.get_id()
            schema_options = self.load_collection_schema(collection).to_options()

            if fused_options is None:
                fused_options = schema_options
                fused_from = {field_id: collection_id for field_id in schema_options["fields"]}
                continue

            if schema_options["unique_field"] != fused_options["unique_field"]:
                raise SchemaConflictError(
                    f"Collections must have the same unique field: collection '{collection_id}' uses "
                    f"'{schema_options['unique_field']}', expected '{fused_options['unique_field']}'."
                )

            for field_id, field_options in schema_options["fields"].items():
                if field_id not in fused_options["fields"]:
                    fused_options["fields"][field_id] = field_options
                    fused_from[field_id] = collection_id
                elif fused_options["fields"][field_id] != field_options:
                    raise SchemaConflictError(
                        f"Field definitions for '{field_id}' must match: collection '{collection_id}' "
                        f"conflicts with collection '{fused_from[field_id]}'."
                    )

        try:
            schema = Schema.from_options(fused_options)
        except DuplicateKeyError as e:
            raise SchemaConflictError(f"Fused schema is inconsistent: {e}") from e
        self._field_types = {field_id: field.type for field_id, field in schema}
        self.logging.debug("Fused schema of %d collection(s) with %d field(s)", len(self), len(schema))
        return schema

    def load_collection_schema(self, collection: CollectionInterface) -> Schema:
        """Loads the schema of a single collection and lets SCHEMA_ALTER listeners modify it."""
        schema = SchemaLoader(self, collection).load()
        event = SchemaEvent(self, collection, schema)
        self.dispatch_event(SearchEvents.SCHEMA_ALTER, event, {"collection": collection.get_id()})
        return event.schema

    ##########################################
    ############### SETTINGS #################
    ##########################################

    def set_queue(self, queue: QueueClientInterface) -> "CollectionAgent":
        self._queue = queue
        return self

    def get_queue(self) -> QueueClientInterface:
        """Returns the queue backend, an in-memory queue if none was set."""
        if self._queue is None:
            self._queue = QueueClientMemory(helper_config=self._helper_config)
        return self._queue

    def set_logger(self, logger: ColorLogger) -> "CollectionAgent":
        self.logging = logger
        return self

    def get_logger(self) -> ColorLogger:
        return self.logging

    def set_limit(self, limit: int) -> "CollectionAgent":
        self._limit = limit
        return self

    def get_limit(self) -> int:
        return self._limit

    def set_timeout(self, timeout: float) -> "CollectionAgent":
        self._timeout = timeout
        return self

    def get_timeout(self) -> float:
        return self._timeout
