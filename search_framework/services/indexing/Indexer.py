from typing import Any

from search_framework.clients.collection.CollectionInterface import CollectionInterface
from search_framework.clients.queue.QueueClientInterface import QueueClientInterface
from search_framework.clients.queue.models.QueueMessage import QueueMessage
from search_framework.clients.search.SearchEngineInterface import SearchEngineInterface
from search_framework.clients.search.models.IndexField import IndexField
from search_framework.events.EventDispatcher import EventDispatcher
from search_framework.events.SearchEvents import SearchEvents
from search_framework.events.models.DocumentEvent import IndexDocumentEvent
from search_framework.events.models.SearchEvent import SearchEngineEvent
from search_framework.helper.HelperConfig import HelperConfig
from search_framework.services.indexing.CollectionAgent import CollectionAgent
from search_framework.services.indexing.Collector import Collector
from search_framework.services.indexing.QueueWorker import QueueConsumer


class Indexer(CollectionAgent):
    """Indexes the attached collections into a search engine.

    Indexing is always a full cycle: the scheduled items are queued by a
    collector, then the queue is drained into the search engine.
    """

    def __init__(
        self,
        helper_config: HelperConfig,
        dispatcher: EventDispatcher,
        search_engine: SearchEngineInterface,
        queue: QueueClientInterface | None = None,
    ) -> None:
        super().__init__(helper_config=helper_config, dispatcher=dispatcher, queue=queue)
        self._search_engine = search_engine

    def get_search_engine(self) -> SearchEngineInterface:
        return self._search_engine

    def new_collector(self) -> Collector:
        """Returns a collector sharing this indexer's collections, queue, dispatcher and settings."""
        collector = Collector(helper_config=self._helper_config, dispatcher=self._dispatcher, queue=self.get_queue())
        collector.set_collections(self.get_collections())
        collector.set_logger(self.logging)
        collector.set_limit(self._limit)
        collector.set_timeout(self._timeout)
        return collector

    ##########################################
    ############# NORMALIZATION ##############
    ##########################################

    def normalize_field(self, field: IndexField) -> Any:
        """Applies the search engine's normalizer for the field's data type to its value."""
        value = field.value
        data_type = self.get_field_type(field.id)

        if data_type is None:
            self.logging.debug("Data type could not be determined for field '%s'", field.id)
        elif self._search_engine.has_normalizer(data_type):
            normalizer = self._search_engine.get_normalizer(data_type)
            value = normalizer.normalize(value)
            self.logging.debug("Normalizer %s applied to field '%s'", type(normalizer).__name__, field.id)

        return value

    ##########################################
    ############### INDEXING #################
    ##########################################

    def create_index(self, options: dict | None = None) -> None:
        self._search_engine.create_index(self, options or {})

    def index(self) -> int:
        """Queues the scheduled items of all collections, then indexes the queue.

        Returns:
            int: The number of documents sent to the search engine.
        """
        self.new_collector().queue()
        return self.index_queued_items()

    def index_queued_items(self) -> int:
        """Drains the queue into the search engine.

        The fused schema is computed first, so incompatible collections fail
        before anything is indexed. The search engine listens to events only
        while this method runs. Consumed messages are acknowledged when the
        queue is drained; if an error escapes they are rejected for
        redelivery and the error is re-raised.

        Returns:
            int: The number of documents sent to the search engine.
        """
        engine_name = self._search_engine.get_engine_name()
        self.logging.info("Indexing operation started for engine '%s'", engine_name)

        self.get_schema()

        queue = self.get_queue()
        consumer = QueueConsumer(self)
        num_indexed = 0

        self._dispatcher.add_subscriber(self._search_engine)
        try:
            event = SearchEngineEvent(self)
            self.dispatch_event(SearchEvents.SEARCH_ENGINE_PRE_INDEX, event, {"engine": engine_name})

            for message in consumer:
                self.logging.debug("Consumed item '%s' scheduled for indexing from queue", message.body)
                if self.index_queued_item(message):
                    num_indexed += 1

            self.dispatch_event(SearchEvents.SEARCH_ENGINE_POST_INDEX, event, {"engine": engine_name})
            queue.acknowledge(True)
        except Exception:
            queue.acknowledge(False)
            raise
        finally:
            self._dispatcher.remove_subscriber(self._search_engine)

        self.logging.info(
            "Indexing operation completed for engine '%s': %d item(s) consumed, %d document(s) indexed",
            engine_name, consumer.count(), num_indexed,
        )
        return num_indexed

    def index_queued_item(self, message: QueueMessage) -> bool:
        """Loads the source data of a consumed message and indexes the resulting document.

        Items whose data cannot be loaded are logged and skipped.

        Returns:
            bool: True if a document was sent to the search engine.
        """
        collection = self._resolve_collection(message)

        if message.error:
            self.logging.error("Item '%s' of collection '%s' was queued with an error, skipping", message.body, collection.get_id())
            return False

        data = collection.load_source_data(message)
        if not data:
            self.logging.critical("Data of item '%s' could not be loaded from collection '%s'", message.body, collection.get_id())
            return False

        self.logging.debug("Data of item '%s' fetched from collection '%s'", message.body, collection.get_id())

        document = self._search_engine.new_document(self)
        collection.build_document(document, data)

        event = IndexDocumentEvent(self, document, data)
        self.dispatch_event(SearchEvents.DOCUMENT_PRE_INDEX, event, {"item": message.body})
        self._search_engine.index_document(collection, document)
        self.dispatch_event(SearchEvents.DOCUMENT_POST_INDEX, event, {"item": message.body})

        self.logging.debug("Document of item '%s' sent to engine '%s'", message.body, self._search_engine.get_engine_name())
        return True

    def _resolve_collection(self, message: QueueMessage) -> CollectionInterface:
        """Returns the collection a message belongs to, by reference or by id."""
        if message.collection is not None:
            return message.collection
        return self.get_collection(message.collection_id)
