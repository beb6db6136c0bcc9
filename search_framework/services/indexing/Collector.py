from search_framework.clients.collection.CollectionInterface import CollectionInterface
from search_framework.events.SearchEvents import SearchEvents
from search_framework.events.models.SearchEvent import CollectionEvent, CollectorEvent
from search_framework.services.indexing.CollectionAgent import CollectionAgent
from search_framework.services.indexing.QueueWorker import QueueProducer


class Collector(CollectionAgent):
    """Fetches the items scheduled for indexing from every attached collection
    and publishes them to the queue.

    Collections are processed one after the other. Messages already published
    for a collection stay queued if a later collection fails.
    """

    def queue(self) -> int:
        """Queues the scheduled items of all attached collections.

        Returns:
            int: The number of messages published to the queue.
        """
        self.logging.info("Queueing operation started for %d collection(s)", len(self))

        event = CollectorEvent(self)
        self.dispatch_event(SearchEvents.COLLECTOR_PRE_QUEUE, event)

        num_queued = 0
        for collection in self.get_collections():
            num_queued += self.queue_collection(collection)

        self.dispatch_event(SearchEvents.COLLECTOR_POST_QUEUE, event)

        self.logging.info("Queueing operation completed, %d item(s) queued", num_queued)
        return num_queued

    def queue_collection(self, collection: CollectionInterface) -> int:
        """Queues the scheduled items of a single collection.

        Returns:
            int: The number of messages published to the queue.
        """
        collection_id = collection.get_id()
        context = {"collection": collection_id}
        self.logging.info("Fetching items of collection '%s' scheduled for indexing", collection_id)

        event = CollectionEvent(self, collection)
        self.dispatch_event(SearchEvents.COLLECTION_PRE_QUEUE, event, context)

        queue = self.get_queue()
        producer = QueueProducer(self, collection)
        for message in producer:
            queue.publish(message)
            self.logging.debug("Published item '%s' of collection '%s' to queue", message.body, collection_id)

        self.dispatch_event(SearchEvents.COLLECTION_POST_QUEUE, event, context)

        num_queued = producer.count()
        self.logging.info("Queued %d item(s) of collection '%s'", num_queued, collection_id)
        return num_queued
