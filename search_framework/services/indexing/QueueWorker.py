"""Bounded workers that move messages between collections, the queue and the indexer.

A worker is a restartable pull sequence: reset() starts a run, next_message()
returns the next message or None when the run is over. A run ends when the
source is exhausted, when the agent's timeout has passed or when the agent's
limit is reached, whichever comes first. Iterating a worker resets it, so the
same worker object can be iterated more than once.
"""

import math
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterator

from search_framework.clients.collection.CollectionInterface import CollectionInterface
from search_framework.clients.queue.models.QueueMessage import QueueMessage
from search_framework.models.errors import InvalidScheduledItemsError
from search_framework.models.limits import NO_LIMIT

if TYPE_CHECKING:
    from search_framework.services.indexing.CollectionAgent import CollectionAgent

# end of a collection's scheduled items; None is a valid item
_EXHAUSTED = object()


class QueueWorkerInterface(ABC):
    def __init__(self, agent: "CollectionAgent"):
        self._agent = agent
        self._count = 0
        # set by reset()
        self._expiry = -math.inf

    def get_collection_agent(self) -> "CollectionAgent":
        return self._agent

    ##########################################
    ################ BOUNDS ##################
    ##########################################

    def timed_out(self) -> bool:
        return time.monotonic() >= self._expiry

    def limit_exceeded(self, count: int) -> bool:
        """Whether count is beyond the agent's limit, i.e. exactly `limit` items are allowed."""
        limit = self._agent.get_limit()
        return limit != NO_LIMIT and count > limit

    ##########################################
    ################ PULLING #################
    ##########################################

    def reset(self) -> None:
        """Starts a new run: zeroes the count and restarts the timeout clock."""
        self._count = 0
        timeout = self._agent.get_timeout()
        if timeout != NO_LIMIT:
            self._expiry = time.monotonic() + timeout
        else:
            self._expiry = math.inf

    def next_message(self) -> QueueMessage | None:
        message = self._fetch()
        if message is not None:
            self._count += 1
        return message

    @abstractmethod
    def _fetch(self) -> QueueMessage | None:
        """
        Returns the next message of the run, or None if the run is over.
        """
        pass

    def count(self) -> int:
        """Number of messages returned by the current run."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[QueueMessage]:
        self.reset()
        while True:
            message = self.next_message()
            if message is None:
                return
            yield message


class QueueProducer(QueueWorkerInterface):
    """Turns the items a collection has scheduled for indexing into queue messages.

    The messages are not published here; the collector publishes each one as
    it is returned.
    """

    def __init__(self, agent: "CollectionAgent", collection: CollectionInterface):
        super().__init__(agent)
        self._collection = collection
        self._scheduled_items: Iterator[Any] = iter(())

    def get_collection(self) -> CollectionInterface:
        return self._collection

    def reset(self) -> None:
        super().reset()
        items = self._collection.fetch_scheduled_items(self._agent.get_limit())
        try:
            self._scheduled_items = iter(items)
        except TypeError:
            raise InvalidScheduledItemsError(
                f"Collection '{self._collection.get_id()}' returned scheduled items of type "
                f"{type(items).__name__}, expected an iterable."
            ) from None

    def _fetch(self) -> QueueMessage | None:
        log = self._agent.get_logger()
        collection_id = self._collection.get_id()

        if self.timed_out():
            log.info("Fetching items of collection '%s' timed out after %ss", collection_id, self._agent.get_timeout())
            return None
        if self.limit_exceeded(self._count + 1):
            return None

        item = next(self._scheduled_items, _EXHAUSTED)
        if item is _EXHAUSTED:
            return None

        message = self._agent.get_queue().new_message()
        message.set_collection(self._collection)
        self._collection.build_queue_message(message, item)

        log.debug("Fetched item '%s' scheduled for indexing from collection '%s'", message.body, collection_id)
        return message


class QueueConsumer(QueueWorkerInterface):
    """Consumes the messages queued for indexing.

    Every returned message is recorded in the queue's consumed log, to be
    settled by the next acknowledge(). The count is the number of messages
    taken off the queue, not the number of documents that were indexed.
    """

    def reset(self) -> None:
        super().reset()
        # a new consumer session gets everything that was never acknowledged
        self._agent.get_queue().recover()

    def _fetch(self) -> QueueMessage | None:
        if self.timed_out():
            self._agent.get_logger().info("Consuming the queue timed out after %ss", self._agent.get_timeout())
            return None
        if self.limit_exceeded(self._count + 1):
            return None

        queue = self._agent.get_queue()
        message = queue.consume()
        if message is None:
            return None
        queue.attach_consumed_message(message)
        return message
