from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable

from search_framework.clients.queue.models.QueueMessage import QueueMessage
from search_framework.helper.HelperConfig import HelperConfig
from search_framework.models.limits import NO_LIMIT
from search_framework.schema.Schema import Schema

if TYPE_CHECKING:
    from search_framework.clients.search.models.IndexDocument import IndexDocument


class CollectionInterface(ABC):
    """Adapter of a data source (filesystem, feed, CMS, ...) whose items are indexed.

    The collector asks the collection for the items scheduled for indexing and
    queues one message per item. The indexer later hands each consumed message
    back to the collection to load the item's full data and to populate the
    document that is sent to the search engine.
    """

    def __init__(self, helper_config: HelperConfig, collection_id: str, options: dict | None = None):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self._id = collection_id
        self.init(options or {})

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_id(self) -> str:
        return self._id

    ##########################################
    ############### CONTRACT #################
    ##########################################

    @abstractmethod
    def init(self, options: dict) -> None:
        """
        Hook for subclasses to consume their options, called by the constructor.
        """
        pass

    @abstractmethod
    def get_schema(self) -> Schema:
        """
        Returns the schema of the documents built by this collection.
        """
        pass

    @abstractmethod
    def fetch_scheduled_items(self, limit: int = NO_LIMIT) -> Iterable[Any]:
        """
        Returns the items that are due for indexing.

        Called once per producer run, so implementations may rescan their
        source on every call. The result must be finite.

        Args:
            limit (int): Maximum number of items to return, NO_LIMIT for all of them.
        """
        pass

    @abstractmethod
    def build_queue_message(self, message: QueueMessage, item: Any) -> None:
        """
        Writes the item into the message, usually by setting its identifier as the body.
        """
        pass

    @abstractmethod
    def load_source_data(self, message: QueueMessage) -> Any:
        """
        Loads the full data of the item referenced by the message.

        Returns:
            Any: The source data, or a falsy value if it could not be loaded.
                 The indexer skips the item in that case.
        """
        pass

    @abstractmethod
    def build_document(self, document: "IndexDocument", data: Any) -> None:
        """
        Attaches the fields built from the source data to the document.
        """
        pass
