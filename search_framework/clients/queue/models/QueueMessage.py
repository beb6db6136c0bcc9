"""QueueMessage model: envelope of an item scheduled for indexing."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class QueueMessage(BaseModel):
    """A message published to and consumed from a queue backend.

    Attributes:
        body:           Payload, usually the stable identifier of the scheduled item.
        error:          Set when the item could not be fetched, as opposed to
                        the queue simply being empty.
        id:             Delivery id assigned by the backend on consume; never set on publish.
        collection:     The collection that produced the message, used by the
                        indexer to load the item's source data. Not serialized.
        collection_id:  Identifier of that collection, for backends that cannot
                        keep object references.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    body: str = ""
    error: bool = False
    id: int | None = None
    collection: Any = Field(default=None, exclude=True, repr=False)
    collection_id: str | None = None

    def set_collection(self, collection: Any) -> "QueueMessage":
        self.collection = collection
        self.collection_id = collection.get_id()
        return self

    def __str__(self) -> str:
        return self.body
