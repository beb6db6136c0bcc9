"""Events thrown around collector and indexer operations."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from search_framework.clients.collection.CollectionInterface import CollectionInterface


class SearchEvent:
    """Base event. Carries the agent (collector or indexer) that threw it."""

    def __init__(self, agent: Any = None):
        self.agent = agent
        self._propagation_stopped = False

    def stop_propagation(self) -> None:
        """Listeners registered after the current one are not called."""
        self._propagation_stopped = True

    def is_propagation_stopped(self) -> bool:
        return self._propagation_stopped


class CollectorEvent(SearchEvent):
    """Thrown before and after a collector queues all of its collections."""

    @property
    def collector(self) -> Any:
        return self.agent


class CollectionEvent(SearchEvent):
    """Thrown before and after a single collection is queued."""

    def __init__(self, agent: Any, collection: "CollectionInterface"):
        super().__init__(agent)
        self.collection = collection


class SearchEngineEvent(SearchEvent):
    """Thrown before and after the indexer drains the queue into the search engine."""

    @property
    def indexer(self) -> Any:
        return self.agent

    @property
    def search_engine(self) -> Any:
        return self.agent.get_search_engine()
