"""Synchronous event dispatcher shared by every component of an indexing run.

One dispatcher is created at the top of the pipeline and handed to the agents;
there is no process-wide default instance.
"""

from typing import Any, Callable

from search_framework.events.models.SearchEvent import SearchEvent

Listener = Callable[[SearchEvent], None]


class EventDispatcher:
    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    ##########################################
    ############### DISPATCH #################
    ##########################################

    def dispatch(self, event_name: str, event: SearchEvent) -> SearchEvent:
        """Calls every listener of the event in registration order.

        Stops early if a listener calls event.stop_propagation().

        Returns:
            SearchEvent: The event that was passed in, possibly modified by listeners.
        """
        # copy, listeners may (un)register listeners while being called
        for listener in list(self._listeners.get(event_name, [])):
            if event.is_propagation_stopped():
                break
            listener(event)
        return event

    ##########################################
    ############### LISTENERS ################
    ##########################################

    def add_listener(self, event_name: str, listener: Listener) -> None:
        self._listeners.setdefault(event_name, []).append(listener)

    def remove_listener(self, event_name: str, listener: Listener) -> None:
        """Removes the listener from the event. Does nothing if it is not registered."""
        listeners = self._listeners.get(event_name)
        if not listeners:
            return
        try:
            listeners.remove(listener)
        except ValueError:
            return
        if not listeners:
            del self._listeners[event_name]

    def get_listeners(self, event_name: str | None = None) -> list[Listener] | dict[str, list[Listener]]:
        """Returns the listeners of one event, or all listeners keyed by event name."""
        if event_name is not None:
            return list(self._listeners.get(event_name, []))
        return {name: list(listeners) for name, listeners in self._listeners.items()}

    def has_listeners(self, event_name: str | None = None) -> bool:
        if event_name is not None:
            return bool(self._listeners.get(event_name))
        return any(self._listeners.values())

    ##########################################
    ############## SUBSCRIBERS ###############
    ##########################################

    def add_subscriber(self, subscriber: Any) -> None:
        """Registers every listener returned by subscriber.get_subscribed_events().

        The mapping values are either the name of a method of the subscriber,
        a callable, or a list of those.
        """
        for event_name, listener in self._resolve_subscriber(subscriber):
            self.add_listener(event_name, listener)

    def remove_subscriber(self, subscriber: Any) -> None:
        for event_name, listener in self._resolve_subscriber(subscriber):
            self.remove_listener(event_name, listener)

    def _resolve_subscriber(self, subscriber: Any) -> list[tuple[str, Listener]]:
        resolved: list[tuple[str, Listener]] = []
        for event_name, listeners in subscriber.get_subscribed_events().items():
            if not isinstance(listeners, (list, tuple)):
                listeners = [listeners]
            for listener in listeners:
                if isinstance(listener, str):
                    listener = getattr(subscriber, listener)
                resolved.append((event_name, listener))
        return resolved
