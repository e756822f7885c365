"""
Event Manager

Named-event observer registry. Observers receive the dispatched data as
keyword arguments; return values are ignored.
"""

import logging
from collections import defaultdict
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


class EventManager:
    """
    Minimal synchronous event dispatcher.

    Usage:
        events = EventManager()
        events.observe("catalog_sync_product_get_collection_after", on_page)
        events.dispatch("catalog_sync_product_get_collection_after", pager=p, page=items)
    """

    def __init__(self):
        self._observers: Dict[str, List[Callable]] = defaultdict(list)

    def observe(self, event_name: str, callback: Callable) -> None:
        """Register an observer for an event (called in registration order)."""
        self._observers[event_name].append(callback)

    def dispatch(self, event_name: str, **data) -> None:
        """Call every observer of an event. Observer exceptions propagate."""
        observers = self._observers.get(event_name, [])
        if observers:
            logger.debug("Dispatching %s to %d observer(s)", event_name, len(observers))
        for callback in observers:
            callback(**data)

    def has_observers(self, event_name: str) -> bool:
        return bool(self._observers.get(event_name))
