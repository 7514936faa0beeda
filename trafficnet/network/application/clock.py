"""
Clock that advances registered timed items one simulated second at a time.
"""
import weakref
from typing import List

from ..domain.protocols import TimedItem

class Clock:
    """
    Owned registry of timed items. Items are held weakly so that dropping
    the last strong reference (e.g. replacing an intersection's lights)
    takes them off the clock.
    """

    def __init__(self):
        self._items: List[weakref.ref] = []
        self.elapsed = 0

    def register(self, item: TimedItem):
        if item in self:
            return
        self._items.append(weakref.ref(item))

    def unregister(self, item: TimedItem):
        self._items = [ref for ref in self._items if ref() is not None and ref() is not item]

    def _live_items(self) -> List[TimedItem]:
        self._items = [ref for ref in self._items if ref() is not None]
        return [ref() for ref in self._items]

    def tick(self):
        """
        Calls one_second() on every live item, in registration order.
        """
        for item in self._live_items():
            item.one_second()
        self.elapsed += 1

    def __contains__(self, item) -> bool:
        return any(ref() is item for ref in self._items)

    def __len__(self) -> int:
        return len(self._live_items())
