from typing import List, Tuple
from hexcore.model import CoreEvent

class EventLog:
    """Applied events in application order. Replaying them rebuilds canonical state."""

    def __init__(self):
        self._events: List[CoreEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def append(self, event: CoreEvent) -> None:
        self._events.append(event)

    def since(self, offset: int, limit: int = 1000) -> Tuple[List[CoreEvent], int]:
        """Events from `offset`, at most `limit`, and the offset to resume from."""
        offset = max(0, offset)
        chunk = self._events[offset: offset + limit]
        return chunk, offset + len(chunk)

    def all(self) -> List[CoreEvent]:
        return list(self._events)
