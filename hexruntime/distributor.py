import copy
from collections import deque
from typing import Callable, Deque, Dict, Iterable, Iterator, Optional

from hexcore.errors import InvalidReference
from hexcore.model import CoreEvent, PlayerId

# Per-viewer filter: return the event as that player should see it, or None to hide it.
Redactor = Callable[[PlayerId, CoreEvent], Optional[CoreEvent]]

def broadcast_all(viewer: PlayerId, event: CoreEvent) -> Optional[CoreEvent]:
    return event

class EventDistributor:
    """One FIFO queue of applied events per player."""

    def __init__(self, player_ids: Iterable[PlayerId], redact: Redactor = broadcast_all):
        self._queues: Dict[PlayerId, Deque[CoreEvent]] = {p: deque() for p in player_ids}
        self._redact = redact

    def _queue(self, player_id: PlayerId) -> Deque[CoreEvent]:
        try:
            return self._queues[player_id]
        except KeyError as e:
            raise InvalidReference(f"No player with id = {player_id}") from e

    def publish(self, event: CoreEvent) -> None:
        for viewer, queue in self._queues.items():
            visible = self._redact(viewer, event)
            if visible is not None:
                queue.append(copy.deepcopy(visible))

    def take(self, player_id: PlayerId) -> Optional[CoreEvent]:
        """Pop the oldest event queued for `player_id`, or None when empty."""
        queue = self._queue(player_id)
        return queue.popleft() if queue else None

    def drain(self, player_id: PlayerId) -> Iterator[CoreEvent]:
        """Take events for `player_id` until the queue is empty."""
        while (event := self.take(player_id)) is not None:
            yield event

    def pending(self, player_id: PlayerId) -> int:
        return len(self._queue(player_id))
