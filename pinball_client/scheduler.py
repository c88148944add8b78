# pinball_client/scheduler.py
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, List

RESET_TARGETS = "reset_targets"
RESET_GAME = "reset_game"


@dataclass(order=True)
class ScheduledEvent:
    deadline: float
    seq: int
    kind: str = field(compare=False)
    payload: Any = field(default=None, compare=False)


class Scheduler:
    """
    Delayed events drained by the frame loop (no host timers, no threads).
    At most one pending entry per kind.
    """

    def __init__(self):
        self._queue: List[ScheduledEvent] = []
        self._seq = itertools.count()

    def pending(self, kind: str) -> bool:
        return any(ev.kind == kind for ev in self._queue)

    def schedule(self, kind: str, at: float, payload: Any = None) -> bool:
        if self.pending(kind):
            return False
        heapq.heappush(self._queue, ScheduledEvent(at, next(self._seq), kind, payload))
        return True

    def cancel(self, kind: str) -> bool:
        before = len(self._queue)
        self._queue = [ev for ev in self._queue if ev.kind != kind]
        heapq.heapify(self._queue)
        return len(self._queue) != before

    def due(self, now: float) -> List[ScheduledEvent]:
        out = []
        while self._queue and self._queue[0].deadline <= now:
            out.append(heapq.heappop(self._queue))
        return out

    def __len__(self):
        return len(self._queue)
