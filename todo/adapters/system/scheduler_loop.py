from __future__ import annotations
import heapq
import itertools
import logging
import time
from typing import Callable, Optional
from todo.ports.scheduler import Scheduler

logger = logging.getLogger(__name__)


class LoopTimer:
    def __init__(
        self,
        deadline: float,
        callback: Callable[[], None],
        on_cancel: Optional[Callable[["LoopTimer"], None]] = None,
    ) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False
        self._on_cancel = on_cancel

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._on_cancel is not None:
            self._on_cancel(self)


class LoopScheduler(Scheduler):
    """
    Scheduler dla pętli, która sama odpytuje zegar (np. REPL w terminalu).

    - `call_later` zapisuje termin `time_fn() + delay`.
    - `run_pending()` uruchamia (w kolejności terminów) wszystkie wywołania,
      których termin minął i które nie zostały anulowane.
    - `cancel()` na uchwycie od razu usuwa wpis z kolejki, więc kolejka
      nie rośnie przy wielokrotnym przestawianiu tego samego komunikatu.
    - `time_fn` można podmienić w testach na sztuczny zegar.
    """

    def __init__(self, time_fn: Callable[[], float] = time.monotonic) -> None:
        self._time_fn = time_fn
        self._queue: list[tuple[float, int, LoopTimer]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> LoopTimer:
        timer = LoopTimer(self._time_fn() + max(0.0, delay), callback, self._discard)
        heapq.heappush(self._queue, (timer.deadline, next(self._seq), timer))
        return timer

    def _discard(self, timer: LoopTimer) -> None:
        self._queue = [entry for entry in self._queue if entry[2] is not timer]
        heapq.heapify(self._queue)

    def run_pending(self) -> int:
        """Uruchamia zaległe wywołania; zwraca ich liczbę."""
        now = self._time_fn()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, timer = heapq.heappop(self._queue)
            # już zdjęty z kolejki; późniejsze cancel() nic nie robi
            timer.cancelled = True
            timer.callback()
            fired += 1
        if fired:
            logger.debug("Fired %d scheduled callback(s)", fired)
        return fired

    def pending(self) -> int:
        return len(self._queue)
