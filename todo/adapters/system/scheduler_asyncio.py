from __future__ import annotations
import asyncio
from typing import Callable
from todo.ports.scheduler import Scheduler

class AsyncioScheduler(Scheduler):
    """Adapter na `loop.call_later` — dla aplikacji działających w pętli asyncio."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
