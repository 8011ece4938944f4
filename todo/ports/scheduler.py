from typing import Callable, Protocol


class TimerHandle(Protocol):
    """Uchwyt zaplanowanego wywołania; `cancel()` jest idempotentne."""
    def cancel(self) -> None:
        pass


class Scheduler(Protocol):
    """Planowanie jednorazowych wywołań w pętli zdarzeń (jeden wątek).

    Callback uruchamia się w tej samej pętli, co reszta aplikacji,
    więc nie wymaga żadnych blokad.
    """
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        pass
