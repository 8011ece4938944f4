from __future__ import annotations
import logging
from todo.ports.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 3.0


class Notifier:
    """
    Jednolinijkowy komunikat statusu, który sam znika po `delay` sekundach.

    - Zawsze co najwyżej jeden komunikat; nowy zastępuje stary (bez kolejki).
    - Każde `show()` anuluje poprzednie wygaszenie i liczy okno od nowa (debounce).
    - `close()` (także przez `with Notifier(...)`) anuluje zaległe wygaszenie.

    :param scheduler: Implementacja portu Scheduler.
    :param delay: Czas życia komunikatu w sekundach.
    """
    def __init__(self, scheduler: Scheduler, delay: float = DEFAULT_DELAY) -> None:
        self.scheduler = scheduler
        self.delay = delay
        self._message = ""
        self._handle: TimerHandle | None = None

    @property
    def message(self) -> str:
        """Bieżący komunikat; pusty napis = nic nie jest pokazywane."""
        return self._message

    def show(self, text: str) -> None:
        self._cancel_pending()
        self._message = str(text)
        self._handle = self.scheduler.call_later(self.delay, self._dismiss)
        logger.debug("Notice: %s", self._message)

    def close(self) -> None:
        self._cancel_pending()

    def _dismiss(self) -> None:
        self._handle = None
        self._message = ""

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def __enter__(self) -> "Notifier":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
