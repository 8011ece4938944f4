from todo.ports.clock import Clock
from datetime import date

class SystemClock(Clock):
    """Adapter systemowy korzystający z lokalnej daty (czas ścienny)."""

    def today(self) -> date:
        """Zwraca dzisiejszy dzień w lokalnej strefie czasowej."""
        return date.today()
