from typing import Protocol
from datetime import date

class Clock(Protocol):
    """Abstrakcja źródła czasu. Zwraca lokalny dzień kalendarzowy („dziś”)."""
    def today(self) -> date:
        pass
