from typing import Protocol

class IdProvider(Protocol):
    """Port odpowiedzialny za generowanie unikalnych identyfikatorów zadań."""
    def new_id(self) -> int:
        pass
