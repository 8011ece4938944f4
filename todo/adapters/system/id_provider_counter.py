from todo.ports.id_provider import IdProvider
from typing import Iterable

class MonotonicIdProvider(IdProvider):
    """Ściśle rosnący licznik ID (bez odczytu zegara, więc bez kolizji w tym samym „tyknięciu”)."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    @classmethod
    def above(cls, existing: Iterable[int]) -> "MonotonicIdProvider":
        """Licznik startujący powyżej najwyższego ID z już zapisanych zadań."""
        return cls(start=max(existing, default=0) + 1)

    def new_id(self) -> int:
        value = self._next
        self._next += 1
        return value
