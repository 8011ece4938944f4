from todo.domain.task import Task
from todo.domain.errors import TaskDecodeError
from todo.domain.codec import STORAGE_KEY, dumps_tasks, loads_tasks
from typing import Iterable
import logging

logger = logging.getLogger(__name__)

### COMMENTS
# ==========================================================
# Adapter pamięciowy magazynu zadań (adapters/memory/task_storage.py).
# ==========================================================
# - Słownik klucz → tekst, jak przeglądarkowy key-value storage.
# - Przechowuje ZSERIALIZOWANY tekst, nie obiekty — dzięki temu testy
#   sprawdzają ten sam kodek, co adaptery trwałe.
# - Dane żyją tyle, co obiekt (brak trwałości między uruchomieniami).


class InMemoryTaskStorage:
    """
        Slot w pamięci pod stałym kluczem.
        :param initial: Opcjonalne zadania do wstępnego zapisania w slocie.
        :param key: Nazwa slotu (domyślnie "tasks").
    """
    def __init__(self, initial: Iterable[Task] | None = None, key: str = STORAGE_KEY) -> None:
        self.key = key
        self.slots: dict[str, str] = {}
        if initial is not None:
            self.save(initial)

    def load(self) -> list[Task]:
        """
            Zwraca zadania ze slotu albo pustą listę, gdy slotu brak lub jest uszkodzony.
        """
        raw = self.slots.get(self.key)
        if raw is None:
            return []
        try:
            return loads_tasks(raw)
        except TaskDecodeError as e:
            logger.warning("Slot %r is corrupt, starting empty: %s", self.key, e)
            return []

    def save(self, tasks: Iterable[Task]) -> None:
        self.slots[self.key] = dumps_tasks(tasks)
