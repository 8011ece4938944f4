from typing import Iterable, Protocol
from todo.domain.task import Task


### COMMENTS
# ==========================================================
# Kontrakt magazynu zadań (ports/task_storage.py).
# ==========================================================
# Jeden „slot” pod stałym kluczem, trzymający CAŁĄ kolekcję.
# - Jest niezależny od technologii (pamięć, plik JSON, baza SQL).
# - Jednostką zapisu jest cała kolekcja: bez zapisów częściowych, ostatni zapis wygrywa.
# - Magazyn nie zawiera logiki biznesowej (walidacje są w serwisie).


class TaskStorage(Protocol):
    """Interfejs trwałego slotu na kolekcję `Task`.

    Adaptery (implementacje) muszą:
    - nigdy nie rzucać z `load()` — brak/uszkodzenie danych = pusta lista,
    - zapisywać kolekcję w całości, w kolejności podanej przez serwis,
    - mapować błędy zapisu na `PersistenceError`.
    """

    def load(self) -> list[Task]:
        """Odczytuje kolekcję ze slotu.

        Zwraca:
            list[Task]: Zadania w zapisanej kolejności; pusta lista, gdy slotu brak,
            nie da się go odczytać albo zawartość jest uszkodzona.

        Wyjątki domenowe:
            Brak — błędy są logowane i traktowane jak „brak danych”.
        """

    def save(self, tasks: Iterable[Task]) -> None:
        """Nadpisuje slot pełną kolekcją.

        Wyjątki domenowe:
            PersistenceError: Gdy zapis się nie powiódł (np. brak miejsca).
        """
