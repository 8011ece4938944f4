from typing import NewType
from dataclasses import dataclass
from datetime import date

TaskId = NewType("TaskId", int)

@dataclass(frozen=True)
class Task():
    """
    Model domenowy pojedynczego zadania; niemutowalny.
    Termin (`due_date`) to sam dzień kalendarzowy, bez godziny.
    Zmiana stanu = nowa instancja (np. `dataclasses.replace`).
    """
    task_id: TaskId
    title: str
    due_date: date
    is_done: bool = False



### COMMENTS
# - `task_id` jest nadawany przez serwis (IdProvider) i nigdy się nie zmienia.
# - W żywej kolekcji nie ma dwóch zadań o tym samym `task_id`.
# - `frozen=True` → przełączenie `is_done` tworzy nowy obiekt w tym samym miejscu listy.
