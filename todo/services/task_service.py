from __future__ import annotations
import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable
from todo.ports.task_storage import TaskStorage
from todo.ports.id_provider import IdProvider
from todo.ports.clock import Clock
from todo.domain.task import Task, TaskId
from todo.domain.enums import Notice
from todo.domain.errors import TaskValidationError, TaskNotFoundError, PersistenceError
from todo.domain.classifier import TaskViews, classify
from todo.domain.codec import parse_iso_day
from todo.services.notifier import Notifier
from todo.adapters.system.clock_system import SystemClock
from todo.adapters.system.id_provider_counter import MonotonicIdProvider

logger = logging.getLogger(__name__)

Listener = Callable[[tuple[Task, ...]], None]


### COMMENTS
# ==========================================================
# Warstwa serwisowa (services/task_service.py) — właściciel kolekcji zadań.
# ==========================================================
# Rola:
# - Jedyny zapisujący kolekcję: create / toggle / remove.
# - Po KAŻDEJ zmianie kolekcji: pełny, synchroniczny zapis do TaskStorage,
#   potem powiadomienie subskrybentów.
# - Komunikaty dla użytkownika wyłącznie przez Notifier.
#
# Zasady:
# - Kolejność: najnowsze pierwsze (create dokleja na początek).
# - toggle podmienia zadanie w miejscu, nie przesuwa go.
# - Nieznane ID w toggle/remove to cichy no-op.
# - Błąd zapisu nie cofa zmiany w pamięci (pamięć jest źródłem prawdy dla sesji).


class TaskService:
    """
    Serwis przypadków użycia dla zadań z terminem.

    :param storage: Implementacja portu TaskStorage (kolekcja wczytywana w konstruktorze).
    :param notifier: Kanał krótkich komunikatów dla użytkownika.
    :param id_provider: Źródło ID; domyślnie licznik powyżej najwyższego zapisanego ID.
    :param clock: Źródło „dziś” dla widoków; domyślnie zegar systemowy.
    """
    def __init__(
        self,
        storage: TaskStorage,
        notifier: Notifier,
        id_provider: IdProvider | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.storage = storage
        self.notifier = notifier
        self._tasks: list[Task] = list(storage.load())
        self.id_provider = id_provider or MonotonicIdProvider.above(t.task_id for t in self._tasks)
        self.clock = clock or SystemClock()
        self._listeners: list[Listener] = []
        logger.info("Task service ready with %d task(s)", len(self._tasks))

    def create_task(self, title: str | None, due_date: date | str | None) -> Task:
        """
            Tworzy nowe zadanie i dokleja je na początek kolekcji.

            - Walidacja: `title` nie może być pusty ani składać się wyłącznie z białych znaków;
            `due_date` nie może być pusty i musi być datą (albo napisem YYYY-MM-DD).
            - Przy błędzie: komunikat w Notifierze, `TaskValidationError`, brak zmian.
            - `task_id` z IdProvidera (ID już obecne w kolekcji są pomijane).

            :param title: Tytuł zadania (wymagany).
            :param due_date: Termin (wymagany).
            :return: Utworzony obiekt `Task` (`is_done=False`).
            :raises TaskValidationError: Gdy dane są niepoprawne.
        """
        if not title or not title.strip():
            self.notifier.show(Notice.MISSING_FIELDS)
            raise TaskValidationError("title", "Title must not be empty")
        if due_date is None or (isinstance(due_date, str) and not due_date.strip()):
            self.notifier.show(Notice.MISSING_FIELDS)
            raise TaskValidationError("due_date", "Due date must not be empty")
        due = self._parse_due_date(due_date)

        task = Task(task_id=self._allocate_id(), title=title.strip(), due_date=due)
        self._tasks.insert(0, task)
        logger.info("Created task %s due %s", task.task_id, task.due_date)

        if self._commit():
            self.notifier.show(Notice.ADDED)
        return task

    def toggle_done(self, task_id: TaskId) -> Task | None:
        """
            Flips `is_done` of the task with the given ID, keeping its position.

            - Unknown ID: silent no-op, nothing is persisted, returns `None`.
            - Other tasks keep their identity and value.

            :param task_id: Identifier of the task to toggle.
            :return: The updated `Task`, or `None` if no task matched.
        """
        for index, task in enumerate(self._tasks):
            if task.task_id == task_id:
                updated = replace(task, is_done=not task.is_done)
                self._tasks[index] = updated
                logger.info("Task %s is_done=%s", task_id, updated.is_done)
                self._commit()
                return updated
        logger.debug("toggle_done: no task %s", task_id)
        return None

    def remove_task(self, task_id: TaskId, confirmed: bool) -> bool:
        """
            Usuwa zadanie po potwierdzeniu użytkownika.

            - `confirmed=False`: brak zmian, komunikat „cancelled”.
            - `confirmed=True`: usuwa zadanie (jeśli istnieje) i zapisuje kolekcję;
            komunikat „deleted” pojawia się także wtedy, gdy ID nie istniało.

            :param task_id: Identyfikator zadania do usunięcia.
            :param confirmed: Wynik okna potwierdzenia.
            :return: True, jeśli coś usunięto.
        """
        if not confirmed:
            self.notifier.show(Notice.CANCELLED)
            return False

        kept = [t for t in self._tasks if t.task_id != task_id]
        removed = len(kept) != len(self._tasks)
        if removed:
            self._tasks = kept
            logger.info("Removed task %s", task_id)
            if not self._commit():
                return True
        else:
            logger.debug("remove_task: no task %s", task_id)
        self.notifier.show(Notice.DELETED)
        return removed

    def list_tasks(self) -> tuple[Task, ...]:
        """Zwraca migawkę kolekcji (najnowsze pierwsze)."""
        return tuple(self._tasks)

    def get_task(self, task_id: TaskId) -> Task:
        """
            Zwraca pojedyncze zadanie o wskazanym identyfikatorze.

            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
        """
        for task in self._tasks:
            if task.task_id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def views(self, selected_date: date | None = None) -> TaskViews:
        """Widoki today / this_week / other / selected liczone względem `clock.today()`."""
        return classify(self._tasks, self.clock.today(), selected_date)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Rejestruje słuchacza zmian; zwraca funkcję wypisującą."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _allocate_id(self) -> TaskId:
        taken = {t.task_id for t in self._tasks}
        while True:
            candidate = TaskId(self.id_provider.new_id())
            if candidate not in taken:
                return candidate
            logger.warning("Id %s already taken, drawing another", candidate)

    def _parse_due_date(self, value: date | str) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return parse_iso_day(value.strip())
        except (ValueError, AttributeError):
            self.notifier.show(Notice.INVALID_DATE)
            raise TaskValidationError("due_date", f"Expected YYYY-MM-DD, got {value!r}")

    def _commit(self) -> bool:
        snapshot = tuple(self._tasks)
        saved = True
        try:
            self.storage.save(snapshot)
        except PersistenceError as e:
            logger.error("Saving %d task(s) failed: %s", len(snapshot), e)
            self.notifier.show(Notice.SAVE_FAILED)
            saved = False
        for listener in list(self._listeners):
            listener(snapshot)
        return saved
