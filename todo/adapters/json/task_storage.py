from todo.ports.task_storage import TaskStorage
from todo.domain.task import Task
from todo.domain.errors import TaskDecodeError, PersistenceError
from todo.domain.codec import dumps_tasks, loads_tasks
from pathlib import Path
from typing import Iterable
import logging
import os

logger = logging.getLogger(__name__)


class JsonTaskStorage(TaskStorage):
    def __init__(self, path: Path) -> None:
        """Inicjalizuje slot w pliku JSON (tablica zadań).
        Katalog nadrzędny tworzony jest dopiero przy pierwszym zapisie."""
        self.path = Path(path)

    def load(self) -> list[Task]:
        """Czyta plik; brak pliku, błąd I/O lub uszkodzona treść → pusta lista."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No task file at %s, starting empty", self.path)
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s, starting empty: %s", self.path, e)
            return []

        try:
            tasks = loads_tasks(text)
        except TaskDecodeError as e:
            logger.warning("%s: %s; starting empty", self.path.name, e)
            return []
        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Zapisuje całą kolekcję atomowo (plik tymczasowy + fsync + os.replace)."""
        payload = dumps_tasks(tasks)
        tmp = self.path.with_suffix(self.path.suffix + ".swap")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                pass
            raise PersistenceError(str(e))
