from __future__ import annotations
from typing import Iterable
from pathlib import Path
import logging
import sqlalchemy as db
from sqlalchemy.exc import SQLAlchemyError
from todo.ports.task_storage import TaskStorage
from todo.domain.task import Task
from todo.domain.codec import STORAGE_KEY, dumps_tasks, loads_tasks
from todo.domain.errors import PersistenceError, TaskDecodeError

logger = logging.getLogger(__name__)


class SqlTaskStorage(TaskStorage):
    def __init__(self, url: str | Path, key: str = STORAGE_KEY) -> None:
        """
        url: np. 'sqlite:///data/todo.db' lub Path do pliku (zostanie zrobiony URL)
        key: nazwa slotu w tabeli key-value
        """
        self.path = url if isinstance(url, Path) else None
        db_url = f"sqlite:///{url}" if isinstance(url, Path) else url

        self.key = key
        self.engine = db.create_engine(db_url, future=True)
        self.meta = db.MetaData()

        # jeden wiersz = jeden slot; value = tablica JSON z zadaniami
        self.slots = db.Table(
            "storage",
            self.meta,
            db.Column("key", db.String, primary_key=True),
            db.Column("value", db.Text, nullable=False),
        )

    def load(self) -> list[Task]:
        stmt = db.select(self.slots.c.value).where(self.slots.c.key == self.key)
        try:
            with self.engine.begin() as conn:
                # utwórz tabelę jeśli nie istnieje (plik, który nie jest bazą, rzuca tutaj)
                self.meta.create_all(conn)
                raw = conn.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning("Cannot read slot %r, starting empty: %s", self.key, e)
            return []
        if raw is None:
            return []
        try:
            return loads_tasks(raw)
        except TaskDecodeError as e:
            logger.warning("Slot %r is corrupt, starting empty: %s", self.key, e)
            return []

    def save(self, tasks: Iterable[Task]) -> None:
        payload = dumps_tasks(tasks)
        try:
            if self.path is not None:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            # nadpisanie slotu w jednej transakcji
            with self.engine.begin() as conn:
                self.meta.create_all(conn)
                conn.execute(db.delete(self.slots).where(self.slots.c.key == self.key))
                conn.execute(db.insert(self.slots).values(key=self.key, value=payload))
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(str(e))
