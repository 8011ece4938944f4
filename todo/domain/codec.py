from __future__ import annotations
import json
import re
from datetime import date, datetime
from typing import Any, Iterable
from todo.domain.task import Task, TaskId
from todo.domain.errors import TaskDecodeError

STORAGE_KEY = "tasks"

_DAY_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_iso_day(value: str) -> date:
    """
    Ścisły format "YYYY-MM-DD" (z zerami wiodącymi).
    Odrzuca warianty ISO, które przyjmuje date.fromisoformat: "20240610", "2024-W24-1", "2024-162".

    :raises ValueError: zły format lub nieistniejąca data.
    """
    if not _DAY_RE.fullmatch(value):
        raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
    return datetime.strptime(value, "%Y-%m-%d").date()


def encode_task(task: Task) -> dict:
    return {
        "id": int(task.task_id),
        "title": task.title,
        "dueDate": task.due_date.isoformat(),  # date -> "YYYY-MM-DD"
        "isDone": bool(task.is_done),
    }


def decode_task(row: Any) -> Task:
    if not isinstance(row, dict):
        raise TaskDecodeError(f"record must be an object, got {type(row).__name__}")
    try:
        raw_id, title, raw_due, is_done = row["id"], row["title"], row["dueDate"], row["isDone"]
    except KeyError as e:
        raise TaskDecodeError(f"missing field {e}")

    # bool jest podklasą int — nie akceptujemy true/false jako ID
    if not isinstance(raw_id, int) or isinstance(raw_id, bool):
        raise TaskDecodeError(f"'id' must be an integer, got {raw_id!r}")
    if not isinstance(title, str):
        raise TaskDecodeError(f"'title' must be a string, got {title!r}")
    if not isinstance(is_done, bool):
        raise TaskDecodeError(f"'isDone' must be a boolean, got {is_done!r}")
    if not isinstance(raw_due, str):
        raise TaskDecodeError(f"'dueDate' must be a string, got {raw_due!r}")
    try:
        due = parse_iso_day(raw_due)
    except ValueError as e:
        raise TaskDecodeError(f"'dueDate' {raw_due!r}: {e}")

    return Task(task_id=TaskId(raw_id), title=title, due_date=due, is_done=is_done)


def dumps_tasks(tasks: Iterable[Task]) -> str:
    """Serializuje całą kolekcję do tablicy JSON (kolejność zachowana)."""
    return json.dumps([encode_task(t) for t in tasks], ensure_ascii=False)


def loads_tasks(text: str) -> list[Task]:
    """
    Odtwarza kolekcję z tekstu JSON.

    :raises TaskDecodeError: zły JSON, nie-tablica, zły rekord lub duplikat ID.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise TaskDecodeError(f"invalid JSON: {e}")
    if not isinstance(data, list):
        raise TaskDecodeError(f"expected a JSON array, got {type(data).__name__}")

    tasks: list[Task] = []
    seen: set[int] = set()
    for index, row in enumerate(data):
        try:
            task = decode_task(row)
        except TaskDecodeError as e:
            raise TaskDecodeError(f"record {index}: {e.reason}")
        if task.task_id in seen:
            raise TaskDecodeError(f"record {index}: duplicate id {task.task_id}")
        seen.add(task.task_id)
        tasks.append(task)
    return tasks
