import json
import pytest
from datetime import date
from pathlib import Path
from todo.adapters.json.task_storage import JsonTaskStorage
from todo.adapters.memory.task_storage import InMemoryTaskStorage
from todo.adapters.sql.task_storage import SqlTaskStorage
from todo.domain.codec import dumps_tasks, loads_tasks, parse_iso_day
from todo.domain.task import Task, TaskId
from todo.domain.errors import PersistenceError, TaskDecodeError


def make_task(task_id: int, title: str = "Test", due: date = date(2024, 6, 10), done: bool = False) -> Task:
    return Task(task_id=TaskId(task_id), title=title, due_date=due, is_done=done)


SAMPLE = [
    make_task(3, "Plan trip", date(2024, 6, 14)),
    make_task(2, "Zażółć gęślą jaźń", date(2024, 12, 31), done=True),
    make_task(1, "Write report"),
]


@pytest.fixture(params=["json", "sql", "memory"])
def storage(request, tmp_path):
    """Każdy adapter na świeżym, tymczasowym slocie."""
    if request.param == "json":
        return JsonTaskStorage(tmp_path / "data" / "tasks.json")
    if request.param == "sql":
        return SqlTaskStorage(tmp_path / "todo.db")
    return InMemoryTaskStorage()


def test_missing_slot_loads_empty(storage):
    assert storage.load() == []


def test_save_then_load_round_trip(storage):
    storage.save(SAMPLE)
    assert storage.load() == SAMPLE


def test_save_overwrites_whole_collection(storage):
    storage.save(SAMPLE)
    storage.save(SAMPLE[:1])
    assert storage.load() == SAMPLE[:1]

    storage.save([])
    assert storage.load() == []


def test_wire_format():
    payload = json.loads(dumps_tasks([make_task(7, "A", date(2024, 1, 2), done=True)]))
    assert payload == [{"id": 7, "title": "A", "dueDate": "2024-01-02", "isDone": True}]


@pytest.mark.parametrize("text", [
    "not json",
    "{\"id\": 1}",
    "[1, 2]",
    "[{\"id\": 1, \"title\": \"A\", \"dueDate\": \"2024-01-02\"}]",
    "[{\"id\": \"1\", \"title\": \"A\", \"dueDate\": \"2024-01-02\", \"isDone\": false}]",
    "[{\"id\": true, \"title\": \"A\", \"dueDate\": \"2024-01-02\", \"isDone\": false}]",
    "[{\"id\": 1, \"title\": \"A\", \"dueDate\": \"2024-13-40\", \"isDone\": false}]",
    "[{\"id\": 1, \"title\": \"A\", \"dueDate\": \"2024-01-02\", \"isDone\": \"no\"}]",
    "[{\"id\": 1, \"title\": \"A\", \"dueDate\": \"2024-01-02\", \"isDone\": false},"
    " {\"id\": 1, \"title\": \"B\", \"dueDate\": \"2024-01-03\", \"isDone\": false}]",
])
def test_codec_rejects_malformed_content(text):
    with pytest.raises(TaskDecodeError):
        loads_tasks(text)


@pytest.mark.parametrize("text", ["20240610", "2024-W24-1", "2024-162", "2024-6-1", " 2024-06-10", "2024-06-10T00:00"])
def test_codec_rejects_non_calendar_date_forms(text):
    with pytest.raises(ValueError):
        parse_iso_day(text)

    record = {"id": 1, "title": "A", "dueDate": text, "isDone": False}
    with pytest.raises(TaskDecodeError):
        loads_tasks(json.dumps([record]))


def test_codec_accepts_calendar_date():
    assert parse_iso_day("2024-06-10") == date(2024, 6, 10)


def test_corrupt_json_file_loads_empty(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text("{broken", encoding="utf-8")
    assert JsonTaskStorage(path).load() == []


def test_unreadable_json_file_loads_empty(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    assert JsonTaskStorage(path).load() == []


def test_corrupt_memory_slot_loads_empty():
    storage = InMemoryTaskStorage()
    storage.slots["tasks"] = "[{\"id\": 1}]"
    assert storage.load() == []


def test_corrupt_sql_slot_loads_empty(tmp_path):
    storage = SqlTaskStorage(tmp_path / "todo.db")
    storage.save([])
    with storage.engine.begin() as conn:
        conn.execute(storage.slots.update().values(value="[oops"))
    assert storage.load() == []


def test_sql_slots_are_keyed(tmp_path):
    db_path = tmp_path / "todo.db"
    SqlTaskStorage(db_path, key="work").save(SAMPLE)

    assert SqlTaskStorage(db_path, key="home").load() == []
    assert SqlTaskStorage(db_path, key="work").load() == SAMPLE


def test_json_save_failure_raises_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    storage = JsonTaskStorage(blocker / "tasks.json")

    with pytest.raises(PersistenceError):
        storage.save(SAMPLE)


def test_json_save_leaves_no_swap_file(tmp_path):
    path = tmp_path / "tasks.json"
    JsonTaskStorage(path).save(SAMPLE)
    assert [p.name for p in Path(tmp_path).iterdir()] == ["tasks.json"]


def test_non_database_file_loads_empty(tmp_path):
    path = tmp_path / "todo.db"
    path.write_bytes(b"garbage" * 500)
    assert SqlTaskStorage(path).load() == []


def test_non_database_file_save_raises_persistence_error(tmp_path):
    path = tmp_path / "todo.db"
    path.write_bytes(b"garbage" * 500)

    with pytest.raises(PersistenceError):
        SqlTaskStorage(path).save(SAMPLE)
