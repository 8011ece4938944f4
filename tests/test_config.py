import logging
import pytest
from pathlib import Path
from todo.config import load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BACKEND", "DATA_DIR", "STORAGE_KEY", "NOTICE_SECONDS", "LOG_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(f"TODO_{name}", raising=False)


def test_defaults():
    settings = load_settings(dotenv=False)

    assert settings.backend == "json"
    assert settings.storage_key == "tasks"
    assert settings.notice_seconds == 3.0
    assert settings.log_dir is None
    assert settings.log_level == logging.WARNING
    assert settings.json_path.name == "tasks.json"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TODO_BACKEND", "SQL")
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_STORAGE_KEY", "work")
    monkeypatch.setenv("TODO_NOTICE_SECONDS", "1.5")
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")

    settings = load_settings(dotenv=False)

    assert settings.backend == "sql"
    assert settings.db_path == Path(tmp_path) / "todo.db"
    assert settings.json_path == Path(tmp_path) / "work.json"
    assert settings.notice_seconds == 1.5
    assert settings.log_level == logging.DEBUG


def test_bad_notice_seconds_fall_back(monkeypatch):
    monkeypatch.setenv("TODO_NOTICE_SECONDS", "soon")
    assert load_settings(dotenv=False).notice_seconds == 3.0


@pytest.mark.parametrize("raw", ["nan", "inf", "-inf", "Infinity"])
def test_non_finite_notice_seconds_fall_back(monkeypatch, raw):
    monkeypatch.setenv("TODO_NOTICE_SECONDS", raw)
    assert load_settings(dotenv=False).notice_seconds == 3.0


def test_unknown_backend_is_rejected(monkeypatch):
    monkeypatch.setenv("TODO_BACKEND", "redis")
    with pytest.raises(RuntimeError):
        load_settings(dotenv=False)
