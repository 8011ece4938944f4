"""Settings loaded from environment variables (+ optional .env).

One frozen Settings object per process; CLI options may override
the storage backend chosen here.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"
BACKENDS = ("json", "sql", "memory")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    # nan/inf nie są sensownym czasem
    return value if math.isfinite(value) else default


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    backend: str
    data_dir: Path
    storage_key: str
    notice_seconds: float
    log_dir: Path | None
    log_level: int

    @property
    def json_path(self) -> Path:
        return self.data_dir / f"{self.storage_key}.json"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "todo.db"


def load_settings(*, dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(override=False)

    backend = _env(_k("BACKEND"), "json").lower()
    if backend not in BACKENDS:
        raise RuntimeError(f"{_k('BACKEND')} must be one of {', '.join(BACKENDS)}, got {backend!r}")

    level_name = _env(_k("LOG_LEVEL"), "WARNING").upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        raise RuntimeError(f"{_k('LOG_LEVEL')} is not a logging level: {level_name!r}")

    notice_seconds = _env_float(_k("NOTICE_SECONDS"), 3.0)
    if notice_seconds <= 0:
        notice_seconds = 3.0

    return Settings(
        backend=backend,
        data_dir=_env_path(_k("DATA_DIR"), Path("~/.local/share/todo").expanduser()),
        storage_key=_env(_k("STORAGE_KEY"), "tasks"),
        notice_seconds=notice_seconds,
        log_dir=_env_path(_k("LOG_DIR"), None),
        log_level=log_level,
    )
