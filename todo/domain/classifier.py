from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable
from todo.domain.task import Task
from todo.domain.enums import Bucket


### COMMENTS
# ==========================================================
# Klasyfikacja dat (domain/classifier.py) — czyste funkcje.
# ==========================================================
# - Porównujemy wyłącznie dzień kalendarzowy (rok, miesiąc, dzień), bez godziny.
# - Tydzień: niedziela..sobota, zawierający `now`, granice włącznie.
# - Dzisiejsze zadania trafiają TYLKO do `today`, nigdy do `this_week`.
# - today / this_week / other to podział: każde zadanie ląduje dokładnie w jednym.
# - `selected` to niezależny widok (może się pokrywać z pozostałymi).
# - Brak stanu i cache — widoki liczone od nowa przy każdym wywołaniu.


@dataclass(frozen=True)
class TaskViews:
    """Widoki zadań w kolejności kolekcji (najnowsze pierwsze)."""
    today: tuple[Task, ...] = ()
    this_week: tuple[Task, ...] = ()
    other: tuple[Task, ...] = ()
    selected: tuple[Task, ...] = ()


def _as_date(value: date) -> date:
    # datetime dziedziczy po date — obcinamy godzinę
    if isinstance(value, datetime):
        return value.date()
    return value


def is_same_day(d1: date, d2: date) -> bool:
    return _as_date(d1) == _as_date(d2)


def week_bounds(now: date) -> tuple[date, date]:
    """Zwraca (niedziela, sobota) tygodnia zawierającego `now`."""
    now = _as_date(now)
    days_since_sunday = (now.weekday() + 1) % 7
    start = now - timedelta(days=days_since_sunday)
    return start, start + timedelta(days=6)


def is_in_this_week(value: date, now: date) -> bool:
    """True, gdy `value` leży w tygodniu `now`, ale nie jest dniem `now`."""
    start, end = week_bounds(now)
    day = _as_date(value)
    return start <= day <= end and not is_same_day(day, now)


def bucket_of(task: Task, now: date) -> Bucket:
    if is_same_day(task.due_date, now):
        return Bucket.TODAY
    if is_in_this_week(task.due_date, now):
        return Bucket.THIS_WEEK
    return Bucket.OTHER


def classify(tasks: Iterable[Task], now: date, selected_date: date | None = None) -> TaskViews:
    """
    Dzieli zadania na today / this_week / other i wylicza widok wybranego dnia.

    :param tasks: Kolekcja zadań (kolejność zostaje zachowana w każdym widoku).
    :param now: Dzień odniesienia („dziś”).
    :param selected_date: Dzień wybrany w kalendarzu; `None` → pusty widok `selected`.
    :return: `TaskViews`.
    """
    buckets: dict[Bucket, list[Task]] = {b: [] for b in Bucket}
    selected: list[Task] = []

    for task in tasks:
        buckets[bucket_of(task, now)].append(task)
        if selected_date is not None and is_same_day(task.due_date, selected_date):
            selected.append(task)

    return TaskViews(
        today=tuple(buckets[Bucket.TODAY]),
        this_week=tuple(buckets[Bucket.THIS_WEEK]),
        other=tuple(buckets[Bucket.OTHER]),
        selected=tuple(selected),
    )
