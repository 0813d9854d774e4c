from __future__ import annotations
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from ironlog.services.metrics import (
    _get,
    local_date,
    normalize_exercise_name,
    set_weight,
    to_number,
    trained_days,
    week_start,
)


@dataclass(frozen=True, slots=True)
class WeekVolume:
    week_start: date
    volume: float


@dataclass(frozen=True, slots=True)
class ProgressPoint:
    date: date
    weight: float


def weekly_volume(workouts: Iterable[Any], today: date | datetime, weeks: int = 6) -> list[WeekVolume]:
    """Total volume per Monday-anchored week, oldest week first."""
    current = week_start(today)
    starts = [current - timedelta(weeks=i) for i in range(weeks - 1, -1, -1)]
    totals = dict.fromkeys(starts, 0.0)
    for w in workouts:
        d = local_date(_get(w, "date"))
        if d is None:
            continue
        key = week_start(d)
        if key in totals:
            totals[key] += to_number(_get(w, "total_volume"))
    return [WeekVolume(week_start=s, volume=totals[s]) for s in starts]


def frequency_grid(workouts: Iterable[Any], today: date | datetime, weeks: int = 4) -> list[bool]:
    """Trained/rest flags for the last ``weeks`` full weeks, Monday first."""
    first = week_start(today) - timedelta(weeks=weeks - 1)
    done = trained_days(workouts)
    return [first + timedelta(days=i) in done for i in range(weeks * 7)]


def top_exercise(workouts: Iterable[Any]) -> str | None:
    counts: Counter[str] = Counter()
    display: dict[str, str] = {}
    for w in workouts:
        for ex in _get(w, "exercises", ()) or ():
            name = _get(ex, "name", "")
            key = normalize_exercise_name(name)
            if key:
                counts[key] += 1
                display.setdefault(key, name)
    if not counts:
        return None
    key, _ = counts.most_common(1)[0]
    return display[key]


def exercise_progress(workouts: list[Any], name: str, limit: int = 10) -> list[ProgressPoint]:
    """
    Heaviest set of ``name`` per workout, oldest first.

    ``workouts`` is most-recent-first, as history is stored; only the latest
    ``limit`` workouts are considered.
    """
    key = normalize_exercise_name(name)
    points = []
    for w in list(workouts)[:limit]:
        for ex in _get(w, "exercises", ()) or ():
            if normalize_exercise_name(_get(ex, "name", "")) != key:
                continue
            top = max((set_weight(s) for s in _get(ex, "sets", ()) or ()), default=0.0)
            d = local_date(_get(w, "date"))
            if top > 0 and d is not None:
                points.append(ProgressPoint(date=d, weight=top))
            break
    points.reverse()
    return points


def top_prs(pr_table: Mapping[str, float], limit: int = 8) -> list[tuple[str, float]]:
    entries = sorted(pr_table.items(), key=lambda kv: to_number(kv[1]), reverse=True)
    return entries[:limit]
