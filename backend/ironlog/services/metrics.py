"""
Derived training metrics.

All functions are pure apart from ``update_personal_records``, which updates
the PR table it is given. Sets and exercises may be schema objects or plain
mappings (older records stored weights as strings); anything that does not
parse as a number counts as zero.
"""
from __future__ import annotations
import math
from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from ironlog.schemas.enums import SetType
from ironlog.schemas.workout import NewPR

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# (min workouts, level name, tier), highest first
LEVEL_THRESHOLDS = (
    (100, "ELITE", 5),
    (50, "ADVANCED", 4),
    (20, "INTERMEDIATE", 3),
    (8, "NOVICE", 2),
    (0, "BEGINNER", 1),
)


@dataclass(frozen=True, slots=True)
class Level:
    level: str
    tier: int


@dataclass(frozen=True, slots=True)
class StreakDay:
    day: date
    label: str
    trained: bool


def _get(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    return getattr(obj, key, default)


def to_number(value: Any) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(n) or math.isinf(n):
        return 0.0
    return n


def set_weight(s: Any) -> float:
    """Real (equipment-inclusive) weight when recorded, otherwise nominal."""
    real = to_number(_get(s, "real_weight"))
    if real > 0:
        return real
    return to_number(_get(s, "weight"))


def set_reps(s: Any) -> int:
    return int(to_number(_get(s, "reps")))


def set_type_of(s: Any) -> SetType:
    raw = _get(s, "set_type")
    if raw is None:
        return SetType.effective
    try:
        return SetType(raw)
    except ValueError:
        return SetType.effective


def normalize_exercise_name(name: str) -> str:
    return " ".join((name or "").split()).lower()


def compute_volume(sets: Iterable[Any]) -> float:
    return sum(set_weight(s) * set_reps(s) for s in sets)


def compute_effective_volume(sets: Iterable[Any]) -> float:
    return compute_volume(s for s in sets if set_type_of(s) is SetType.effective)


def is_personal_record(
    exercise_name: str,
    weight: Any,
    pr_table: Mapping[str, float],
    set_type: SetType | str = SetType.effective,
) -> bool:
    if SetType(set_type) is not SetType.effective:
        return False
    previous = to_number(pr_table.get(normalize_exercise_name(exercise_name), 0))
    return to_number(weight) > previous


def update_personal_records(
    exercises: Iterable[Any],
    pr_table: MutableMapping[str, float],
) -> list[NewPR]:
    """
    Raise PR table entries to the heaviest effective set of each exercise.

    Entries sharing a normalized name are treated as one exercise, so each
    exercise yields at most one PR per call. Returns the new records in the
    order the exercises were first seen.
    """
    best: dict[str, tuple[str, float]] = {}
    for ex in exercises:
        name = _get(ex, "name", "") or ""
        key = normalize_exercise_name(name)
        if not key:
            continue
        weights = [set_weight(s) for s in _get(ex, "sets", ()) or ()
                   if set_type_of(s) is SetType.effective]
        top = max(weights, default=0.0)
        if key not in best or top > best[key][1]:
            best[key] = (best.get(key, (name, 0.0))[0], top)

    new_prs = []
    for key, (name, top) in best.items():
        if top > 0 and top > to_number(pr_table.get(key, 0)):
            pr_table[key] = top
            new_prs.append(NewPR(exercise=name, weight=top))
    return new_prs


def compute_level(workout_count: int) -> Level:
    for threshold, name, tier in LEVEL_THRESHOLDS:
        if workout_count >= threshold:
            return Level(name, tier)
    return Level("BEGINNER", 1)


def local_date(value: Any) -> date | None:
    """Calendar day of a workout timestamp in the local timezone."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    return None


def week_start(day: date | datetime) -> date:
    if isinstance(day, datetime):
        day = day.date()
    return day - timedelta(days=day.weekday())


def trained_days(workouts: Iterable[Any]) -> set[date]:
    days = set()
    for w in workouts:
        d = local_date(_get(w, "date"))
        if d is not None:
            days.add(d)
    return days


def compute_weekly_streak(workouts: Iterable[Any], today: date | datetime) -> list[StreakDay]:
    """Monday-first view of the current week, one entry per day."""
    monday = week_start(today)
    done = trained_days(workouts)
    result = []
    for i, label in enumerate(WEEKDAY_LABELS):
        day = monday + timedelta(days=i)
        result.append(StreakDay(day=day, label=label, trained=day in done))
    return result
