"""
Lift Coach — Workout log

The log is append-only: finished sessions are added, never edited.
Everything here works on immutable snapshots (tuples of Workout).
"""
import json
import os
from datetime import date as _date, datetime

import pandas as pd

from src.config import get_muscle_group
from src.models import ExerciseEntry, Workout

LOG_COLUMNS = [
    "date", "date_str", "type", "template_name", "exercise", "exercise_key",
    "sets", "reps", "weight", "volume", "total_reps",
    "muscle_group", "workout_index",
]


def parse_workouts(raw) -> tuple:
    """Raw stored records (list of dicts) → tuple of Workout."""
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"workout log must be a list of records, got {type(raw).__name__}")
    return tuple(Workout.from_dict(r) for r in raw)


def load_workouts(path: str) -> tuple:
    """
    Read a workout log exported as JSON.

    Accepts either a bare list of workout records or {"workouts": [...]}.
    A missing file is an empty log.
    """
    if not os.path.exists(path):
        return ()
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("workouts", [])
    return parse_workouts(data)


def save_workouts(path: str, workouts) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump([w.to_dict() for w in workouts], f, indent=2)


def calculate_volume(entries) -> float:
    return sum(e.sets * e.reps * e.weight for e in entries)


def finish_workout(
    template_key: str,
    template_name: str,
    entries,
    date: str = None,
    completed_at: str = None,
) -> Workout:
    """Close a logging session into the stored Workout record."""
    exercises = tuple(
        e if isinstance(e, ExerciseEntry) else ExerciseEntry.from_dict(e) for e in entries
    )
    return Workout(
        type=template_key,
        template_name=template_name,
        date=date or _date.today().isoformat(),
        exercises=exercises,
        volume=calculate_volume(exercises),
        completed_at=completed_at or datetime.now().isoformat(),
    )


def append_workout(workouts, workout: Workout) -> tuple:
    return tuple(workouts) + (workout,)


def workouts_to_dataframe(workouts) -> pd.DataFrame:
    """
    Flatten the log to one row per exercise entry.
    Row order follows the log (workout_index, then entry order); dates are
    parsed to UTC Timestamps (naive dates are taken as UTC, so plain dates and
    zone-stamped ones can share a log), unparseable dates become NaT.
    """
    rows = []
    for idx, w in enumerate(workouts or ()):
        for ex in w.exercises:
            rows.append(
                {
                    "date": w.date,
                    "date_str": w.date,
                    "type": w.type,
                    "template_name": w.template_name,
                    "exercise": ex.name,
                    "exercise_key": ex.name.lower(),
                    "sets": ex.sets,
                    "reps": ex.reps,
                    "weight": ex.weight,
                    "volume": ex.sets * ex.reps * ex.weight,
                    "total_reps": ex.sets * ex.reps,
                    "muscle_group": get_muscle_group(ex.name),
                    "workout_index": idx,
                }
            )

    if not rows:
        return pd.DataFrame(columns=LOG_COLUMNS)
    df = pd.DataFrame(rows, columns=LOG_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], format="ISO8601", errors="coerce", utc=True)
    return df
