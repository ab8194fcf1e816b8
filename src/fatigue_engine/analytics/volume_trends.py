"""Volume trend analytics over completed session history.

Weeks start on Sunday. Category totals count every logged set, including
sets of exercises missing from the library; per-muscle volume needs the
library's engagement data and skips unknown exercises.
"""

from __future__ import annotations

from typing import Iterable, Mapping

import pandas as pd

from fatigue_engine.math.volume import exercise_volume, session_muscle_volumes
from fatigue_engine.models.enums import ALL_MUSCLES, ExerciseCategory
from fatigue_engine.models.exercise import Exercise
from fatigue_engine.models.session import WorkoutSession

CATEGORY_COLUMNS: list[str] = [c.value for c in ExerciseCategory]


def session_volume(session: WorkoutSession) -> float:
    """Total volume of every set logged in the session."""
    return sum(exercise_volume(logged.sets) for logged in session.logged_exercises)


def week_start(timestamp: pd.Timestamp) -> pd.Timestamp:
    """Midnight of the Sunday on or before ``timestamp``."""
    day = timestamp.normalize()
    # Monday=0 ... Sunday=6
    return day - pd.Timedelta(days=(day.dayofweek + 1) % 7)


def weekly_volume_by_category(sessions: Iterable[WorkoutSession]) -> pd.DataFrame:
    """Weekly volume per category plus a ``total`` column, oldest week first.

    Returns:
        DataFrame indexed by ``week_start`` with columns Push, Pull, Legs,
        Core and total. Empty (with those columns) when there is no history.
    """
    rows = [
        {
            "week_start": week_start(pd.Timestamp(s.end_time)),
            "category": s.category.value,
            "volume": session_volume(s),
        }
        for s in sessions
    ]
    if not rows:
        empty = pd.DataFrame(columns=CATEGORY_COLUMNS + ["total"], dtype="float64")
        empty.index.name = "week_start"
        return empty

    frame = pd.DataFrame(rows)
    weekly = frame.pivot_table(
        index="week_start",
        columns="category",
        values="volume",
        aggfunc="sum",
        fill_value=0.0,
    )
    weekly = weekly.reindex(columns=CATEGORY_COLUMNS, fill_value=0.0).astype("float64")
    weekly["total"] = weekly[CATEGORY_COLUMNS].sum(axis=1)
    weekly.columns.name = None
    return weekly.sort_index()


def category_volume_change(weekly: pd.DataFrame) -> dict[str, dict[str, float]]:
    """Total and first-half vs second-half percent change per category.

    The weeks are split at the midpoint (second half gets the extra week);
    a category with no first-half volume reports 0% change.
    """
    half = len(weekly) // 2
    first = weekly.iloc[:half]
    second = weekly.iloc[half:]

    result: dict[str, dict[str, float]] = {}
    for category in CATEGORY_COLUMNS:
        total = float(weekly[category].sum()) if category in weekly else 0.0
        before = float(first[category].sum()) if category in first else 0.0
        after = float(second[category].sum()) if category in second else 0.0
        change = (after - before) / before * 100.0 if before > 0 else 0.0
        result[category] = {"total": total, "percent_change": change}
    return result


def muscle_volume_history(
    sessions: Iterable[WorkoutSession], library: Mapping[str, Exercise]
) -> pd.DataFrame:
    """Per-session volume for each of the 13 muscles, indexed by session end time."""
    records: list[dict[str, float]] = []
    index: list[pd.Timestamp] = []
    for session in sessions:
        volumes = session_muscle_volumes(session.logged_exercises, library)
        records.append({muscle.value: volumes[muscle] for muscle in ALL_MUSCLES})
        index.append(pd.Timestamp(session.end_time))

    columns = [muscle.value for muscle in ALL_MUSCLES]
    frame = pd.DataFrame(records, index=pd.DatetimeIndex(index, name="end_time"), columns=columns)
    return frame.astype("float64").sort_index()
