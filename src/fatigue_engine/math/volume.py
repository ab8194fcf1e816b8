"""Volume accounting: per-set load and its distribution across engaged muscles.

Volume is reps × weight (lbs). An exercise's session volume is spread over
the muscles it trains in proportion to each engagement percentage; the
percentages of one exercise are independent and need not sum to 100.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

from fatigue_engine.models.enums import ALL_MUSCLES, Muscle
from fatigue_engine.models.exercise import Exercise, MuscleEngagement
from fatigue_engine.models.session import LoggedExercise, LoggedSet

logger = logging.getLogger(__name__)

# exercise id → {muscle: engagement percentage}
CalibrationMap = Mapping[str, Mapping[Muscle, float]]


def calculate_volume(reps: float, weight: float) -> float:
    """Volume of a single set.

    Callers normally pass UI-clamped values (reps 1-50, weight 0-500), but
    negative, NaN or infinite inputs are treated as a zero-volume set.
    """
    if not _is_valid_quantity(reps) or not _is_valid_quantity(weight):
        return 0.0
    return float(reps) * float(weight)


def exercise_volume(sets: Iterable[LoggedSet]) -> float:
    """Total volume of all logged sets of one exercise."""
    return sum(calculate_volume(s.reps, s.weight) for s in sets)


def planned_volume(sets: int, reps: float, weight: float) -> float:
    """Volume of sets × reps × weight that has not been performed yet."""
    if not _is_valid_quantity(sets):
        return 0.0
    return float(sets) * calculate_volume(reps, weight)


def distribute_volume(
    volume: float, engagements: Iterable[MuscleEngagement]
) -> dict[Muscle, float]:
    """Split one exercise's volume across the muscles it engages.

    A muscle listed twice accumulates both shares.
    """
    distributed: dict[Muscle, float] = {}
    if not _is_valid_quantity(volume):
        return distributed
    for engagement in engagements:
        pct = engagement.percentage if _is_valid_quantity(engagement.percentage) else 0.0
        share = volume * (pct / 100.0)
        distributed[engagement.muscle] = distributed.get(engagement.muscle, 0.0) + share
    return distributed


def apply_calibrations(
    exercise: Exercise, calibrations: CalibrationMap | None = None
) -> tuple[MuscleEngagement, ...]:
    """Exercise engagements with the user's per-muscle percentage overrides applied."""
    if not calibrations:
        return exercise.engagements
    overrides = calibrations.get(exercise.id)
    if not overrides:
        return exercise.engagements
    return tuple(
        MuscleEngagement(muscle=e.muscle, percentage=overrides.get(e.muscle, e.percentage))
        for e in exercise.engagements
    )


def empty_muscle_map() -> dict[Muscle, float]:
    return {muscle: 0.0 for muscle in ALL_MUSCLES}


def session_muscle_volumes(
    logged_exercises: Iterable[LoggedExercise],
    library: Mapping[str, Exercise],
    calibrations: CalibrationMap | None = None,
) -> dict[Muscle, float]:
    """Per-muscle volume for a whole session, covering all 13 muscles.

    Logged exercises whose id is not in the library are skipped.
    """
    volumes = empty_muscle_map()
    for logged in logged_exercises:
        exercise = library.get(logged.exercise_id)
        if exercise is None:
            logger.warning("Skipping unknown exercise id %r", logged.exercise_id)
            continue
        total = exercise_volume(logged.sets)
        engagements = apply_calibrations(exercise, calibrations)
        for muscle, share in distribute_volume(total, engagements).items():
            volumes[muscle] += share
    return volumes


def _is_valid_quantity(value: float) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number >= 0.0
