"""Recovery model: time since training → current fatigue and days to recover.

Recovery time scales linearly with post-session fatigue, from 1 day at 0%
to 7 days at 100%. Elapsed time is rescaled onto a 5-unit curve and read
through a stepped plateau, so recovery is fast early and flattens near
completion:

    scaled days   ≥5    ≥4   ≥3   ≥2   ≥1   ≥0
    recovered %   100   98   90   75   50   10

This is the only recovery function in the engine. Pre-computed state from
an external service enters through ``MuscleState.from_record`` instead.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Mapping

from fatigue_engine.models.enums import (
    ALL_MUSCLES,
    CAUTION_THRESHOLD,
    FATIGUE_RECOVERY_DAYS_SPAN,
    MIN_RECOVERY_DAYS,
    READY_TO_TRAIN_THRESHOLD,
    RECOVERY_CURVE_STEPS,
    RECOVERY_CURVE_UNITS,
    RECOVERY_TIMELINE_HOURS,
    Muscle,
    ReadinessStatus,
)
from fatigue_engine.models.muscle_state import MuscleState
from fatigue_engine.models.session import WorkoutSession

_SECONDS_PER_DAY = 86400.0


def recovery_days(fatigue_percent: float) -> float:
    """Days needed to fully recover from a session's fatigue contribution.

    recovery_days = 1 + fatigue / 100 × 6
    """
    fatigue = _clamp(fatigue_percent)
    return MIN_RECOVERY_DAYS + (fatigue / 100.0) * FATIGUE_RECOVERY_DAYS_SPAN


def recovery_percentage(days_since: float, days_to_recover: float) -> float:
    """Percent recovered after ``days_since`` days, on the stepped curve.

    Negative elapsed time (a timestamp slightly in the future) counts as
    just trained.
    """
    if days_to_recover <= 0 or not math.isfinite(days_to_recover):
        days_to_recover = MIN_RECOVERY_DAYS
    if math.isnan(days_since):
        days_since = 0.0
    scaled = max(0.0, days_since) / days_to_recover * RECOVERY_CURVE_UNITS
    for threshold, recovered in RECOVERY_CURVE_STEPS:
        if scaled >= threshold:
            return recovered
    return 100.0


def days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / _SECONDS_PER_DAY


def muscle_state(
    muscle: Muscle,
    fatigue_percent: float,
    last_trained: datetime | None,
    now: datetime,
) -> MuscleState:
    """Current state of one muscle from its last session's fatigue.

    Args:
        muscle: The muscle.
        fatigue_percent: Fatigue recorded when the muscle was last trained.
        last_trained: End time of that session, or None if never trained.
        now: Evaluation time.

    Returns:
        MuscleState with current fatigue = 100 − recovered %.
    """
    if last_trained is None:
        return MuscleState(muscle=muscle)

    needed = recovery_days(fatigue_percent)
    elapsed = max(0.0, days_between(last_trained, now))
    recovered = recovery_percentage(elapsed, needed)
    return MuscleState(
        muscle=muscle,
        current_fatigue_percent=100.0 - recovered,
        last_trained=last_trained,
        days_elapsed=elapsed,
        days_until_recovered=max(0.0, needed - elapsed),
    )


def derive_muscle_states(
    sessions: Iterable[WorkoutSession], now: datetime
) -> dict[Muscle, MuscleState]:
    """Rebuild every muscle's state from completed session history.

    For each muscle the most recent session (by end time) that recorded a
    fatigue contribution seeds the recovery model. Sessions may be in any
    order.
    """
    latest: dict[Muscle, tuple[datetime, float]] = {}
    for session in sessions:
        for muscle, fatigue in session.muscle_fatigue_history.items():
            seen = latest.get(muscle)
            if seen is None or session.end_time >= seen[0]:
                latest[muscle] = (session.end_time, fatigue)

    states: dict[Muscle, MuscleState] = {}
    for muscle in ALL_MUSCLES:
        if muscle in latest:
            trained_at, fatigue = latest[muscle]
            states[muscle] = muscle_state(muscle, fatigue, trained_at, now)
        else:
            states[muscle] = MuscleState(muscle=muscle)
    return states


def current_fatigue_map(states: Mapping[Muscle, MuscleState]) -> dict[Muscle, float]:
    """Flatten states into the muscle → fatigue % map the scorers consume."""
    return {muscle: state.current_fatigue_percent for muscle, state in states.items()}


def classify_readiness(fatigue_percent: float) -> ReadinessStatus:
    """ready (<40%), caution (40-79%) or dont_train (≥80%)."""
    if fatigue_percent >= CAUTION_THRESHOLD:
        return ReadinessStatus.DONT_TRAIN
    if fatigue_percent >= READY_TO_TRAIN_THRESHOLD:
        return ReadinessStatus.CAUTION
    return ReadinessStatus.READY


def recovery_timeline(
    fatigue_percent: float,
    last_trained: datetime,
    hours: Iterable[int] = RECOVERY_TIMELINE_HOURS,
) -> dict[int, float]:
    """Projected fatigue % at fixed offsets (hours) after the session."""
    needed = recovery_days(fatigue_percent)
    timeline: dict[int, float] = {}
    for offset in hours:
        at = last_trained + timedelta(hours=offset)
        elapsed = days_between(last_trained, at)
        timeline[offset] = 100.0 - recovery_percentage(elapsed, needed)
    return timeline


def _clamp(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(100.0, value))
