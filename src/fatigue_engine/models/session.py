"""Logged training: sets, exercises and completed workout sessions.

A WorkoutSession is append-only history. Completing a session produces a
new instance carrying its per-muscle fatigue contribution; the original is
left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from fatigue_engine.models.baseline import BaselineUpdate
from fatigue_engine.models.enums import ExerciseCategory, Muscle, Variation
from fatigue_engine.models.exercise import Exercise


@dataclass(frozen=True)
class LoggedSet:
    reps: float
    weight: float
    is_bodyweight: bool = False  # weight was the user's bodyweight at the time
    to_failure: bool = False


@dataclass(frozen=True)
class LoggedExercise:
    exercise_id: str
    sets: tuple[LoggedSet, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WorkoutSession:
    """A completed workout.

    ``muscle_fatigue_history`` is empty until the engine completes the
    session; afterwards it maps each worked muscle to the fatigue % the
    session contributed and seeds the recovery model.
    """

    id: str
    name: str
    category: ExerciseCategory
    variation: Variation
    start_time: datetime
    end_time: datetime
    logged_exercises: tuple[LoggedExercise, ...] = field(default_factory=tuple)
    muscle_fatigue_history: dict[Muscle, float] = field(default_factory=dict)

    @property
    def duration_s(self) -> float:
        return max(0.0, (self.end_time - self.start_time).total_seconds())


@dataclass(frozen=True)
class SessionCompletion:
    """Everything produced by completing one session."""

    session: WorkoutSession
    muscle_volumes: dict[Muscle, float]
    baseline_updates: tuple[BaselineUpdate, ...] = field(default_factory=tuple)

    @property
    def has_new_baselines(self) -> bool:
        return len(self.baseline_updates) > 0


@dataclass(frozen=True)
class MuscleWorked:
    """Post-workout summary line for one muscle."""

    muscle: Muscle
    fatigue_percent: float
    recovery_days: float
    volume: float


@dataclass(frozen=True)
class UnderStimulatedMuscle:
    """A muscle that was worked but left well under capacity."""

    muscle: Muscle
    fatigue_percent: float
    suggested_exercises: tuple[Exercise, ...]


@dataclass(frozen=True)
class SessionSummary:
    session_id: str
    total_volume: float
    duration_s: float
    exercises_completed: int
    muscles_worked: tuple[MuscleWorked, ...] = field(default_factory=tuple)
    under_stimulated: tuple[UnderStimulatedMuscle, ...] = field(default_factory=tuple)
