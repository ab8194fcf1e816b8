"""Shared test fixtures: a small exercise library, baselines and logged sessions."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from fatigue_engine.baseline_store import BaselineStore
from fatigue_engine.engine import FatigueEngine
from fatigue_engine.library import ExerciseLibrary
from fatigue_engine.models.baseline import MuscleBaseline
from fatigue_engine.models.enums import (
    Difficulty,
    Equipment,
    ExerciseCategory,
    Muscle,
    Variation,
)
from fatigue_engine.models.exercise import Exercise, MuscleEngagement
from fatigue_engine.models.session import LoggedExercise, LoggedSet, WorkoutSession


def _exercise(
    exercise_id: str,
    category: ExerciseCategory,
    equipment: tuple[Equipment, ...],
    engagements: dict[Muscle, float],
) -> Exercise:
    return Exercise(
        id=exercise_id,
        name=exercise_id.replace("-", " ").title(),
        category=category,
        equipment=equipment,
        difficulty=Difficulty.INTERMEDIATE,
        engagements=tuple(MuscleEngagement(m, p) for m, p in engagements.items()),
        variation=Variation.BOTH,
    )


@pytest.fixture
def bench_press() -> Exercise:
    return _exercise(
        "bench-press",
        ExerciseCategory.PUSH,
        (Equipment.BARBELL,),
        {Muscle.PECTORALIS: 85, Muscle.TRICEPS: 35, Muscle.DELTOIDS: 30},
    )


@pytest.fixture
def tricep_extension() -> Exercise:
    """Near-isolation triceps movement."""
    return _exercise(
        "tricep-extension",
        ExerciseCategory.PUSH,
        (Equipment.DUMBBELLS,),
        {Muscle.TRICEPS: 90, Muscle.FOREARMS: 10},
    )


@pytest.fixture
def close_grip_press() -> Exercise:
    """Compound triceps movement that leans heavily on the chest."""
    return _exercise(
        "close-grip-press",
        ExerciseCategory.PUSH,
        (Equipment.BARBELL,),
        {Muscle.TRICEPS: 75, Muscle.PECTORALIS: 70},
    )


@pytest.fixture
def pull_up() -> Exercise:
    return _exercise(
        "pull-up",
        ExerciseCategory.PULL,
        (Equipment.PULL_UP_BAR,),
        {Muscle.LATS: 75, Muscle.BICEPS: 55, Muscle.FOREARMS: 20},
    )


@pytest.fixture
def dumbbell_row() -> Exercise:
    return _exercise(
        "dumbbell-row",
        ExerciseCategory.PULL,
        (Equipment.DUMBBELLS,),
        {Muscle.LATS: 60, Muscle.RHOMBOIDS: 50, Muscle.BICEPS: 30},
    )


@pytest.fixture
def bicep_curl() -> Exercise:
    return _exercise(
        "bicep-curl",
        ExerciseCategory.PULL,
        (Equipment.DUMBBELLS,),
        {Muscle.BICEPS: 90, Muscle.FOREARMS: 30},
    )


@pytest.fixture
def goblet_squat() -> Exercise:
    return _exercise(
        "goblet-squat",
        ExerciseCategory.LEGS,
        (Equipment.KETTLEBELL,),
        {Muscle.QUADRICEPS: 80, Muscle.GLUTES: 60, Muscle.CORE: 20},
    )


@pytest.fixture
def plank() -> Exercise:
    return _exercise(
        "plank",
        ExerciseCategory.CORE,
        (Equipment.BODYWEIGHT,),
        {Muscle.CORE: 90, Muscle.DELTOIDS: 10},
    )


@pytest.fixture
def library(
    bench_press: Exercise,
    tricep_extension: Exercise,
    close_grip_press: Exercise,
    pull_up: Exercise,
    dumbbell_row: Exercise,
    bicep_curl: Exercise,
    goblet_squat: Exercise,
    plank: Exercise,
) -> ExerciseLibrary:
    return ExerciseLibrary([
        bench_press,
        tricep_extension,
        close_grip_press,
        pull_up,
        dumbbell_row,
        bicep_curl,
        goblet_squat,
        plank,
    ])


@pytest.fixture
def baseline_store() -> BaselineStore:
    """Chest at 5000 lbs, lats 6000, biceps 2500; everything else untrained."""
    return BaselineStore({
        Muscle.PECTORALIS: MuscleBaseline(system_learned_max=5000.0),
        Muscle.LATS: MuscleBaseline(system_learned_max=6000.0),
        Muscle.BICEPS: MuscleBaseline(system_learned_max=2500.0),
    })


@pytest.fixture
def engine(library: ExerciseLibrary, baseline_store: BaselineStore) -> FatigueEngine:
    return FatigueEngine(library, baseline_store)


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 12, 18, 0, tzinfo=timezone.utc)  # Wednesday


@pytest.fixture
def make_session(now: datetime) -> Callable[..., WorkoutSession]:
    """Factory: ``make_session({"bench-press": [(10, 50)] * 3}, days_ago=1)``."""

    def _make(
        sets_by_exercise: dict[str, list[tuple[float, float]]],
        days_ago: float = 0.0,
        category: ExerciseCategory = ExerciseCategory.PUSH,
        session_id: str = "session-1",
        duration_min: float = 45.0,
    ) -> WorkoutSession:
        end = now - timedelta(days=days_ago)
        return WorkoutSession(
            id=session_id,
            name=f"{category.value} A",
            category=category,
            variation=Variation.A,
            start_time=end - timedelta(minutes=duration_min),
            end_time=end,
            logged_exercises=tuple(
                LoggedExercise(
                    exercise_id=exercise_id,
                    sets=tuple(LoggedSet(reps=r, weight=w) for r, w in sets),
                )
                for exercise_id, sets in sets_by_exercise.items()
            ),
        )

    return _make
