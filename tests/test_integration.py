"""End-to-end: load a library, train for a week, then plan the next session."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from fatigue_engine import BaselineStore, FatigueEngine, load_exercise_library
from fatigue_engine.math.recovery import classify_readiness
from fatigue_engine.models.baseline import format_baseline_updates
from fatigue_engine.models.enums import (
    Equipment,
    ExerciseCategory,
    Muscle,
    ReadinessStatus,
    Variation,
)
from fatigue_engine.models.exercise import EquipmentItem, PlannedExercise
from fatigue_engine.models.session import LoggedExercise, LoggedSet, WorkoutSession

LIBRARY_DOCUMENT = {
    "exercises": [
        {
            "id": "bench-press",
            "name": "Bench Press",
            "category": "Push",
            "equipment": ["Barbell"],
            "difficulty": "Intermediate",
            "muscleEngagements": [
                {"muscle": "Pectoralis", "percentage": 85},
                {"muscle": "Triceps", "percentage": 35},
                {"muscle": "Deltoids", "percentage": 30},
            ],
        },
        {
            "id": "pull-up",
            "name": "Pull-up",
            "category": "Pull",
            "equipment": ["Pull-up Bar"],
            "difficulty": "Intermediate",
            "muscleEngagements": [
                {"muscle": "Lats", "percentage": 75},
                {"muscle": "Biceps", "percentage": 55},
            ],
        },
        {
            "id": "goblet-squat",
            "name": "Goblet Squat",
            "category": "Legs",
            "equipment": ["Kettlebell"],
            "difficulty": "Beginner",
            "muscleEngagements": [
                {"muscle": "Quadriceps", "percentage": 80},
                {"muscle": "Glutes", "percentage": 60},
            ],
        },
    ]
}

PERSISTED_BASELINES = {
    "Pectoralis": {"systemLearnedMax": 5000, "userOverride": None},
    "Lats": {"systemLearnedMax": 6000, "userOverride": None},
    "Biceps": {"systemLearnedMax": 2500, "userOverride": None},
}

START = datetime(2025, 3, 3, 18, 0, tzinfo=timezone.utc)


def _session(
    session_id: str,
    day: int,
    category: ExerciseCategory,
    exercise_id: str,
    sets: list[tuple[float, float]],
) -> WorkoutSession:
    end = START + timedelta(days=day)
    return WorkoutSession(
        id=session_id,
        name=f"{category.value} day",
        category=category,
        variation=Variation.A,
        start_time=end - timedelta(hours=1),
        end_time=end,
        logged_exercises=(
            LoggedExercise(exercise_id, tuple(LoggedSet(r, w) for r, w in sets)),
        ),
    )


@pytest.fixture
def engine(tmp_path: Path) -> FatigueEngine:
    path = tmp_path / "exercises.json"
    path.write_text(json.dumps(LIBRARY_DOCUMENT), encoding="utf-8")
    return FatigueEngine(
        load_exercise_library(path), BaselineStore.from_records(PERSISTED_BASELINES)
    )


class TestTrainingWeek:
    def test_week_of_training(self, engine: FatigueEngine) -> None:
        plan = [
            _session("mon", 0, ExerciseCategory.PUSH, "bench-press", [(10, 50)] * 3),
            _session("wed", 2, ExerciseCategory.PULL, "pull-up", [(8, 180)] * 4),
            _session("fri", 4, ExerciseCategory.LEGS, "goblet-squat", [(12, 60)] * 3),
        ]
        history = []
        messages = []
        for session in plan:
            completion = engine.complete_session(session)
            history.append(completion.session)
            messages.append(format_baseline_updates(completion.baseline_updates))

        assert history[0].muscle_fatigue_history[Muscle.PECTORALIS] == pytest.approx(25.5)
        assert messages[1] == "New Biceps max: 3,168 lbs!"
        assert engine.baselines.resolve(Muscle.BICEPS) == 3168.0

        # Saturday evening: pull day was 3 days ago, legs 1 day ago
        now = START + timedelta(days=5)
        states = engine.muscle_states(history, now)
        assert states[Muscle.PECTORALIS].is_recovered
        # quads 17% → 2.04 recovery days; 1 day → 2.45 units → 75% recovered
        assert states[Muscle.QUADRICEPS].current_fatigue_percent == 25.0
        assert classify_readiness(25.0) is ReadinessStatus.READY
        assert states[Muscle.BICEPS].current_fatigue_percent > 0

        fatigue = engine.fatigue_map(states)
        forecast = engine.forecast(
            [PlannedExercise(engine.library["pull-up"], 4, 8, 180)], fatigue
        )
        # Biceps baseline is now 3168, so the same session alone would be 100%
        assert forecast[Muscle.BICEPS].baseline == 3168.0
        assert forecast[Muscle.BICEPS].forecasted_fatigue_percent == 100.0

        recs = engine.recommend(
            fatigue,
            [EquipmentItem(Equipment.BARBELL), EquipmentItem(Equipment.PULL_UP_BAR)],
        )
        assert [r.exercise.id for r in recs][0] == "bench-press"

    def test_records_survive_round_trip(self, engine: FatigueEngine) -> None:
        engine.complete_session(
            _session("wed", 2, ExerciseCategory.PULL, "pull-up", [(8, 180)] * 4)
        )
        engine.baselines.set_override(Muscle.LATS, "7000")
        records = engine.baselines.to_records()
        assert records["Biceps"]["systemLearnedMax"] == 3168.0
        assert records["Lats"]["userOverride"] == 7000.0

        restored = BaselineStore.from_records(records)
        assert restored.resolve(Muscle.LATS) == 7000.0
