"""Data models for the fatigue engine."""

from fatigue_engine.models.baseline import BaselineUpdate, MuscleBaseline
from fatigue_engine.models.enums import (
    ALL_MUSCLES,
    Difficulty,
    Equipment,
    ExerciseCategory,
    Muscle,
    ProgressionMethod,
    ReadinessStatus,
    RecommendationStatus,
    Variation,
)
from fatigue_engine.models.exercise import (
    EquipmentItem,
    Exercise,
    MuscleEngagement,
    PlannedExercise,
)
from fatigue_engine.models.muscle_state import ForecastedMuscleState, MuscleState
from fatigue_engine.models.recommendation import (
    EfficiencyBadge,
    EfficiencyResult,
    ExerciseRecommendation,
    MuscleReadiness,
)
from fatigue_engine.models.session import (
    LoggedExercise,
    LoggedSet,
    MuscleWorked,
    SessionCompletion,
    SessionSummary,
    UnderStimulatedMuscle,
    WorkoutSession,
)

__all__ = [
    "ALL_MUSCLES",
    "BaselineUpdate",
    "Difficulty",
    "EfficiencyBadge",
    "EfficiencyResult",
    "Equipment",
    "EquipmentItem",
    "Exercise",
    "ExerciseCategory",
    "ExerciseRecommendation",
    "ForecastedMuscleState",
    "LoggedExercise",
    "LoggedSet",
    "Muscle",
    "MuscleBaseline",
    "MuscleEngagement",
    "MuscleReadiness",
    "MuscleState",
    "MuscleWorked",
    "PlannedExercise",
    "ProgressionMethod",
    "ReadinessStatus",
    "RecommendationStatus",
    "SessionCompletion",
    "SessionSummary",
    "UnderStimulatedMuscle",
    "Variation",
    "WorkoutSession",
]
