"""Scorer outputs: efficiency results and whole-exercise recommendations."""

from __future__ import annotations

from dataclasses import dataclass, field

from fatigue_engine.models.enums import Muscle, RecommendationStatus
from fatigue_engine.models.exercise import Exercise


@dataclass(frozen=True)
class EfficiencyBadge:
    label: str  # "Efficient", "Limited" or "Poor choice"
    color: str  # "green", "yellow" or "red"


@dataclass(frozen=True)
class EfficiencyResult:
    """How far an exercise can push a target muscle before a supporter limits it."""

    exercise: Exercise
    target: Muscle
    score: float
    badge: EfficiencyBadge
    bottleneck: Muscle | None = None
    explanation: str = ""


@dataclass(frozen=True)
class MuscleReadiness:
    """Readiness of one muscle engaged by a candidate exercise."""

    muscle: Muscle
    recovery: float
    fatigue: float
    engagement: float
    is_primary: bool


@dataclass(frozen=True)
class ExerciseRecommendation:
    """A ranked exercise with the muscle data behind its score."""

    exercise: Exercise
    opportunity_score: float
    status: RecommendationStatus
    explanation: str
    primary_muscles: tuple[MuscleReadiness, ...] = field(default_factory=tuple)
    limiting_factors: tuple[MuscleReadiness, ...] = field(default_factory=tuple)
