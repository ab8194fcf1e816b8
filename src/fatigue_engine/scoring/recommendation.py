"""Whole-exercise recommendations ranked by training opportunity.

opportunity = mean recovery of primary movers − max fatigue of any engaged muscle × 0.5

A single fatigued secondary muscle therefore drags down an otherwise fresh
exercise. Exercises the user lacks equipment for are dropped entirely.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping

import numpy as np

from fatigue_engine.config import EngineConfig
from fatigue_engine.math.volume import CalibrationMap, apply_calibrations
from fatigue_engine.models.enums import (
    EXCELLENT_FRESHNESS,
    GOOD_FRESHNESS,
    MAX_FATIGUE_PENALTY,
    PRIMARY_ENGAGEMENT_THRESHOLD,
    SUBOPTIMAL_FRESHNESS,
    ExerciseCategory,
    Muscle,
    RecommendationStatus,
)
from fatigue_engine.models.exercise import EquipmentItem, Exercise
from fatigue_engine.models.recommendation import ExerciseRecommendation, MuscleReadiness


def is_equipment_available(exercise: Exercise, inventory: Iterable[EquipmentItem]) -> bool:
    """True when every required equipment type is owned with quantity > 0."""
    owned = {item.type for item in inventory if item.quantity > 0}
    if not owned:
        return False
    return all(required in owned for required in exercise.equipment)


def muscle_readiness(
    exercise: Exercise,
    fatigue: Mapping[Muscle, float],
    calibrations: CalibrationMap | None = None,
    primary_threshold: float = PRIMARY_ENGAGEMENT_THRESHOLD,
) -> list[MuscleReadiness]:
    """Readiness of every muscle the exercise engages; missing state counts as fresh."""
    readiness: list[MuscleReadiness] = []
    for engagement in apply_calibrations(exercise, calibrations):
        muscle_fatigue = _fatigue_value(fatigue.get(engagement.muscle, 0.0))
        readiness.append(
            MuscleReadiness(
                muscle=engagement.muscle,
                recovery=100.0 - muscle_fatigue,
                fatigue=muscle_fatigue,
                engagement=engagement.percentage,
                is_primary=engagement.percentage >= primary_threshold,
            )
        )
    return readiness


def average_freshness(primary: Iterable[MuscleReadiness]) -> float:
    recoveries = np.array([m.recovery for m in primary], dtype=np.float64)
    if recoveries.size == 0:
        return 0.0
    return float(np.mean(recoveries))


def opportunity_score(
    readiness: Iterable[MuscleReadiness],
    fatigue_penalty: float = MAX_FATIGUE_PENALTY,
) -> float:
    """avg_freshness(primary) − max_fatigue(all engaged) × penalty."""
    readiness = list(readiness)
    freshness = average_freshness(m for m in readiness if m.is_primary)
    fatigues = np.array([m.fatigue for m in readiness], dtype=np.float64)
    max_fatigue = float(np.max(fatigues)) if fatigues.size else 0.0
    return freshness - max(0.0, max_fatigue) * fatigue_penalty


def determine_status(
    avg_freshness: float, limiting_factors: Iterable[MuscleReadiness]
) -> RecommendationStatus:
    """Classify a candidate; rules are checked in order, first match wins."""
    has_limiting = any(True for _ in limiting_factors)
    if not has_limiting and avg_freshness >= EXCELLENT_FRESHNESS:
        return RecommendationStatus.EXCELLENT
    if not has_limiting and avg_freshness >= GOOD_FRESHNESS:
        return RecommendationStatus.GOOD
    if has_limiting and avg_freshness >= SUBOPTIMAL_FRESHNESS:
        return RecommendationStatus.SUBOPTIMAL
    return RecommendationStatus.NOT_RECOMMENDED


def explain(
    status: RecommendationStatus, limiting_factors: Iterable[MuscleReadiness]
) -> str:
    if status is RecommendationStatus.EXCELLENT:
        return "All muscles fully recovered - maximum training potential"
    if status is RecommendationStatus.GOOD:
        return "Primary muscles ready - good training opportunity"
    if status is RecommendationStatus.SUBOPTIMAL:
        limiting = list(limiting_factors)
        if limiting:
            worst = max(limiting, key=lambda m: m.fatigue)
            return (
                f"{worst.muscle.value} is {worst.fatigue:.0f}% fatigued "
                f"and may limit performance"
            )
        return "Some engaged muscles are fatigued"
    return "Primary muscles need more recovery time"


def score_exercise(
    exercise: Exercise,
    fatigue: Mapping[Muscle, float],
    calibrations: CalibrationMap | None = None,
    config: EngineConfig | None = None,
) -> ExerciseRecommendation:
    """Score one exercise regardless of equipment."""
    config = config or EngineConfig()
    readiness = muscle_readiness(
        exercise, fatigue, calibrations, config.primary_engagement_threshold
    )
    primary = tuple(m for m in readiness if m.is_primary)
    limiting = tuple(m for m in readiness if m.fatigue > config.limiting_fatigue_threshold)
    freshness = average_freshness(primary)
    status = determine_status(freshness, limiting)
    return ExerciseRecommendation(
        exercise=exercise,
        opportunity_score=opportunity_score(readiness, config.max_fatigue_penalty),
        status=status,
        explanation=explain(status, limiting),
        primary_muscles=primary,
        limiting_factors=limiting,
    )


def calculate_recommendations(
    exercises: Iterable[Exercise],
    fatigue: Mapping[Muscle, float],
    equipment: Iterable[EquipmentItem],
    category: ExerciseCategory | None = None,
    calibrations: CalibrationMap | None = None,
    config: EngineConfig | None = None,
) -> list[ExerciseRecommendation]:
    """Rank every available exercise by opportunity score, highest first.

    Args:
        exercises: Candidate exercises (normally the whole library).
        fatigue: Current fatigue % per muscle; missing muscles are fresh.
        equipment: The user's inventory; an empty inventory admits nothing.
        category: Optional category filter.
        calibrations: Optional per-user engagement overrides.
        config: Thresholds; defaults to EngineConfig().

    Returns:
        Recommendations sorted by descending opportunity score. Ties keep
        the input order.
    """
    inventory = tuple(equipment)
    recommendations: list[ExerciseRecommendation] = []
    for exercise in exercises:
        if category is not None and exercise.category != category:
            continue
        if not is_equipment_available(exercise, inventory):
            continue
        recommendations.append(score_exercise(exercise, fatigue, calibrations, config))
    recommendations.sort(key=lambda r: r.opportunity_score, reverse=True)
    return recommendations


def _fatigue_value(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(100.0, value))
