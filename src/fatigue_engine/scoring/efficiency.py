"""Exercise efficiency for a chosen target muscle, with bottleneck detection.

Algorithm:
    1. target_score = target engagement × target capacity remaining
    2. For every other engaged muscle, support = engagement × capacity remaining
    3. The bottleneck is the supporting muscle with the lowest support score
    4. efficiency = target_score / bottleneck_score (target_score if no supporters)

Engagement enters as a fraction (percentage / 100), capacity as a percent.
Higher scores mean the target can be pushed further before a supporting
muscle gives out.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping

from fatigue_engine.models.enums import (
    EFFICIENT_SCORE_THRESHOLD,
    LIMITED_SCORE_THRESHOLD,
    Muscle,
)
from fatigue_engine.models.exercise import Exercise, MuscleEngagement
from fatigue_engine.models.recommendation import EfficiencyBadge, EfficiencyResult

EFFICIENT_BADGE = EfficiencyBadge(label="Efficient", color="green")
LIMITED_BADGE = EfficiencyBadge(label="Limited", color="yellow")
POOR_BADGE = EfficiencyBadge(label="Poor choice", color="red")


def calculate_efficiency_score(
    target: Muscle,
    engagements: Iterable[MuscleEngagement],
    fatigue: Mapping[Muscle, float],
) -> float:
    """Efficiency of an exercise for ``target`` given current fatigue.

    Args:
        target: Muscle the user wants to train.
        engagements: The candidate exercise's engagement list.
        fatigue: Current fatigue % per muscle; missing muscles count as fresh.

    Returns:
        The efficiency ratio. 0.0 when the exercise does not engage the
        target or a supporting muscle has no capacity left.
    """
    engagements = tuple(engagements)
    target_pct = _target_engagement(target, engagements)
    if target_pct is None:
        return 0.0

    target_score = _capacity_score(target_pct, fatigue.get(target, 0.0))
    bottleneck = _bottleneck(target, engagements, fatigue)
    if bottleneck is None:
        return target_score

    _, bottleneck_score = bottleneck
    if bottleneck_score <= 0:
        return 0.0
    return target_score / bottleneck_score


def find_bottleneck_muscle(
    target: Muscle,
    engagements: Iterable[MuscleEngagement],
    fatigue: Mapping[Muscle, float],
) -> Muscle | None:
    """The supporting muscle with the least engagement-weighted capacity, or None."""
    bottleneck = _bottleneck(target, tuple(engagements), fatigue)
    return bottleneck[0] if bottleneck is not None else None


def efficiency_badge(score: float) -> EfficiencyBadge:
    """>5.0 Efficient (green), 2.0-5.0 Limited (yellow), <2.0 Poor choice (red)."""
    if score > EFFICIENT_SCORE_THRESHOLD:
        return EFFICIENT_BADGE
    if score >= LIMITED_SCORE_THRESHOLD:
        return LIMITED_BADGE
    return POOR_BADGE


def rank_exercises_for_target(
    target: Muscle,
    exercises: Iterable[Exercise],
    fatigue: Mapping[Muscle, float],
) -> list[EfficiencyResult]:
    """Score every exercise that engages ``target``, most efficient first."""
    results: list[EfficiencyResult] = []
    for exercise in exercises:
        if exercise.engagement_for(target) <= 0:
            continue
        score = calculate_efficiency_score(target, exercise.engagements, fatigue)
        bottleneck = find_bottleneck_muscle(target, exercise.engagements, fatigue)
        results.append(
            EfficiencyResult(
                exercise=exercise,
                target=target,
                score=score,
                badge=efficiency_badge(score),
                bottleneck=bottleneck,
                explanation=_explain(target, bottleneck, fatigue),
            )
        )
    results.sort(key=lambda r: r.score, reverse=True)
    return results


def _explain(target: Muscle, bottleneck: Muscle | None, fatigue: Mapping[Muscle, float]) -> str:
    if bottleneck is None:
        return f"Isolates {target.value} with no supporting muscles"
    return (
        f"Limited by {bottleneck.value} "
        f"({_fatigue_of(fatigue, bottleneck):.0f}% fatigued)"
    )


def _target_engagement(
    target: Muscle, engagements: tuple[MuscleEngagement, ...]
) -> float | None:
    for engagement in engagements:
        if engagement.muscle == target:
            return engagement.percentage
    return None


def _bottleneck(
    target: Muscle,
    engagements: tuple[MuscleEngagement, ...],
    fatigue: Mapping[Muscle, float],
) -> tuple[Muscle, float] | None:
    lowest: tuple[Muscle, float] | None = None
    for engagement in engagements:
        if engagement.muscle == target:
            continue
        score = _capacity_score(engagement.percentage, fatigue.get(engagement.muscle, 0.0))
        if lowest is None or score < lowest[1]:
            lowest = (engagement.muscle, score)
    return lowest


def _capacity_score(engagement_pct: float, fatigue_pct: float) -> float:
    return (engagement_pct / 100.0) * (100.0 - _fatigue_value(fatigue_pct))


def _fatigue_of(fatigue: Mapping[Muscle, float], muscle: Muscle) -> float:
    return _fatigue_value(fatigue.get(muscle, 0.0))


def _fatigue_value(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(100.0, value))
