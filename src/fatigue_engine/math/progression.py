"""Progressive overload suggestions for the next session of an exercise.

Alternates between a 3% weight increase and a 3% rep increase (at least one
rep) so consecutive sessions attack adaptation from different angles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fatigue_engine.models.enums import (
    PROGRESSION_INCREASE_PCT,
    WEIGHT_ROUNDING_INCREMENT,
    ProgressionMethod,
    Variation,
)


@dataclass(frozen=True)
class Performance:
    weight: float
    reps: int


@dataclass(frozen=True)
class OverloadSuggestion:
    suggested_weight: float
    suggested_reps: int
    method: ProgressionMethod
    percent_increase: float = PROGRESSION_INCREASE_PCT * 100.0


def round_to_increment(value: float, increment: float = WEIGHT_ROUNDING_INCREMENT) -> float:
    """Round half-up to the nearest plate increment. 102.3 → 102.5 at 0.5 lbs."""
    return math.floor(value / increment + 0.5) * increment


def next_progression_method(last: ProgressionMethod | None) -> ProgressionMethod:
    """Weight first, then alternate."""
    if last is None:
        return ProgressionMethod.WEIGHT
    if last is ProgressionMethod.WEIGHT:
        return ProgressionMethod.REPS
    return ProgressionMethod.WEIGHT


def calculate_progressive_overload(
    last: Performance,
    last_method: ProgressionMethod | None = None,
    personal_best: Performance | None = None,
) -> OverloadSuggestion:
    """Suggest weight and reps for the next session.

    Args:
        last: Weight and reps from the most recent session.
        last_method: Progression used last time, None for the first time.
        personal_best: If given, the suggested weight never drops below it.

    Returns:
        OverloadSuggestion with the method that was applied.
    """
    method = next_progression_method(last_method)
    weight = last.weight
    reps = last.reps

    if method is ProgressionMethod.WEIGHT:
        weight = round_to_increment(last.weight * (1.0 + PROGRESSION_INCREASE_PCT))
    else:
        reps = last.reps + max(1, math.ceil(last.reps * PROGRESSION_INCREASE_PCT))

    if personal_best is not None and weight < personal_best.weight:
        weight = personal_best.weight

    return OverloadSuggestion(suggested_weight=weight, suggested_reps=reps, method=method)


def suggested_variation(last: Variation | None) -> Variation:
    """Alternate A/B sessions, starting with A."""
    if last is Variation.A:
        return Variation.B
    return Variation.A
