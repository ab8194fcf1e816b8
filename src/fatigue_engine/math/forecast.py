"""Forecasting: what planned-but-unperformed work would do to each muscle.

Every function here is pure. Forecasts answer "if I did this workout right
now", so they never look at the clock; time-based recovery is the recovery
model's job.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping

from fatigue_engine.math.fatigue import calculate_fatigue_percent
from fatigue_engine.math.volume import distribute_volume, empty_muscle_map, planned_volume
from fatigue_engine.models.baseline import MuscleBaseline, resolve_baseline
from fatigue_engine.models.enums import (
    ALL_MUSCLES,
    DEFAULT_BASELINE,
    IMPACT_MIN_ENGAGEMENT,
    MAX_FATIGUE_PERCENT,
    Muscle,
)
from fatigue_engine.models.exercise import Exercise, MuscleEngagement, PlannedExercise
from fatigue_engine.models.muscle_state import ForecastedMuscleState


@dataclass(frozen=True)
class MuscleCapacity:
    """Current fatigue plus the baseline it is measured against."""

    current_fatigue_percent: float = 0.0
    baseline: float = DEFAULT_BASELINE


def forecast_fatigue(
    planned: Iterable[PlannedExercise],
    baselines: Mapping[Muscle, MuscleBaseline],
    current_fatigue: Mapping[Muscle, float] | None = None,
    default_baseline: float = DEFAULT_BASELINE,
) -> dict[Muscle, ForecastedMuscleState]:
    """Project fatigue for all 13 muscles after a list of planned exercises.

    forecasted = min(100, current + added_volume / baseline × 100)

    Args:
        planned: Exercises with proposed sets/reps/weight.
        baselines: Baseline records (a BaselineStore or a plain mapping).
        current_fatigue: Current fatigue % per muscle; missing muscles are 0.
        default_baseline: Capacity for muscles without a usable baseline.

    Returns:
        A ForecastedMuscleState for every muscle, including untouched ones.
    """
    volumes = empty_muscle_map()
    for item in planned:
        total = planned_volume(item.sets, item.reps, item.weight)
        for muscle, share in distribute_volume(total, item.exercise.engagements).items():
            volumes[muscle] += share

    current_fatigue = current_fatigue or {}
    result: dict[Muscle, ForecastedMuscleState] = {}
    for muscle in ALL_MUSCLES:
        baseline = resolve_baseline(baselines.get(muscle), default_baseline)
        if not math.isfinite(baseline) or baseline <= 0:
            baseline = default_baseline
        current = _clamp_percent(current_fatigue.get(muscle, 0.0))
        added = volumes[muscle] / baseline * 100.0
        result[muscle] = ForecastedMuscleState(
            muscle=muscle,
            current_fatigue_percent=current,
            forecasted_fatigue_percent=min(MAX_FATIGUE_PERCENT, current + added),
            volume_added=volumes[muscle],
            baseline=baseline,
        )
    return result


def forecast_exercise(
    engagements: Iterable[MuscleEngagement],
    total_volume: float,
    capacities: Mapping[Muscle, MuscleCapacity],
    default_baseline: float = DEFAULT_BASELINE,
) -> dict[Muscle, ForecastedMuscleState]:
    """Forecast only the muscles a single exercise engages.

    Muscles without a capacity entry start fresh against the default baseline.
    """
    forecast: dict[Muscle, ForecastedMuscleState] = {}
    engagements = tuple(engagements)
    for muscle, added_volume in distribute_volume(total_volume, engagements).items():
        capacity = capacities.get(muscle) or MuscleCapacity(baseline=default_baseline)
        baseline = capacity.baseline if capacity.baseline > 0 else default_baseline
        current = _clamp_percent(capacity.current_fatigue_percent)
        forecast[muscle] = ForecastedMuscleState(
            muscle=muscle,
            current_fatigue_percent=current,
            forecasted_fatigue_percent=min(
                MAX_FATIGUE_PERCENT, current + added_volume / baseline * 100.0
            ),
            volume_added=added_volume,
            baseline=baseline,
        )
    return forecast


def find_optimal_volume(
    target: Muscle,
    engagements: Iterable[MuscleEngagement],
    capacities: Mapping[Muscle, MuscleCapacity],
    default_baseline: float = DEFAULT_BASELINE,
) -> int:
    """Largest exercise volume that exhausts the target before any supporter.

    Each engaged muscle can absorb ``remaining% × baseline / engagement``
    of exercise volume; the smallest of those (target included) is the
    limit. Returns 0 when the exercise does not engage the target.
    """
    engagements = tuple(engagements)
    target_pct = next((e.percentage for e in engagements if e.muscle == target), 0.0)
    if target_pct <= 0:
        return 0

    limit = _max_volume_for(capacities.get(target), target_pct, default_baseline)
    for engagement in engagements:
        if engagement.muscle == target or engagement.percentage <= 0:
            continue
        muscle_limit = _max_volume_for(
            capacities.get(engagement.muscle), engagement.percentage, default_baseline
        )
        limit = min(limit, muscle_limit)
    return int(math.floor(max(0.0, limit)))


def format_muscle_impact(
    exercise: Exercise,
    sets: int,
    reps: float,
    weight: float,
    baselines: Mapping[Muscle, MuscleBaseline],
    default_baseline: float = DEFAULT_BASELINE,
) -> list[str]:
    """Short per-muscle impact labels, e.g. ``["Pectoralis +26%", "Triceps +9%"]``.

    Engagements under 5% are omitted; labels are ordered by impact.
    """
    total = planned_volume(sets, reps, weight)
    impacts: list[tuple[Muscle, float]] = []
    for engagement in exercise.engagements:
        if engagement.percentage < IMPACT_MIN_ENGAGEMENT:
            continue
        volume = total * (engagement.percentage / 100.0)
        baseline = resolve_baseline(baselines.get(engagement.muscle), default_baseline)
        impacts.append(
            (engagement.muscle, calculate_fatigue_percent(volume, baseline, default_baseline))
        )
    impacts.sort(key=lambda item: item[1], reverse=True)
    return [f"{muscle.value} +{percent:.0f}%" for muscle, percent in impacts]


def _max_volume_for(
    capacity: MuscleCapacity | None, engagement_pct: float, default_baseline: float
) -> float:
    capacity = capacity or MuscleCapacity(baseline=default_baseline)
    baseline = capacity.baseline if capacity.baseline > 0 else default_baseline
    remaining = 100.0 - _clamp_percent(capacity.current_fatigue_percent)
    return (remaining / 100.0) * baseline / (engagement_pct / 100.0)


def _clamp_percent(value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, min(MAX_FATIGUE_PERCENT, number))
