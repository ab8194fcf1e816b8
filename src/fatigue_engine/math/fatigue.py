"""Fatigue accumulation: session volume expressed against a muscle's baseline."""

from __future__ import annotations

import math
from typing import Mapping

from fatigue_engine.models.baseline import MuscleBaseline, resolve_baseline
from fatigue_engine.models.enums import DEFAULT_BASELINE, MAX_FATIGUE_PERCENT, Muscle


def calculate_fatigue_percent(
    volume: float,
    baseline: float,
    default_baseline: float = DEFAULT_BASELINE,
) -> float:
    """Convert volume into a 0-100 fatigue percentage.

    fatigue = min(100, volume / baseline × 100)

    Args:
        volume: Session volume for the muscle (lbs).
        baseline: Effective baseline for the muscle (lbs). Zero, negative or
            non-finite baselines are replaced by ``default_baseline``.
        default_baseline: Fallback capacity.

    Returns:
        Fatigue percentage clamped to [0, 100].
    """
    if not math.isfinite(baseline) or baseline <= 0:
        baseline = default_baseline
    if not math.isfinite(volume) or volume <= 0:
        return 0.0
    return max(0.0, min(MAX_FATIGUE_PERCENT, volume / baseline * 100.0))


def session_fatigue(
    muscle_volumes: Mapping[Muscle, float],
    baselines: Mapping[Muscle, MuscleBaseline],
    default_baseline: float = DEFAULT_BASELINE,
) -> dict[Muscle, float]:
    """Fatigue contribution of one session for every muscle it worked.

    Muscles with zero volume are left out, so they keep whatever recovery
    state earlier sessions gave them.
    """
    fatigue: dict[Muscle, float] = {}
    for muscle, volume in muscle_volumes.items():
        if not volume > 0:
            continue
        baseline = resolve_baseline(baselines.get(muscle), default_baseline)
        fatigue[muscle] = calculate_fatigue_percent(volume, baseline, default_baseline)
    return fatigue
