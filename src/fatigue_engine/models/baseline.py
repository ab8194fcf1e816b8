"""Per-muscle capacity baselines and the "new baseline" event."""

from __future__ import annotations

import math
from dataclasses import dataclass

from fatigue_engine.models.enums import DEFAULT_BASELINE, Muscle


@dataclass(frozen=True)
class MuscleBaseline:
    """Capacity record for one muscle.

    ``system_learned_max`` only ever grows through observed session volume;
    an explicit reset is the one way to lower it. ``user_override`` wins
    whenever it is set.
    """

    system_learned_max: float = 0.0
    user_override: float | None = None

    @property
    def system_exceeds_override(self) -> bool:
        """True when the engine has observed more than the user's override."""
        return self.user_override is not None and self.system_learned_max > self.user_override


@dataclass(frozen=True)
class BaselineUpdate:
    """Emitted when a session volume raises a muscle's learned maximum."""

    muscle: Muscle
    old_max: float
    new_max: float
    session_volume: float

    @property
    def increase_percent(self) -> float:
        if self.old_max <= 0:
            return 100.0
        return (self.new_max - self.old_max) / self.old_max * 100.0

    @property
    def message(self) -> str:
        return f"New {self.muscle.value} max: {self.new_max:,.0f} lbs!"


def resolve_baseline(
    baseline: MuscleBaseline | None, default: float = DEFAULT_BASELINE
) -> float:
    """Effective baseline: override, else learned max if positive, else default."""
    if baseline is None:
        return default
    if baseline.user_override is not None:
        return baseline.user_override
    if baseline.system_learned_max > 0:
        return baseline.system_learned_max
    return default


def round_half_up(value: float) -> float:
    """Round to the nearest whole number with .5 going up (not banker's rounding)."""
    return float(math.floor(value + 0.5))


def format_baseline_updates(updates: tuple[BaselineUpdate, ...] | list[BaselineUpdate]) -> str:
    """One user-facing line summarising a session's baseline updates."""
    if not updates:
        return "No baseline updates needed. Great workout!"
    if len(updates) == 1:
        return updates[0].message

    names = [u.muscle.value for u in updates]
    listed = ", ".join(names[:3])
    remaining = len(names) - 3
    if remaining > 0:
        plural = "s" if remaining > 1 else ""
        return f"New maxes for {listed} and {remaining} more muscle{plural}!"
    return f"New maxes for {listed}!"
