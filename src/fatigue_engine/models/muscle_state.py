"""Derived, time-varying muscle state and per-muscle forecast records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from fatigue_engine.models.enums import Muscle


@dataclass(frozen=True)
class MuscleState:
    """Current fatigue of one muscle.

    Recomputed from logged sessions on every read, or accepted as-is from
    an external service via :meth:`from_record`. Never persisted as ground
    truth.
    """

    muscle: Muscle
    current_fatigue_percent: float = 0.0
    last_trained: datetime | None = None
    days_elapsed: float | None = None
    days_until_recovered: float = 0.0

    @property
    def recovery_percent(self) -> float:
        return 100.0 - self.current_fatigue_percent

    @property
    def is_recovered(self) -> bool:
        return self.current_fatigue_percent <= 0.0

    @classmethod
    def from_record(cls, muscle: Muscle, record: Mapping[str, Any]) -> "MuscleState":
        """Build from ``{currentFatiguePercent, lastTrained, daysElapsed, daysUntilRecovered}``.

        Missing or malformed values fall back to the fully-recovered defaults.
        """
        return cls(
            muscle=muscle,
            current_fatigue_percent=_clamp_percent(record.get("currentFatiguePercent")),
            last_trained=_parse_timestamp(record.get("lastTrained")),
            days_elapsed=_optional_float(record.get("daysElapsed")),
            days_until_recovered=max(0.0, _optional_float(record.get("daysUntilRecovered")) or 0.0),
        )


@dataclass(frozen=True)
class ForecastedMuscleState:
    """What-if result for one muscle. Ephemeral, never persisted."""

    muscle: Muscle
    current_fatigue_percent: float
    forecasted_fatigue_percent: float
    volume_added: float
    baseline: float

    @property
    def fatigue_delta(self) -> float:
        return self.forecasted_fatigue_percent - self.current_fatigue_percent


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _clamp_percent(value: Any) -> float:
    number = _optional_float(value)
    if number is None:
        return 0.0
    return max(0.0, min(100.0, number))


def _parse_timestamp(value: Any) -> datetime | None:
    """Accept a datetime, an ISO-8601 string or epoch milliseconds."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    number = _optional_float(value)
    if number is None or number <= 0:
        return None
    return datetime.fromtimestamp(number / 1000.0, tz=timezone.utc)
