"""Engine configuration: tunable thresholds with environment-variable overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass

from fatigue_engine.models.enums import (
    BASELINE_OVERRIDE_MAX,
    BASELINE_OVERRIDE_MIN,
    DEFAULT_BASELINE,
    LIMITING_FATIGUE_THRESHOLD,
    MAX_FATIGUE_PENALTY,
    PRIMARY_ENGAGEMENT_THRESHOLD,
)


@dataclass(frozen=True)
class EngineConfig:
    """Values injected into the engine instead of being hard-coded per call site."""

    default_baseline: float = DEFAULT_BASELINE
    override_min: float = BASELINE_OVERRIDE_MIN
    override_max: float = BASELINE_OVERRIDE_MAX
    primary_engagement_threshold: float = PRIMARY_ENGAGEMENT_THRESHOLD
    limiting_fatigue_threshold: float = LIMITING_FATIGUE_THRESHOLD
    max_fatigue_penalty: float = MAX_FATIGUE_PENALTY

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Read overrides from ``FATIGUE_ENGINE_*`` environment variables."""
        return cls(
            default_baseline=_env_float("FATIGUE_ENGINE_DEFAULT_BASELINE", DEFAULT_BASELINE),
            override_min=_env_float("FATIGUE_ENGINE_OVERRIDE_MIN", BASELINE_OVERRIDE_MIN),
            override_max=_env_float("FATIGUE_ENGINE_OVERRIDE_MAX", BASELINE_OVERRIDE_MAX),
            primary_engagement_threshold=_env_float(
                "FATIGUE_ENGINE_PRIMARY_ENGAGEMENT", PRIMARY_ENGAGEMENT_THRESHOLD
            ),
            limiting_fatigue_threshold=_env_float(
                "FATIGUE_ENGINE_LIMITING_FATIGUE", LIMITING_FATIGUE_THRESHOLD
            ),
            max_fatigue_penalty=_env_float("FATIGUE_ENGINE_FATIGUE_PENALTY", MAX_FATIGUE_PENALTY),
        )


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    # A non-positive default baseline would reintroduce division by zero
    if name == "FATIGUE_ENGINE_DEFAULT_BASELINE" and value <= 0:
        return default
    return value
