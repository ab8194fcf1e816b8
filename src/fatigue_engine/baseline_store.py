"""Baseline store: per-muscle capacity records and their three mutation paths.

Mutations happen only through ``observe_session_volume`` (automatic,
monotonic), ``set_override`` (user edit) and ``reset`` (explicit user
escape hatch). All three take the same lock, so concurrent session
completions can neither lose an update nor lower a learned maximum.
Records are frozen; each mutation swaps in a new MuscleBaseline.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import threading
from collections.abc import Mapping
from typing import Any, Iterator

from fatigue_engine.config import EngineConfig
from fatigue_engine.models.baseline import (
    BaselineUpdate,
    MuscleBaseline,
    resolve_baseline,
    round_half_up,
)
from fatigue_engine.models.enums import ALL_MUSCLES, Muscle

logger = logging.getLogger(__name__)


class BaselineStore(Mapping):
    """Thread-safe map of Muscle → MuscleBaseline.

    Reads behave like a read-only mapping over the current records, so the
    store can be handed straight to the forecasting functions.

    The default baseline and the override bounds come from one
    EngineConfig, shared with the FatigueEngine that owns the store.

    Usage:
        store = BaselineStore.from_records(persisted, config)
        update = store.observe_session_volume(Muscle.LATS, 4320.0)
        persisted = store.to_records()
    """

    def __init__(
        self,
        baselines: Mapping[Muscle, MuscleBaseline] | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self.config = config or EngineConfig()
        self._baselines: dict[Muscle, MuscleBaseline] = {m: MuscleBaseline() for m in ALL_MUSCLES}
        if baselines:
            self._baselines.update(baselines)

    @property
    def default_baseline(self) -> float:
        return self.config.default_baseline

    def configure(self, config: EngineConfig) -> None:
        """Adopt another configuration (default baseline and override bounds)."""
        with self._lock:
            self.config = config
        logger.debug("Baseline store default set to %.0f", config.default_baseline)

    def accepts_override(self, value: float) -> bool:
        return self.config.override_min <= value <= self.config.override_max

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, muscle: Muscle) -> MuscleBaseline:
        with self._lock:
            return self._baselines[muscle]

    def __iter__(self) -> Iterator[Muscle]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._baselines)

    def snapshot(self) -> dict[Muscle, MuscleBaseline]:
        """A point-in-time copy of every record."""
        with self._lock:
            return dict(self._baselines)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, muscle: Muscle) -> float:
        """Effective baseline: override, else learned max if > 0, else default."""
        with self._lock:
            record = self._baselines.get(muscle)
        return resolve_baseline(record, self.default_baseline)

    def resolve_all(self) -> dict[Muscle, float]:
        return {muscle: resolve_baseline(record, self.default_baseline)
                for muscle, record in self.snapshot().items()}

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def observe_session_volume(self, muscle: Muscle, volume: float) -> BaselineUpdate | None:
        """Raise the learned max when a session beats it.

        Returns:
            A BaselineUpdate when the stored maximum grew, otherwise None.
            The stored maximum never decreases through this path.
        """
        if not math.isfinite(volume) or volume <= 0:
            return None

        with self._lock:
            current = self._baselines.get(muscle, MuscleBaseline())
            old_max = current.system_learned_max
            if volume <= old_max:
                return None
            new_max = max(old_max, round_half_up(volume))
            if new_max <= old_max:
                return None
            self._baselines[muscle] = dataclasses.replace(current, system_learned_max=new_max)

        logger.info(
            "New learned max for %s: %.0f -> %.0f (session volume %.1f)",
            muscle.value, old_max, new_max, volume,
        )
        return BaselineUpdate(
            muscle=muscle, old_max=old_max, new_max=new_max, session_volume=volume
        )

    def set_override(self, muscle: Muscle, value: float | str | None) -> MuscleBaseline:
        """Set or clear the user's override.

        ``None`` clears it. Values outside [override_min, override_max] and
        input that does not parse as a number leave the record unchanged.

        Returns:
            The record as stored after the call.
        """
        if value is None:
            new_override: float | None = None
        else:
            parsed = _parse_number(value)
            if parsed is None or not self.accepts_override(parsed):
                logger.warning("Ignoring baseline override %r for %s", value, muscle.value)
                return self[muscle]
            new_override = parsed

        with self._lock:
            current = self._baselines.get(muscle, MuscleBaseline())
            updated = dataclasses.replace(current, user_override=new_override)
            self._baselines[muscle] = updated
        return updated

    def reset(self, muscle: Muscle) -> MuscleBaseline:
        """Explicit user reset: learned max back to the default, override cleared."""
        updated = MuscleBaseline(system_learned_max=self.default_baseline, user_override=None)
        with self._lock:
            self._baselines[muscle] = updated
        logger.debug("Reset baseline for %s", muscle.value)
        return updated

    def reset_all(self) -> None:
        for muscle in ALL_MUSCLES:
            self.reset(muscle)

    # ------------------------------------------------------------------
    # Persistence records
    # ------------------------------------------------------------------

    @classmethod
    def from_records(
        cls,
        records: Mapping[str, Mapping[str, Any]] | None,
        config: EngineConfig | None = None,
    ) -> "BaselineStore":
        """Build from ``{muscle name: {systemLearnedMax, userOverride}}``.

        Unknown muscle names are skipped and unusable numbers fall back to
        an empty record, matching the engine's no-raise policy. A stored
        override outside the configured bounds is dropped.
        """
        store = cls(config=config)
        baselines: dict[Muscle, MuscleBaseline] = {}
        for name, record in (records or {}).items():
            try:
                muscle = Muscle(name)
            except ValueError:
                logger.warning("Skipping baseline for unknown muscle %r", name)
                continue
            learned = _parse_number(record.get("systemLearnedMax"))
            override = _parse_number(record.get("userOverride"))
            if override is not None and not store.accepts_override(override):
                logger.warning("Dropping out-of-range override %r for %s", override, name)
                override = None
            baselines[muscle] = MuscleBaseline(
                system_learned_max=max(0.0, learned or 0.0),
                user_override=override,
            )
        with store._lock:
            store._baselines.update(baselines)
        return store

    def to_records(self) -> dict[str, dict[str, float | None]]:
        return {
            muscle.value: {
                "systemLearnedMax": record.system_learned_max,
                "userOverride": record.user_override,
            }
            for muscle, record in self.snapshot().items()
        }


def _parse_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
