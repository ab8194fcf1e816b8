"""FatigueEngine: the facade that wires the library, baselines and models together."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Iterable, Mapping

from fatigue_engine.baseline_store import BaselineStore
from fatigue_engine.config import EngineConfig
from fatigue_engine.library import ExerciseLibrary
from fatigue_engine.math.fatigue import calculate_fatigue_percent, session_fatigue
from fatigue_engine.math.forecast import forecast_fatigue
from fatigue_engine.math.recovery import (
    current_fatigue_map,
    derive_muscle_states,
    recovery_days,
)
from fatigue_engine.math.volume import (
    CalibrationMap,
    exercise_volume,
    session_muscle_volumes,
)
from fatigue_engine.models.baseline import BaselineUpdate
from fatigue_engine.models.enums import (
    MAX_SUGGESTIONS_PER_MUSCLE,
    UNDER_STIMULATED_FATIGUE,
    ExerciseCategory,
    Muscle,
)
from fatigue_engine.models.exercise import EquipmentItem, PlannedExercise
from fatigue_engine.models.muscle_state import ForecastedMuscleState, MuscleState
from fatigue_engine.models.recommendation import EfficiencyResult, ExerciseRecommendation
from fatigue_engine.models.session import (
    MuscleWorked,
    SessionCompletion,
    SessionSummary,
    UnderStimulatedMuscle,
    WorkoutSession,
)
from fatigue_engine.scoring.efficiency import rank_exercises_for_target
from fatigue_engine.scoring.recommendation import calculate_recommendations

logger = logging.getLogger(__name__)


class FatigueEngine:
    """Completes sessions, derives muscle state and answers planning queries.

    Usage:
        engine = FatigueEngine(library, BaselineStore.from_records(records))
        completion = engine.complete_session(session)
        states = engine.muscle_states(history + [completion.session], now)
        forecast = engine.forecast(planned, engine.fatigue_map(states))
    """

    def __init__(
        self,
        library: ExerciseLibrary,
        baselines: BaselineStore | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        if config is None:
            config = baselines.config if baselines is not None else EngineConfig()
        self.config = config
        self.library = library
        if baselines is None:
            baselines = BaselineStore(config=config)
        elif baselines.config != config:
            baselines.configure(config)
        self.baselines = baselines

    # ------------------------------------------------------------------
    # Session completion
    # ------------------------------------------------------------------

    def complete_session(
        self,
        session: WorkoutSession,
        calibrations: CalibrationMap | None = None,
    ) -> SessionCompletion:
        """Record a finished workout.

        Fatigue is measured against the baselines as they stood before the
        session; learned maxima are raised afterwards.

        Args:
            session: The logged workout. Not modified.
            calibrations: Optional per-user engagement overrides.

        Returns:
            SessionCompletion holding a new session with its
            ``muscle_fatigue_history``, the per-muscle volumes and any
            baseline updates.
        """
        volumes = session_muscle_volumes(session.logged_exercises, self.library, calibrations)

        fatigue = session_fatigue(volumes, self.baselines.snapshot(), self.config.default_baseline)

        updates: list[BaselineUpdate] = []
        for muscle, volume in volumes.items():
            update = self.baselines.observe_session_volume(muscle, volume)
            if update is not None:
                updates.append(update)

        completed = dataclasses.replace(session, muscle_fatigue_history=fatigue)
        logger.info(
            "Completed session %s: %d muscles worked, %d new baselines",
            session.id, len(fatigue), len(updates),
        )
        return SessionCompletion(
            session=completed,
            muscle_volumes=volumes,
            baseline_updates=tuple(updates),
        )

    def summarize_session(
        self,
        session: WorkoutSession,
        calibrations: CalibrationMap | None = None,
    ) -> SessionSummary:
        """Post-workout summary: muscles worked and under-stimulated muscles.

        Reads baselines without changing them, so it can be shown before or
        after :meth:`complete_session`. Pass the same calibrations given to
        :meth:`complete_session` so both report the same fatigue.
        """
        volumes = session_muscle_volumes(session.logged_exercises, self.library, calibrations)
        worked: list[MuscleWorked] = []
        for muscle, volume in volumes.items():
            if volume <= 0:
                continue
            fatigue = calculate_fatigue_percent(
                volume, self.baselines.resolve(muscle), self.config.default_baseline
            )
            worked.append(
                MuscleWorked(
                    muscle=muscle,
                    fatigue_percent=fatigue,
                    recovery_days=recovery_days(fatigue),
                    volume=volume,
                )
            )
        worked.sort(key=lambda m: m.fatigue_percent, reverse=True)

        under: list[UnderStimulatedMuscle] = []
        for item in worked:
            if not 0 < item.fatigue_percent < UNDER_STIMULATED_FATIGUE:
                continue
            suggestions = tuple(
                e for e in self.library.by_category(session.category)
                if e.engagement_for(item.muscle) > 0
            )[:MAX_SUGGESTIONS_PER_MUSCLE]
            if suggestions:
                under.append(
                    UnderStimulatedMuscle(
                        muscle=item.muscle,
                        fatigue_percent=item.fatigue_percent,
                        suggested_exercises=suggestions,
                    )
                )

        total = sum(exercise_volume(logged.sets) for logged in session.logged_exercises)
        return SessionSummary(
            session_id=session.id,
            total_volume=total,
            duration_s=session.duration_s,
            exercises_completed=len(session.logged_exercises),
            muscles_worked=tuple(worked),
            under_stimulated=tuple(under),
        )

    # ------------------------------------------------------------------
    # Read-side queries
    # ------------------------------------------------------------------

    def muscle_states(
        self, sessions: Iterable[WorkoutSession], now: datetime
    ) -> dict[Muscle, MuscleState]:
        return derive_muscle_states(sessions, now)

    @staticmethod
    def fatigue_map(states: Mapping[Muscle, MuscleState]) -> dict[Muscle, float]:
        return current_fatigue_map(states)

    def forecast(
        self,
        planned: Iterable[PlannedExercise],
        current_fatigue: Mapping[Muscle, float] | None = None,
    ) -> dict[Muscle, ForecastedMuscleState]:
        return forecast_fatigue(
            planned, self.baselines.snapshot(), current_fatigue, self.config.default_baseline
        )

    def rank_for_target(
        self, target: Muscle, fatigue: Mapping[Muscle, float]
    ) -> list[EfficiencyResult]:
        return rank_exercises_for_target(target, self.library.exercises, fatigue)

    def recommend(
        self,
        fatigue: Mapping[Muscle, float],
        equipment: Iterable[EquipmentItem],
        category: ExerciseCategory | None = None,
        calibrations: CalibrationMap | None = None,
    ) -> list[ExerciseRecommendation]:
        return calculate_recommendations(
            self.library.exercises, fatigue, equipment, category, calibrations, self.config
        )
