"""Exercise definitions, equipment inventory and planned (not yet logged) work."""

from __future__ import annotations

from dataclasses import dataclass, field

from fatigue_engine.models.enums import (
    Difficulty,
    Equipment,
    ExerciseCategory,
    Muscle,
    Variation,
)


@dataclass(frozen=True)
class MuscleEngagement:
    """How strongly an exercise stresses one muscle (0-100, independent of others)."""

    muscle: Muscle
    percentage: float


@dataclass(frozen=True)
class Exercise:
    """A static exercise library entry. Never mutated by the engine."""

    id: str
    name: str
    category: ExerciseCategory
    equipment: tuple[Equipment, ...]
    difficulty: Difficulty
    engagements: tuple[MuscleEngagement, ...] = field(default_factory=tuple)
    variation: Variation = Variation.BOTH

    def engagement_for(self, muscle: Muscle) -> float:
        """Engagement percentage for ``muscle``, 0.0 when not engaged."""
        for engagement in self.engagements:
            if engagement.muscle == muscle:
                return engagement.percentage
        return 0.0


@dataclass(frozen=True)
class EquipmentItem:
    """One line of the user's equipment inventory."""

    type: Equipment
    quantity: int = 1


@dataclass(frozen=True)
class PlannedExercise:
    """An exercise plus a proposed sets × reps × weight, used for what-if forecasts."""

    exercise: Exercise
    sets: int
    reps: int
    weight: float
