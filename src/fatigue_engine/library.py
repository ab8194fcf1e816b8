"""Exercise library and record parsing at the collaborator boundary.

The library is loaded once and is read-only afterwards. Parsing is the one
place the engine raises: a malformed library document is a deployment
problem, not something to paper over at scoring time.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable, Iterator

from fatigue_engine.exceptions import ExerciseLibraryError, RecordFormatError
from fatigue_engine.models.enums import (
    Difficulty,
    Equipment,
    ExerciseCategory,
    Muscle,
    Variation,
)
from fatigue_engine.models.exercise import EquipmentItem, Exercise, MuscleEngagement
from fatigue_engine.models.muscle_state import MuscleState

logger = logging.getLogger(__name__)


class ExerciseLibrary(Mapping):
    """Immutable id → Exercise lookup that preserves definition order."""

    def __init__(self, exercises: Iterable[Exercise]) -> None:
        self._exercises: dict[str, Exercise] = {}
        for exercise in exercises:
            if exercise.id in self._exercises:
                raise ExerciseLibraryError(
                    f"Duplicate exercise id {exercise.id!r}", exercise_id=exercise.id
                )
            self._exercises[exercise.id] = exercise

    def __getitem__(self, exercise_id: str) -> Exercise:
        return self._exercises[exercise_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._exercises)

    def __len__(self) -> int:
        return len(self._exercises)

    @property
    def exercises(self) -> tuple[Exercise, ...]:
        return tuple(self._exercises.values())

    def by_category(self, category: ExerciseCategory) -> tuple[Exercise, ...]:
        return tuple(e for e in self._exercises.values() if e.category == category)

    def engaging(self, muscle: Muscle) -> tuple[Exercise, ...]:
        return tuple(e for e in self._exercises.values() if e.engagement_for(muscle) > 0)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "ExerciseLibrary":
        return cls(parse_exercise(record) for record in records)


def load_exercise_library(path: Path | str) -> ExerciseLibrary:
    """Load a library from JSON: a list of exercises or ``{"exercises": [...]}``.

    Raises:
        ExerciseLibraryError: If the file is missing, not JSON, or malformed.
    """
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ExerciseLibraryError(f"Cannot read exercise library {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ExerciseLibraryError(f"Exercise library {path} is not valid JSON: {exc}") from exc

    if isinstance(document, Mapping):
        document = document.get("exercises")
    if not isinstance(document, list):
        raise ExerciseLibraryError(
            f"Exercise library {path} must be a list or an object with an 'exercises' list"
        )

    library = ExerciseLibrary.from_records(document)
    logger.info("Loaded %d exercises from %s", len(library), path)
    return library


def parse_exercise(record: Mapping[str, Any]) -> Exercise:
    """Parse one exercise record (camelCase keys, as stored by the app)."""
    exercise_id = record.get("id")
    if not exercise_id:
        raise ExerciseLibraryError("Exercise record has no id")
    try:
        equipment_raw = record.get("equipment", ())
        if isinstance(equipment_raw, str):
            equipment_raw = [equipment_raw]
        engagements = tuple(
            _parse_engagement(e, exercise_id) for e in record.get("muscleEngagements", ())
        )
        return Exercise(
            id=str(exercise_id),
            name=str(record.get("name", exercise_id)),
            category=ExerciseCategory(record["category"]),
            equipment=tuple(Equipment(e) for e in equipment_raw),
            difficulty=Difficulty(record.get("difficulty", Difficulty.BEGINNER.value)),
            engagements=engagements,
            variation=Variation(record.get("variation", Variation.BOTH.value)),
        )
    except ExerciseLibraryError:
        raise
    except (KeyError, ValueError, TypeError) as exc:
        raise ExerciseLibraryError(
            f"Malformed exercise {exercise_id!r}: {exc}", exercise_id=str(exercise_id)
        ) from exc


def _parse_engagement(record: Mapping[str, Any], exercise_id: str) -> MuscleEngagement:
    percentage = float(record["percentage"])
    if not 0.0 <= percentage <= 100.0:
        raise ExerciseLibraryError(
            f"Engagement {percentage} for {record['muscle']} is outside 0-100",
            exercise_id=exercise_id,
        )
    return MuscleEngagement(muscle=Muscle(record["muscle"]), percentage=percentage)


def parse_equipment(records: Iterable[Mapping[str, Any]]) -> tuple[EquipmentItem, ...]:
    """Parse ``[{type, quantity}]``; ``name`` is accepted for ``type``.

    Raises:
        RecordFormatError: On an unknown equipment type or a quantity that
            is not a whole number.
    """
    items: list[EquipmentItem] = []
    for record in records:
        raw_type = record.get("type") or record.get("name")
        try:
            equipment = Equipment(raw_type)
        except ValueError as exc:
            raise RecordFormatError(f"Unknown equipment type {raw_type!r}") from exc
        quantity = record.get("quantity")
        try:
            count = 1 if quantity is None else int(quantity)
        except (TypeError, ValueError) as exc:
            raise RecordFormatError(f"Invalid quantity {quantity!r} for {raw_type}") from exc
        items.append(EquipmentItem(type=equipment, quantity=count))
    return tuple(items)


def parse_muscle_states(records: Mapping[str, Mapping[str, Any]]) -> dict[Muscle, MuscleState]:
    """Accept externally computed state for any subset of muscles.

    Muscles absent from ``records`` are reported fully recovered.
    """
    states = {muscle: MuscleState(muscle=muscle) for muscle in Muscle}
    for name, record in records.items():
        try:
            muscle = Muscle(name)
        except ValueError:
            logger.warning("Skipping state for unknown muscle %r", name)
            continue
        states[muscle] = MuscleState.from_record(muscle, record)
    return states
