"""Exception hierarchy for the fatigue engine.

Only the parsing boundary raises. Scoring, forecasting and recovery
functions clamp and default instead.
"""

from __future__ import annotations


class FatigueEngineError(Exception):
    """Base exception for all fatigue_engine errors."""


class ExerciseLibraryError(FatigueEngineError):
    """The exercise library document is missing, unreadable or malformed."""

    def __init__(self, message: str, exercise_id: str | None = None) -> None:
        super().__init__(message)
        self.exercise_id = exercise_id


class RecordFormatError(FatigueEngineError):
    """A baseline, equipment or state record could not be parsed."""
