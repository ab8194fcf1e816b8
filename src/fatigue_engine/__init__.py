"""Muscle capacity, fatigue and forecasting engine for strength training."""

from fatigue_engine.baseline_store import BaselineStore
from fatigue_engine.config import EngineConfig
from fatigue_engine.engine import FatigueEngine
from fatigue_engine.exceptions import (
    ExerciseLibraryError,
    FatigueEngineError,
    RecordFormatError,
)
from fatigue_engine.library import ExerciseLibrary, load_exercise_library

__all__ = [
    "BaselineStore",
    "EngineConfig",
    "ExerciseLibrary",
    "ExerciseLibraryError",
    "FatigueEngine",
    "FatigueEngineError",
    "RecordFormatError",
    "load_exercise_library",
]
