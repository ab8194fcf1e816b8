"""Enumerations and tuning constants for the fatigue engine.

String-valued enums mirror the names used by the exercise library and the
persistence records, so ``Muscle("Lats")`` round-trips without a lookup table.
"""

from enum import Enum


class Muscle(str, Enum):
    """The 13 tracked muscle groups, in display order."""

    PECTORALIS = "Pectoralis"
    TRICEPS = "Triceps"
    DELTOIDS = "Deltoids"
    LATS = "Lats"
    BICEPS = "Biceps"
    RHOMBOIDS = "Rhomboids"
    TRAPEZIUS = "Trapezius"
    FOREARMS = "Forearms"
    QUADRICEPS = "Quadriceps"
    GLUTES = "Glutes"
    HAMSTRINGS = "Hamstrings"
    CALVES = "Calves"
    CORE = "Core"


class ExerciseCategory(str, Enum):
    """Training split an exercise (and a session) belongs to."""

    PUSH = "Push"
    PULL = "Pull"
    LEGS = "Legs"
    CORE = "Core"


class Equipment(str, Enum):
    BODYWEIGHT = "Bodyweight"
    DUMBBELLS = "Dumbbells"
    BARBELL = "Barbell"
    KETTLEBELL = "Kettlebell"
    PULL_UP_BAR = "Pull-up Bar"
    TRX = "TRX"
    RESISTANCE_BANDS = "Resistance Bands"


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Variation(str, Enum):
    """A/B workout variation. Exercises may belong to both."""

    A = "A"
    B = "B"
    BOTH = "Both"


class RecommendationStatus(str, Enum):
    """Whole-exercise recommendation tiers, best first."""

    EXCELLENT = "excellent"
    GOOD = "good"
    SUBOPTIMAL = "suboptimal"
    NOT_RECOMMENDED = "not-recommended"


class ReadinessStatus(str, Enum):
    """Coarse training readiness derived from current fatigue."""

    READY = "ready"
    CAUTION = "caution"
    DONT_TRAIN = "dont_train"


class ProgressionMethod(str, Enum):
    WEIGHT = "weight"
    REPS = "reps"


ALL_MUSCLES: tuple[Muscle, ...] = tuple(Muscle)

# ---------------------------------------------------------------------------
# Baseline constants
# ---------------------------------------------------------------------------
# Starting capacity (lbs of session volume) for a muscle with no history.
# Also the value an explicit reset restores.
DEFAULT_BASELINE = 10000.0

# Accepted range for a user-entered baseline override (lbs)
BASELINE_OVERRIDE_MIN = 100.0
BASELINE_OVERRIDE_MAX = 1_000_000.0

# ---------------------------------------------------------------------------
# Fatigue / recovery constants
# ---------------------------------------------------------------------------
MAX_FATIGUE_PERCENT = 100.0

# Recovery days scale linearly from 1 (0% fatigue) to 7 (100% fatigue)
MIN_RECOVERY_DAYS = 1.0
FATIGUE_RECOVERY_DAYS_SPAN = 6.0

# Elapsed time is rescaled onto this many units before the stepped lookup
RECOVERY_CURVE_UNITS = 5.0

# (scaled-days threshold, recovered %) checked top-down
RECOVERY_CURVE_STEPS: tuple[tuple[float, float], ...] = (
    (5.0, 100.0),
    (4.0, 98.0),
    (3.0, 90.0),
    (2.0, 75.0),
    (1.0, 50.0),
    (0.0, 10.0),
)

READY_TO_TRAIN_THRESHOLD = 40.0  # <40% fatigue = ready
CAUTION_THRESHOLD = 80.0  # 40-79% = caution, >=80% = don't train

# Hours after training at which recovery timelines are sampled
RECOVERY_TIMELINE_HOURS: tuple[int, ...] = (24, 48, 72)

# ---------------------------------------------------------------------------
# Efficiency scoring
# ---------------------------------------------------------------------------
EFFICIENT_SCORE_THRESHOLD = 5.0  # score > 5.0 → Efficient
LIMITED_SCORE_THRESHOLD = 2.0  # 2.0 <= score <= 5.0 → Limited

# ---------------------------------------------------------------------------
# Recommendation scoring
# ---------------------------------------------------------------------------
PRIMARY_ENGAGEMENT_THRESHOLD = 50.0  # engagement >= 50% → primary mover
LIMITING_FATIGUE_THRESHOLD = 66.0  # fatigue > 66% → limiting factor
MAX_FATIGUE_PENALTY = 0.5  # opportunity = freshness - max_fatigue × 0.5
EXCELLENT_FRESHNESS = 90.0
GOOD_FRESHNESS = 70.0
SUBOPTIMAL_FRESHNESS = 50.0

# ---------------------------------------------------------------------------
# Forecast display / session summary
# ---------------------------------------------------------------------------
IMPACT_MIN_ENGAGEMENT = 5.0  # engagements below 5% are not listed
UNDER_STIMULATED_FATIGUE = 30.0  # worked but under 30% fatigue
MAX_SUGGESTIONS_PER_MUSCLE = 3

# ---------------------------------------------------------------------------
# Progressive overload
# ---------------------------------------------------------------------------
PROGRESSION_INCREASE_PCT = 0.03  # 3% per session
WEIGHT_ROUNDING_INCREMENT = 0.5  # lbs
