"""Shared enums for schemas, services and API."""

from enum import Enum


class MuscleGroup(str, Enum):
    """Primary muscle group an exercise is filed under."""

    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"


class Equipment(str, Enum):
    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    MACHINE = "machine"


class SessionMode(str, Enum):
    """How a live workout was started."""

    TEMPLATED = "templated"  # Fixed plan copied from a template
    FREESTYLE = "freestyle"  # Exercises picked as the session goes


class SessionPhase(str, Enum):
    LOGGING = "logging"
    SELECTING_EXERCISE = "selecting_exercise"  # Freestyle: waiting for an exercise pick
    FINISHED = "finished"
    EXITED = "exited"


class SetField(str, Enum):
    """Editable fields of a logged set."""

    REPS = "reps"
    WEIGHT = "weight"


class MutationStatus(str, Enum):
    """Outcome of a capped library/planner mutation."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ProgressMetric(str, Enum):
    MAX_WEIGHT = "max_weight"
    TOTAL_VOLUME = "total_volume"
