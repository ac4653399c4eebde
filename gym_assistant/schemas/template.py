"""Workout template schemas."""

from pydantic import BaseModel, Field

from gym_assistant.core.constants import DEFAULT_PLANNED_REPS, DEFAULT_PLANNED_SETS


class PlannedExercise(BaseModel):
    """One planned slot. ``is_superset`` groups it with the next slot for display only."""

    exercise_id: str
    sets: int = DEFAULT_PLANNED_SETS
    reps: str = DEFAULT_PLANNED_REPS  # Free-form range, e.g. "8-12"
    is_superset: bool = False


class WorkoutTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    exercises: list[PlannedExercise] = []


class WorkoutTemplateWrite(WorkoutTemplateBase):
    """Upsert payload: no id creates a new template."""

    id: str | None = None


class WorkoutTemplate(WorkoutTemplateBase):
    id: str
