"""Live workout request/response schemas."""

from pydantic import BaseModel

from gym_assistant.core.enums import MutationStatus, SessionMode, SessionPhase, SetField
from gym_assistant.schemas.template import PlannedExercise, WorkoutTemplate
from gym_assistant.schemas.workout import ExerciseLog, WorkoutSession


class SessionStart(BaseModel):
    """Start a templated session (template_id) or a freestyle one (no template_id)."""

    template_id: str | None = None
    name: str | None = None


class SetCreate(BaseModel):
    is_dropset: bool = False


class SetUpdate(BaseModel):
    field: SetField
    value: str | float | int | None = None


class ExerciseSelect(BaseModel):
    exercise_id: str


class ActiveSessionRead(BaseModel):
    name: str
    mode: SessionMode
    phase: SessionPhase
    template_id: str | None = None
    cursor: int
    is_last_exercise: bool
    elapsed_seconds: int
    elapsed_display: str
    lap_seconds: int | None = None  # None until a lap is started
    lap_display: str | None = None
    planned: list[PlannedExercise]
    logs: list[ExerciseLog]


class FinishResult(BaseModel):
    """``session`` is null when nothing was logged and the workout was discarded."""

    saved: bool
    session: WorkoutSession | None = None


class TemplateSaveResult(BaseModel):
    status: MutationStatus
    template: WorkoutTemplate | None = None


class FavoriteToggleResult(BaseModel):
    status: MutationStatus
    favorite_exercise_ids: list[str]
