"""Set, exercise log and archived session schemas."""

from pydantic import BaseModel, ConfigDict


class SetLog(BaseModel):
    reps: int = 0
    weight: float = 0.0
    is_dropset: bool = False

    @property
    def volume(self) -> float:
        return self.reps * self.weight


class ExerciseLog(BaseModel):
    """Sets performed for one exercise within a session, in append order."""

    exercise_id: str
    sets: list[SetLog] = []
    notes: str | None = None

    @property
    def volume(self) -> float:
        return sum(s.volume for s in self.sets)


class WorkoutSession(BaseModel):
    """A completed workout. Immutable once archived (only deletion is allowed)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    date: int  # epoch milliseconds
    duration: int  # seconds
    exercises: list[ExerciseLog]
    total_volume: float
