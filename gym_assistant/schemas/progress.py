"""Derived read models: personal records, progress series and history queries."""

from pydantic import BaseModel


class PersonalRecord(BaseModel):
    weight: float
    reps: int


class ProgressPoint(BaseModel):
    date: int  # epoch milliseconds of the session
    max_weight: float
    total_volume: float


class SeriesPoint(BaseModel):
    """Chart input: one ``{date, value}`` pair."""

    date: int
    value: float


class ExerciseSummary(BaseModel):
    exercise_id: str
    personal_record: PersonalRecord | None = None
    total_sessions: int = 0
    total_sets: int = 0
    first_performed: int | None = None
    last_performed: int | None = None
