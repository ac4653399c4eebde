"""Per-exercise progress: personal record, series and chart data."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gym_assistant.api.deps import get_library
from gym_assistant.core.enums import ProgressMetric
from gym_assistant.schemas.progress import ExerciseSummary, PersonalRecord, ProgressPoint, SeriesPoint
from gym_assistant.services.library import ExerciseLibrary
from gym_assistant.services.progress import (
    exercise_summary,
    personal_record,
    progress_series,
    series_values,
)

router = APIRouter()


@router.get("/{exercise_id}/pr", response_model=PersonalRecord | None)
async def get_personal_record(
    exercise_id: str,
    library: ExerciseLibrary = Depends(get_library),
):
    """Heaviest set ever logged (null when the exercise was never performed)."""
    return personal_record(library.store.history, exercise_id)


@router.get("/{exercise_id}/series", response_model=list[ProgressPoint])
async def get_progress_series(
    exercise_id: str,
    library: ExerciseLibrary = Depends(get_library),
):
    """One point per session, oldest first."""
    return progress_series(library.store.history, exercise_id)


@router.get("/{exercise_id}/chart", response_model=list[SeriesPoint])
async def get_chart_series(
    exercise_id: str,
    metric: ProgressMetric = ProgressMetric.MAX_WEIGHT,
    library: ExerciseLibrary = Depends(get_library),
):
    """``{date, value}`` pairs for one metric; minimum point count is the chart's concern."""
    return series_values(progress_series(library.store.history, exercise_id), metric)


@router.get("/{exercise_id}/summary", response_model=ExerciseSummary)
async def get_exercise_summary(
    exercise_id: str,
    library: ExerciseLibrary = Depends(get_library),
):
    """PR and performance counts. 404 only for ids unknown to the catalog."""
    library.require(exercise_id)
    return exercise_summary(library.store.history, exercise_id)
