"""Live workout endpoints (one active session at a time)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gym_assistant.api.deps import get_session_engine
from gym_assistant.schemas.session import (
    ActiveSessionRead,
    ExerciseSelect,
    FinishResult,
    SessionStart,
    SetCreate,
    SetUpdate,
)
from gym_assistant.schemas.template import PlannedExercise
from gym_assistant.schemas.workout import SetLog
from gym_assistant.services.session_engine import ActiveSession, SessionEngine
from gym_assistant.services.timer import format_duration

router = APIRouter()


def _read(session: ActiveSession) -> ActiveSessionRead:
    elapsed = session.elapsed_seconds
    lap = session.timer.read_lap()
    return ActiveSessionRead(
        name=session.name,
        mode=session.mode,
        phase=session.phase,
        template_id=session.template_id,
        cursor=session.cursor,
        is_last_exercise=session.is_last_exercise,
        elapsed_seconds=elapsed,
        elapsed_display=format_duration(elapsed),
        lap_seconds=lap,
        lap_display=format_duration(lap) if lap is not None else None,
        planned=list(session.planned),
        logs=list(session.logs),
    )


@router.post("/active", response_model=ActiveSessionRead, status_code=201)
async def start_workout(
    payload: SessionStart,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Start from a template (template_id) or freestyle. 409 if a workout is already running."""
    if payload.template_id:
        session = engine.start_templated(payload.template_id)
    else:
        session = engine.start_freestyle(payload.name)
    return _read(session)


@router.get("/active", response_model=ActiveSessionRead)
async def get_active_workout(engine: SessionEngine = Depends(get_session_engine)):
    return _read(engine.require_active())


@router.post("/active/sets", response_model=SetLog, status_code=201)
async def add_set(
    payload: SetCreate,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Log a set on the current exercise, copying the previous set's reps/weight."""
    return engine.require_active().add_set(payload.is_dropset)


@router.patch("/active/sets/{set_index}", response_model=SetLog)
async def edit_set(
    set_index: int,
    payload: SetUpdate,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Edit reps or weight of a set on the current exercise (bad input is coerced, never rejected)."""
    return engine.require_active().edit_set(set_index, payload.field, payload.value)


@router.post("/active/advance", response_model=ActiveSessionRead)
async def advance(engine: SessionEngine = Depends(get_session_engine)):
    session = engine.require_active()
    session.advance()
    return _read(session)


@router.post("/active/exercises", response_model=PlannedExercise, status_code=201)
async def append_exercise(
    payload: ExerciseSelect,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Freestyle: append an exercise to the plan."""
    return engine.require_active().append_exercise(payload.exercise_id)


@router.post("/active/change-exercise", response_model=ActiveSessionRead)
async def change_exercise(engine: SessionEngine = Depends(get_session_engine)):
    """Freestyle: move on to a new, not yet chosen exercise."""
    session = engine.require_active()
    session.request_exercise_change()
    return _read(session)


@router.post("/active/select", response_model=ActiveSessionRead)
async def select_exercise(
    payload: ExerciseSelect,
    engine: SessionEngine = Depends(get_session_engine),
):
    """Freestyle: choose the exercise for the pending slot."""
    session = engine.require_active()
    session.select_exercise(payload.exercise_id)
    return _read(session)


@router.post("/active/lap", response_model=ActiveSessionRead)
async def lap(engine: SessionEngine = Depends(get_session_engine)):
    session = engine.require_active()
    session.timer.lap()
    return _read(session)


@router.post("/active/finish", response_model=FinishResult)
async def finish_workout(engine: SessionEngine = Depends(get_session_engine)):
    """Archive the workout. Nothing is saved when no set was logged."""
    record = engine.finish()
    return FinishResult(saved=record is not None, session=record)


@router.delete("/active", status_code=204)
async def exit_workout(engine: SessionEngine = Depends(get_session_engine)):
    """Abandon the workout without saving."""
    engine.exit()
    return None
