"""Archived workout history."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from gym_assistant.api.deps import get_store
from gym_assistant.schemas.workout import WorkoutSession
from gym_assistant.services.domain_store import DomainStore
from gym_assistant.services.progress import filter_history

router = APIRouter()


@router.get("", response_model=list[WorkoutSession])
async def list_history(
    exercise_id: str | None = None,
    on_date: date | None = None,
    skip: int = 0,
    limit: int = 50,
    store: DomainStore = Depends(get_store),
):
    """Sessions, most recent first, optionally filtered by exercise and/or calendar day (server local time)."""
    sessions = filter_history(store.history, exercise_id=exercise_id, on_date=on_date)
    return sessions[skip : skip + limit]


@router.get("/{session_id}", response_model=WorkoutSession)
async def get_session(
    session_id: str,
    store: DomainStore = Depends(get_store),
):
    session = store.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    store: DomainStore = Depends(get_store),
):
    if not store.remove_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return None
