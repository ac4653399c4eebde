"""Exercise catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from gym_assistant.api.deps import get_library
from gym_assistant.core.enums import MuscleGroup
from gym_assistant.schemas.exercise import Exercise, ExerciseCreate, ExerciseUpdate
from gym_assistant.services.library import ExerciseLibrary

router = APIRouter()


@router.get("", response_model=list[Exercise])
async def list_exercises(
    include_archived: bool = False,
    library: ExerciseLibrary = Depends(get_library),
):
    """List active exercises (archived ones only when asked)."""
    if include_archived:
        return list(library.store.exercises)
    return library.active_exercises()


@router.get("/archived", response_model=list[Exercise])
async def list_archived_exercises(library: ExerciseLibrary = Depends(get_library)):
    return library.archived_exercises()


@router.get("/by-muscle-group", response_model=dict[MuscleGroup, list[Exercise]])
async def exercises_by_muscle_group(library: ExerciseLibrary = Depends(get_library)):
    """Active exercises grouped by muscle group (picker view)."""
    return library.exercises_by_muscle_group()


@router.post("", response_model=Exercise, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    library: ExerciseLibrary = Depends(get_library),
):
    """Create a custom exercise."""
    return library.add_exercise(payload.name, payload.muscle_group, payload.equipment)


@router.get("/{exercise_id}", response_model=Exercise)
async def get_exercise(
    exercise_id: str,
    library: ExerciseLibrary = Depends(get_library),
):
    """Get a single exercise by id (archived exercises included)."""
    return library.require(exercise_id)


@router.patch("/{exercise_id}", response_model=Exercise)
async def update_exercise(
    exercise_id: str,
    payload: ExerciseUpdate,
    library: ExerciseLibrary = Depends(get_library),
):
    """Update a custom exercise (partial). Built-in exercises are read-only."""
    if not library.require(exercise_id).is_custom:
        raise HTTPException(status_code=403, detail="Only custom exercises can be edited")
    return library.edit_exercise(exercise_id, payload)


@router.post("/{exercise_id}/archive", response_model=Exercise)
async def archive_exercise(
    exercise_id: str,
    library: ExerciseLibrary = Depends(get_library),
):
    """Hide an exercise from pickers; history keeps resolving it."""
    return library.archive(exercise_id)


@router.post("/{exercise_id}/restore", response_model=Exercise)
async def restore_exercise(
    exercise_id: str,
    library: ExerciseLibrary = Depends(get_library),
):
    return library.restore(exercise_id)
