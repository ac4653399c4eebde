"""Favorite exercises (home screen shortcuts, at most four)."""

from fastapi import APIRouter, Depends

from gym_assistant.api.deps import get_library
from gym_assistant.schemas.exercise import Exercise
from gym_assistant.schemas.session import FavoriteToggleResult
from gym_assistant.services.library import ExerciseLibrary

router = APIRouter()


@router.get("", response_model=list[Exercise])
async def list_favorites(library: ExerciseLibrary = Depends(get_library)):
    """Favorites view: archived and unknown ids are skipped."""
    return library.favorite_exercises()


@router.post("/{exercise_id}/toggle", response_model=FavoriteToggleResult)
async def toggle_favorite(
    exercise_id: str,
    library: ExerciseLibrary = Depends(get_library),
):
    """Add or remove a favorite. A full list or an archived exercise yields status=rejected."""
    status = library.toggle_favorite(exercise_id)
    return FavoriteToggleResult(status=status, favorite_exercise_ids=library.favorite_ids())
