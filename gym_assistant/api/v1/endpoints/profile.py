"""User profile settings."""

from fastapi import APIRouter, Depends

from gym_assistant.api.deps import get_library, get_store
from gym_assistant.schemas.settings import UserSettings, UserSettingsUpdate
from gym_assistant.services.domain_store import DomainStore
from gym_assistant.services.library import ExerciseLibrary

router = APIRouter()


@router.get("", response_model=UserSettings)
async def get_user_settings(store: DomainStore = Depends(get_store)):
    return store.settings


@router.patch("", response_model=UserSettings)
async def update_user_settings(
    payload: UserSettingsUpdate,
    library: ExerciseLibrary = Depends(get_library),
):
    """Rename the user. Favorites are changed through /favorites."""
    library.rename_user(payload.name)
    return library.store.settings
