"""API v1 router aggregation."""

from fastapi import APIRouter

from gym_assistant.api.v1.endpoints import (
    exercises,
    favorites,
    health,
    history,
    profile,
    progress,
    templates,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(profile.router, prefix="/settings", tags=["settings"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(history.router, prefix="/history", tags=["history"])
api_router.include_router(progress.router, prefix="/progress", tags=["progress"])
