"""User profile and preference schemas."""

from pydantic import BaseModel, Field


class UserSettings(BaseModel):
    name: str
    favorite_exercise_ids: list[str] = []


class UserSettingsUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
