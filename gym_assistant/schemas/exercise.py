"""Exercise schemas."""

from pydantic import BaseModel, Field

from gym_assistant.core.enums import Equipment, MuscleGroup


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    muscle_group: MuscleGroup
    equipment: Equipment


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    muscle_group: MuscleGroup | None = None
    equipment: Equipment | None = None


class Exercise(ExerciseBase):
    """Catalog entry. Archived entries stay resolvable by id for history lookups."""

    id: str
    is_custom: bool = False
    is_archived: bool = False
