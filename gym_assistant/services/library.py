"""Exercise catalog and favorites."""

from __future__ import annotations

import logging

from gym_assistant.core.constants import MAX_FAVORITE_EXERCISES
from gym_assistant.core.enums import Equipment, MuscleGroup, MutationStatus
from gym_assistant.core.exceptions import NotFoundError
from gym_assistant.core.ids import new_id
from gym_assistant.schemas.exercise import Exercise, ExerciseUpdate
from gym_assistant.services.domain_store import DomainStore

logger = logging.getLogger(__name__)


class ExerciseLibrary:
    """Catalog operations over the domain store.

    Archiving never touches the favorites list: favorites may point at
    archived ids and :meth:`favorite_exercises` filters them at read time.
    """

    def __init__(self, store: DomainStore) -> None:
        self.store = store

    def get(self, exercise_id: str) -> Exercise | None:
        """Lookup including archived exercises; ``None`` for dangling references."""
        return self.store.get_exercise(exercise_id)

    def require(self, exercise_id: str) -> Exercise:
        exercise = self.get(exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise", exercise_id)
        return exercise

    def active_exercises(self) -> list[Exercise]:
        return [ex for ex in self.store.exercises if not ex.is_archived]

    def archived_exercises(self) -> list[Exercise]:
        return [ex for ex in self.store.exercises if ex.is_archived]

    def is_selectable(self, exercise_id: str) -> bool:
        exercise = self.get(exercise_id)
        return exercise is not None and not exercise.is_archived

    def exercises_by_muscle_group(self) -> dict[MuscleGroup, list[Exercise]]:
        """Active exercises grouped for pickers, groups in first-seen order."""
        grouped: dict[MuscleGroup, list[Exercise]] = {}
        for ex in self.active_exercises():
            grouped.setdefault(ex.muscle_group, []).append(ex)
        return grouped

    def add_exercise(self, name: str, muscle_group: MuscleGroup, equipment: Equipment) -> Exercise:
        exercise = Exercise(
            id=new_id("ex_custom"),
            name=name,
            muscle_group=muscle_group,
            equipment=equipment,
            is_custom=True,
        )
        self.store.put_exercise(exercise)
        logger.info("Added custom exercise %s (%s)", exercise.id, exercise.name)
        return exercise

    def edit_exercise(self, exercise_id: str, changes: ExerciseUpdate) -> Exercise:
        """Merge the set fields of ``changes``; restricting edits to custom exercises is up to the caller."""
        exercise = self.require(exercise_id)
        updated = exercise.model_copy(update=changes.model_dump(exclude_unset=True, exclude_none=True))
        self.store.put_exercise(updated)
        return updated

    def archive(self, exercise_id: str) -> Exercise:
        return self._set_archived(exercise_id, True)

    def restore(self, exercise_id: str) -> Exercise:
        return self._set_archived(exercise_id, False)

    def _set_archived(self, exercise_id: str, archived: bool) -> Exercise:
        exercise = self.require(exercise_id)
        if exercise.is_archived == archived:
            return exercise
        updated = exercise.model_copy(update={"is_archived": archived})
        self.store.put_exercise(updated)
        logger.info("%s exercise %s", "Archived" if archived else "Restored", exercise_id)
        return updated

    # Favorites

    def favorite_ids(self) -> list[str]:
        return list(self.store.settings.favorite_exercise_ids)

    def favorite_exercises(self) -> list[Exercise]:
        """Favorites view: known, non-archived exercises in favorite order."""
        out: list[Exercise] = []
        for ex_id in self.store.settings.favorite_exercise_ids:
            exercise = self.get(ex_id)
            if exercise is not None and not exercise.is_archived:
                out.append(exercise)
        return out

    def toggle_favorite(self, exercise_id: str) -> MutationStatus:
        """Remove if present, else add when under the cap and not archived."""
        favorites = self.favorite_ids()
        if exercise_id in favorites:
            favorites.remove(exercise_id)
            self._save_favorites(favorites)
            return MutationStatus.ACCEPTED
        return self.add_favorite(exercise_id)

    def add_favorite(self, exercise_id: str) -> MutationStatus:
        favorites = self.favorite_ids()
        if exercise_id in favorites:
            return MutationStatus.ACCEPTED
        if len(favorites) >= MAX_FAVORITE_EXERCISES or not self.is_selectable(exercise_id):
            logger.debug("Favorite %s rejected (%d/%d)", exercise_id, len(favorites), MAX_FAVORITE_EXERCISES)
            return MutationStatus.REJECTED
        favorites.append(exercise_id)
        self._save_favorites(favorites)
        return MutationStatus.ACCEPTED

    def _save_favorites(self, favorites: list[str]) -> None:
        settings = self.store.settings.model_copy(update={"favorite_exercise_ids": favorites})
        self.store.update_settings(settings)

    def rename_user(self, name: str) -> None:
        self.store.update_settings(self.store.settings.model_copy(update={"name": name}))
