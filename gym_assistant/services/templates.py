"""Reusable workout templates."""

from __future__ import annotations

import logging

from gym_assistant.core.constants import MAX_TEMPLATES
from gym_assistant.core.enums import MutationStatus
from gym_assistant.core.exceptions import NotFoundError
from gym_assistant.core.ids import new_id
from gym_assistant.schemas.template import PlannedExercise, WorkoutTemplate, WorkoutTemplateWrite
from gym_assistant.services.domain_store import DomainStore
from gym_assistant.services.library import ExerciseLibrary

logger = logging.getLogger(__name__)


class TemplateManager:
    def __init__(self, store: DomainStore, library: ExerciseLibrary) -> None:
        self.store = store
        self.library = library

    def list_templates(self) -> list[WorkoutTemplate]:
        return list(self.store.templates)

    def get(self, template_id: str) -> WorkoutTemplate:
        template = self.store.get_template(template_id)
        if template is None:
            raise NotFoundError("Template", template_id)
        return template

    def can_create(self) -> bool:
        return len(self.store.templates) < MAX_TEMPLATES

    def save(self, payload: WorkoutTemplateWrite) -> tuple[MutationStatus, WorkoutTemplate | None]:
        """
        Upsert by id. Rejected without any change when creating past the
        template cap, or when a slot newly references an archived exercise.
        Unknown exercise ids raise :class:`NotFoundError`.
        """
        existing = self.store.get_template(payload.id) if payload.id is not None else None
        if existing is None and not self.can_create():
            logger.info("Template cap (%d) reached; save of %r rejected", MAX_TEMPLATES, payload.name)
            return MutationStatus.REJECTED, None
        kept_ids = {slot.exercise_id for slot in existing.exercises} if existing is not None else set()
        for slot in payload.exercises:
            exercise = self.library.require(slot.exercise_id)
            # Slots saved before an exercise was archived stay editable
            if exercise.is_archived and slot.exercise_id not in kept_ids:
                logger.info("Template %r rejected: exercise %s is archived", payload.name, slot.exercise_id)
                return MutationStatus.REJECTED, None
        template = WorkoutTemplate(
            id=payload.id or new_id("template"),
            name=payload.name,
            exercises=[slot.model_copy() for slot in payload.exercises],
        )
        self.store.put_template(template)
        return MutationStatus.ACCEPTED, template

    def delete(self, template_id: str) -> bool:
        """Remove a template. Archived sessions keep their own copy of the plan."""
        return self.store.remove_template(template_id)

    def plan_for(self, template_id: str) -> list[PlannedExercise]:
        """Detached copy of a template's ordered plan for a live session."""
        return [slot.model_copy() for slot in self.get(template_id).exercises]
