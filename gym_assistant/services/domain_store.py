"""Single mutable domain store for catalog, templates, history and settings.

All writes go through the mutation entry points below. After each committed
mutation the new snapshot of the touched collection is published to every
subscriber; ``DomainStore.load`` subscribes the persistent store so each
change is written through immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from gym_assistant.core.constants import (
    DEFAULT_FAVORITE_EXERCISE_IDS,
    DEFAULT_USER_NAME,
    EXERCISES_KEY,
    HISTORY_KEY,
    INITIAL_EXERCISES,
    SETTINGS_KEY,
    TEMPLATES_KEY,
)
from gym_assistant.schemas.exercise import Exercise
from gym_assistant.schemas.settings import UserSettings
from gym_assistant.schemas.template import WorkoutTemplate
from gym_assistant.schemas.workout import WorkoutSession
from gym_assistant.services.persistence import KeyValueStore

logger = logging.getLogger(__name__)

StoreListener = Callable[[str, Any], None]

_exercises_adapter = TypeAdapter(list[Exercise])
_templates_adapter = TypeAdapter(list[WorkoutTemplate])
_history_adapter = TypeAdapter(list[WorkoutSession])


def default_exercises() -> list[Exercise]:
    return [
        Exercise(id=ex_id, name=name, muscle_group=group, equipment=equipment)
        for ex_id, name, group, equipment in INITIAL_EXERCISES
    ]


def default_settings() -> UserSettings:
    return UserSettings(
        name=DEFAULT_USER_NAME,
        favorite_exercise_ids=list(DEFAULT_FAVORITE_EXERCISE_IDS),
    )


def _load_collection(backend: KeyValueStore, key: str, validate: Callable[[Any], Any], default: Any) -> Any:
    raw = backend.get(key, None)
    if raw is None:
        return default
    try:
        return validate(raw)
    except ValidationError:
        logger.exception("Stored %r does not match the expected shape; using default", key)
        return default


class DomainStore:
    def __init__(
        self,
        *,
        exercises: Sequence[Exercise] | None = None,
        templates: Sequence[WorkoutTemplate] | None = None,
        history: Sequence[WorkoutSession] | None = None,
        settings: UserSettings | None = None,
    ) -> None:
        self._exercises: list[Exercise] = list(exercises) if exercises is not None else default_exercises()
        self._templates: list[WorkoutTemplate] = list(templates or [])
        self._history: list[WorkoutSession] = list(history or [])
        self._settings: UserSettings = settings or default_settings()
        self._listeners: list[StoreListener] = []

    @classmethod
    def load(cls, backend: KeyValueStore) -> DomainStore:
        """Read all collections from ``backend`` and write every later change through to it."""
        store = cls(
            exercises=_load_collection(
                backend, EXERCISES_KEY, _exercises_adapter.validate_python, default_exercises()
            ),
            templates=_load_collection(backend, TEMPLATES_KEY, _templates_adapter.validate_python, []),
            history=_load_collection(backend, HISTORY_KEY, _history_adapter.validate_python, []),
            settings=_load_collection(
                backend, SETTINGS_KEY, UserSettings.model_validate, default_settings()
            ),
        )
        store.subscribe(backend.set)
        logger.info(
            "Loaded store: %d exercises, %d templates, %d sessions",
            len(store.exercises),
            len(store.templates),
            len(store.history),
        )
        return store

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register ``listener(key, snapshot)``; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self, key: str) -> Any:
        """JSON-ready copy of one collection."""
        if key == EXERCISES_KEY:
            return _exercises_adapter.dump_python(self._exercises, mode="json")
        if key == TEMPLATES_KEY:
            return _templates_adapter.dump_python(self._templates, mode="json")
        if key == HISTORY_KEY:
            return _history_adapter.dump_python(self._history, mode="json")
        if key == SETTINGS_KEY:
            return self._settings.model_dump(mode="json")
        raise KeyError(key)

    def _publish(self, key: str) -> None:
        snapshot = self.snapshot(key)
        for listener in list(self._listeners):
            listener(key, snapshot)

    def _commit(self, key: str, attr: str, value: Any) -> None:
        """Install ``value`` and publish it; the previous value is restored if a listener fails."""
        previous = getattr(self, attr)
        setattr(self, attr, value)
        try:
            self._publish(key)
        except Exception:
            setattr(self, attr, previous)
            logger.error("Write-through of %r failed; in-memory change rolled back", key)
            raise

    # Reads

    @property
    def exercises(self) -> tuple[Exercise, ...]:
        return tuple(self._exercises)

    @property
    def templates(self) -> tuple[WorkoutTemplate, ...]:
        return tuple(self._templates)

    @property
    def history(self) -> tuple[WorkoutSession, ...]:
        """Archived sessions in insertion order."""
        return tuple(self._history)

    @property
    def settings(self) -> UserSettings:
        return self._settings

    def get_exercise(self, exercise_id: str) -> Exercise | None:
        return next((ex for ex in self._exercises if ex.id == exercise_id), None)

    def get_template(self, template_id: str) -> WorkoutTemplate | None:
        return next((t for t in self._templates if t.id == template_id), None)

    def get_session(self, session_id: str) -> WorkoutSession | None:
        return next((s for s in self._history if s.id == session_id), None)

    # Mutations

    def put_exercise(self, exercise: Exercise) -> None:
        """Insert or replace by id (replacement keeps catalog position)."""
        self._commit(EXERCISES_KEY, "_exercises", _upsert(self._exercises, exercise))

    def put_template(self, template: WorkoutTemplate) -> None:
        self._commit(TEMPLATES_KEY, "_templates", _upsert(self._templates, template))

    def remove_template(self, template_id: str) -> bool:
        remaining = [t for t in self._templates if t.id != template_id]
        if len(remaining) == len(self._templates):
            return False
        self._commit(TEMPLATES_KEY, "_templates", remaining)
        return True

    def append_session(self, session: WorkoutSession) -> None:
        self._commit(HISTORY_KEY, "_history", [*self._history, session])

    def remove_session(self, session_id: str) -> bool:
        remaining = [s for s in self._history if s.id != session_id]
        if len(remaining) == len(self._history):
            return False
        self._commit(HISTORY_KEY, "_history", remaining)
        return True

    def update_settings(self, settings: UserSettings) -> None:
        self._commit(SETTINGS_KEY, "_settings", settings)


def _upsert(items: list[Any], item: Any) -> list[Any]:
    """Copy of ``items`` with ``item`` replacing the entry of the same id, or appended."""
    updated = list(items)
    for i, existing in enumerate(updated):
        if existing.id == item.id:
            updated[i] = item
            return updated
    updated.append(item)
    return updated
