"""Live workout state machine.

A session is started from a template (fixed plan, forward-only cursor) or as
freestyle (exercises picked one at a time). ``planned`` and ``logs`` are kept
index-aligned: every change to the plan re-derives the logs by exercise id so
sets already entered for a surviving slot are preserved.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

from gym_assistant.core.constants import (
    DEFAULT_SET_REPS,
    DEFAULT_SET_WEIGHT,
    FREESTYLE_SESSION_NAME,
    PLACEHOLDER_EXERCISE_ID,
)
from gym_assistant.core.enums import SessionMode, SessionPhase, SetField
from gym_assistant.core.exceptions import (
    InvalidInputError,
    InvalidTransitionError,
    NoActiveSessionError,
    NotFoundError,
    SessionAlreadyActiveError,
    SessionClosedError,
    SessionStateError,
)
from gym_assistant.core.ids import new_id
from gym_assistant.schemas.exercise import Exercise
from gym_assistant.schemas.template import PlannedExercise
from gym_assistant.schemas.workout import ExerciseLog, SetLog, WorkoutSession
from gym_assistant.services.domain_store import DomainStore
from gym_assistant.services.library import ExerciseLibrary
from gym_assistant.services.templates import TemplateManager
from gym_assistant.services.timer import SessionTimer

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
TimerFactory = Callable[[], SessionTimer]


def now_ms() -> int:
    return int(time.time() * 1000)


def _parse_number(value: object) -> float | None:
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def coerce_reps(value: object) -> int:
    """Whole reps from user input; anything unparsable counts as 0."""
    number = _parse_number(value)
    return int(number) if number is not None else 0


def coerce_weight(value: object, previous: float) -> float:
    """Weight from user input; unparsable input keeps ``previous``."""
    number = _parse_number(value)
    return number if number is not None else previous


class ActiveSession:
    """Mutable state of the single in-progress workout.

    Handles are only created by :class:`SessionEngine`. Once finished or
    exited every mutating call raises :class:`SessionClosedError`.
    """

    def __init__(
        self,
        *,
        name: str,
        mode: SessionMode,
        plan: list[PlannedExercise],
        library: ExerciseLibrary,
        timer: SessionTimer,
        template_id: str | None = None,
    ) -> None:
        self.name = name
        self.mode = mode
        self.template_id = template_id
        self._library = library
        self._timer = timer
        self._planned: list[PlannedExercise] = list(plan)
        self._logs: list[ExerciseLog] = [ExerciseLog(exercise_id=slot.exercise_id) for slot in self._planned]
        self._cursor = 0
        self._closed_as: SessionPhase | None = None

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def planned(self) -> tuple[PlannedExercise, ...]:
        return tuple(self._planned)

    @property
    def logs(self) -> tuple[ExerciseLog, ...]:
        return tuple(self._logs)

    @property
    def timer(self) -> SessionTimer:
        return self._timer

    @property
    def elapsed_seconds(self) -> int:
        return self._timer.read_elapsed()

    @property
    def is_closed(self) -> bool:
        return self._closed_as is not None

    @property
    def current_slot(self) -> PlannedExercise | None:
        if self._cursor < len(self._planned):
            return self._planned[self._cursor]
        return None

    @property
    def current_log(self) -> ExerciseLog | None:
        if self._cursor < len(self._logs):
            return self._logs[self._cursor]
        return None

    @property
    def current_exercise(self) -> Exercise | None:
        """Catalog entry for the cursor slot; ``None`` for placeholders and dangling ids."""
        slot = self.current_slot
        if slot is None or slot.exercise_id == PLACEHOLDER_EXERCISE_ID:
            return None
        return self._library.get(slot.exercise_id)

    @property
    def is_last_exercise(self) -> bool:
        return self._cursor >= len(self._planned) - 1

    @property
    def phase(self) -> SessionPhase:
        if self._closed_as is not None:
            return self._closed_as
        if self.mode is SessionMode.FREESTYLE:
            slot = self.current_slot
            if slot is None or slot.exercise_id == PLACEHOLDER_EXERCISE_ID:
                return SessionPhase.SELECTING_EXERCISE
        return SessionPhase.LOGGING

    # Set logging

    def add_set(self, is_dropset: bool = False) -> SetLog:
        """Append a set to the cursor log, seeded from its previous set."""
        log = self._require_loggable()
        if log.sets:
            previous = log.sets[-1]
            reps, weight = previous.reps, previous.weight
        else:
            reps, weight = DEFAULT_SET_REPS, DEFAULT_SET_WEIGHT
        new_set = SetLog(reps=reps, weight=weight, is_dropset=is_dropset)
        log.sets.append(new_set)
        return new_set

    def edit_set(self, set_index: int, field: SetField | str, value: object) -> SetLog:
        log = self._require_loggable()
        try:
            field = SetField(field)
        except ValueError:
            raise InvalidInputError(f"Unknown set field {field!r}") from None
        if not 0 <= set_index < len(log.sets):
            raise NotFoundError("Set", str(set_index))
        target = log.sets[set_index]
        if field is SetField.REPS:
            target.reps = coerce_reps(value)
        else:
            target.weight = coerce_weight(value, target.weight)
        return target

    # Cursor and plan changes

    def advance(self) -> int:
        """Move to the next planned exercise (templated sessions, forward only)."""
        self._ensure_open()
        if self.mode is not SessionMode.TEMPLATED:
            raise InvalidTransitionError("Freestyle sessions pick exercises instead of advancing")
        if self.is_last_exercise:
            raise InvalidTransitionError("Already at the last planned exercise")
        self._cursor += 1
        return self._cursor

    def append_exercise(self, exercise_id: str) -> PlannedExercise:
        self._ensure_freestyle()
        self._require_selectable(exercise_id)
        was_empty = not self._planned
        slot = PlannedExercise(exercise_id=exercise_id)
        self._planned.append(slot)
        self._realign_logs()
        if was_empty:
            self._cursor = 0
        return slot

    def request_exercise_change(self) -> None:
        """Open a placeholder slot at the end and move onto it until an exercise is picked."""
        self._ensure_freestyle()
        if self.phase is SessionPhase.SELECTING_EXERCISE:
            return
        self._planned.append(PlannedExercise(exercise_id=PLACEHOLDER_EXERCISE_ID, sets=0, reps=""))
        self._realign_logs()
        self._cursor = len(self._planned) - 1

    def select_exercise(self, exercise_id: str) -> PlannedExercise:
        """Fill the slot under the cursor while selecting an exercise."""
        self._ensure_freestyle()
        if self.phase is not SessionPhase.SELECTING_EXERCISE:
            raise SessionStateError("No exercise selection is pending")
        self._require_selectable(exercise_id)
        slot = PlannedExercise(exercise_id=exercise_id)
        if self._cursor < len(self._planned):
            self._planned[self._cursor] = slot
        else:
            self._planned.append(slot)
            self._cursor = len(self._planned) - 1
        self._realign_logs()
        return slot

    def _realign_logs(self) -> None:
        pool: list[ExerciseLog | None] = list(self._logs)
        aligned: list[ExerciseLog] = []
        for slot in self._planned:
            match: ExerciseLog | None = None
            for i, log in enumerate(pool):
                if log is not None and log.exercise_id == slot.exercise_id:
                    match = log
                    pool[i] = None
                    break
            aligned.append(match if match is not None else ExerciseLog(exercise_id=slot.exercise_id))
        self._logs = aligned

    # Guards

    def _ensure_open(self) -> None:
        if self._closed_as is not None:
            raise SessionClosedError(f"Session already {self._closed_as.value}")

    def _ensure_freestyle(self) -> None:
        self._ensure_open()
        if self.mode is not SessionMode.FREESTYLE:
            raise InvalidTransitionError("The plan of a templated session is fixed")

    def _require_loggable(self) -> ExerciseLog:
        self._ensure_open()
        if self.phase is SessionPhase.SELECTING_EXERCISE:
            raise SessionStateError("Pick an exercise before logging sets")
        log = self.current_log
        if log is None:
            raise SessionStateError("No exercise at the current position")
        return log

    def _require_selectable(self, exercise_id: str) -> None:
        exercise = self._library.get(exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise", exercise_id)
        if exercise.is_archived:
            raise SessionStateError(f"Exercise '{exercise_id}' is archived")

    # Terminal transitions (driven by SessionEngine)

    def _close(self, phase: SessionPhase) -> None:
        self._timer.stop()
        self._closed_as = phase

    def _build_record(self, session_id: str, date_ms: int) -> WorkoutSession | None:
        performed = [
            log.model_copy(deep=True)
            for log in self._logs
            if log.sets and log.exercise_id != PLACEHOLDER_EXERCISE_ID
        ]
        if not performed:
            return None
        return WorkoutSession(
            id=session_id,
            name=self.name,
            date=date_ms,
            duration=self._timer.read_elapsed(),
            exercises=performed,
            total_volume=sum(log.volume for log in performed),
        )


class SessionEngine:
    """Owns at most one live workout and archives it on finish."""

    def __init__(
        self,
        store: DomainStore,
        library: ExerciseLibrary,
        templates: TemplateManager,
        *,
        timer_factory: TimerFactory = SessionTimer,
        clock: Clock = now_ms,
    ) -> None:
        self.store = store
        self.library = library
        self.templates = templates
        self._timer_factory = timer_factory
        self._clock = clock
        self._active: ActiveSession | None = None

    @property
    def active(self) -> ActiveSession | None:
        return self._active

    def require_active(self) -> ActiveSession:
        if self._active is None:
            raise NoActiveSessionError("No workout in progress")
        return self._active

    def start_templated(self, template_id: str) -> ActiveSession:
        self._ensure_idle()
        template = self.templates.get(template_id)
        return self._start(
            name=template.name,
            mode=SessionMode.TEMPLATED,
            plan=self.templates.plan_for(template_id),
            template_id=template.id,
        )

    def start_freestyle(self, name: str | None = None) -> ActiveSession:
        self._ensure_idle()
        return self._start(name=name or FREESTYLE_SESSION_NAME, mode=SessionMode.FREESTYLE, plan=[])

    def _ensure_idle(self) -> None:
        if self._active is not None:
            raise SessionAlreadyActiveError(f"Workout '{self._active.name}' is already in progress")

    def _start(
        self,
        *,
        name: str,
        mode: SessionMode,
        plan: list[PlannedExercise],
        template_id: str | None = None,
    ) -> ActiveSession:
        timer = self._timer_factory()
        session = ActiveSession(
            name=name,
            mode=mode,
            plan=plan,
            library=self.library,
            timer=timer,
            template_id=template_id,
        )
        timer.start()
        self._active = session
        logger.info("Started %s workout %r with %d planned exercises", mode.value, name, len(plan))
        return session

    def finish(self) -> WorkoutSession | None:
        """
        Archive the live workout; returns ``None`` (and writes nothing) if no set was logged.
        If the archive write fails the workout stays live so finishing can be retried.
        """
        session = self.require_active()
        record = session._build_record(new_id("session"), self._clock())
        if record is None:
            logger.info("Discarded workout %r: no sets logged", session.name)
        else:
            self.store.append_session(record)
            logger.info(
                "Archived workout %s: %d exercises, volume %.1f, %ds",
                record.id,
                len(record.exercises),
                record.total_volume,
                record.duration,
            )
        session._close(SessionPhase.FINISHED)
        self._active = None
        return record

    def exit(self) -> None:
        """Abandon the live workout without saving anything."""
        if self._active is None:
            return
        self._active._close(SessionPhase.EXITED)
        logger.info("Exited workout %r without saving", self._active.name)
        self._active = None
