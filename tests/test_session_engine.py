from __future__ import annotations

import pytest

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
from gym_assistant.schemas.template import PlannedExercise, WorkoutTemplateWrite
from gym_assistant.services.domain_store import DomainStore
from gym_assistant.services.library import ExerciseLibrary
from gym_assistant.services.session_engine import SessionEngine, coerce_reps, coerce_weight
from gym_assistant.services.templates import TemplateManager
from gym_assistant.services.timer import SessionTimer, format_duration

from helpers import StepClock


@pytest.fixture
def three_exercise_template(templates: TemplateManager) -> str:
    _, template = templates.save(
        WorkoutTemplateWrite(
            name="Full Body",
            exercises=[
                PlannedExercise(exercise_id="ex2"),
                PlannedExercise(exercise_id="ex1", is_superset=True),
                PlannedExercise(exercise_id="ex7"),
            ],
        )
    )
    assert template is not None
    return template.id


def test_templated_start_aligns_logs_with_plan(engine: SessionEngine, three_exercise_template: str) -> None:
    session = engine.start_templated(three_exercise_template)

    assert session.mode is SessionMode.TEMPLATED
    assert session.name == "Full Body"
    assert session.cursor == 0
    assert [log.exercise_id for log in session.logs] == ["ex2", "ex1", "ex7"]
    assert all(log.sets == [] for log in session.logs)
    assert session.phase is SessionPhase.LOGGING
    assert session.current_exercise is not None and session.current_exercise.id == "ex2"


def test_add_set_uses_defaults_then_copies_previous(engine: SessionEngine, three_exercise_template: str) -> None:
    session = engine.start_templated(three_exercise_template)

    first = session.add_set()
    assert (first.reps, first.weight, first.is_dropset) == (8, 20.0, False)

    session.edit_set(0, SetField.WEIGHT, "62.5")
    session.edit_set(0, "reps", 5)
    drop = session.add_set(is_dropset=True)

    assert (drop.reps, drop.weight, drop.is_dropset) == (5, 62.5, True)
    assert len(session.current_log.sets) == 2


def test_edit_set_coerces_bad_input(engine: SessionEngine, three_exercise_template: str) -> None:
    session = engine.start_templated(three_exercise_template)
    session.add_set()

    edited = session.edit_set(0, SetField.REPS, "abc")
    assert edited.reps == 0

    edited = session.edit_set(0, SetField.WEIGHT, "heavy")
    assert edited.weight == 20.0

    edited = session.edit_set(0, SetField.WEIGHT, float("nan"))
    assert edited.weight == 20.0

    with pytest.raises(NotFoundError):
        session.edit_set(3, SetField.REPS, 1)
    with pytest.raises(InvalidInputError):
        session.edit_set(0, "tempo", 1)


def test_coercion_helpers() -> None:
    assert coerce_reps("12") == 12
    assert coerce_reps(" 7.9 ") == 7
    assert coerce_reps(None) == 0
    assert coerce_weight("", 40.0) == 40.0
    assert coerce_weight("0", 40.0) == 0.0


def test_advance_is_forward_only_and_bounded(engine: SessionEngine, three_exercise_template: str) -> None:
    session = engine.start_templated(three_exercise_template)

    assert session.advance() == 1
    assert session.advance() == 2
    assert session.is_last_exercise
    with pytest.raises(InvalidTransitionError):
        session.advance()


def test_templated_plan_is_fixed(engine: SessionEngine, three_exercise_template: str) -> None:
    session = engine.start_templated(three_exercise_template)

    with pytest.raises(InvalidTransitionError):
        session.append_exercise("ex5")
    with pytest.raises(InvalidTransitionError):
        session.request_exercise_change()


def test_skipped_exercises_are_dropped_on_finish(
    engine: SessionEngine, store: DomainStore, three_exercise_template: str
) -> None:
    session = engine.start_templated(three_exercise_template)
    session.add_set()
    session.edit_set(0, SetField.WEIGHT, 100)
    session.add_set()
    session.advance()
    session.advance()
    session.timer.tick()
    session.timer.tick()

    record = engine.finish()

    assert record is not None
    assert [log.exercise_id for log in record.exercises] == ["ex2"]
    assert record.total_volume == 8 * 100 + 8 * 100
    assert record.duration == 2
    assert store.history == (record,)
    assert engine.active is None


def test_total_volume_matches_sum_of_sets(engine: SessionEngine, three_exercise_template: str) -> None:
    session = engine.start_templated(three_exercise_template)
    for reps, weight in [(10, 60), (8, 70)]:
        session.add_set()
        session.edit_set(len(session.current_log.sets) - 1, SetField.REPS, reps)
        session.edit_set(len(session.current_log.sets) - 1, SetField.WEIGHT, weight)
    session.advance()
    session.add_set(is_dropset=True)

    record = engine.finish()

    assert record is not None
    expected = sum(s.reps * s.weight for log in record.exercises for s in log.sets)
    assert record.total_volume == expected == 10 * 60 + 8 * 70 + 8 * 20


def test_finish_without_sets_archives_nothing(
    engine: SessionEngine, store: DomainStore, three_exercise_template: str
) -> None:
    session = engine.start_templated(three_exercise_template)
    session.advance()

    assert engine.finish() is None
    assert store.history == ()
    assert session.phase is SessionPhase.FINISHED
    assert not session.timer.is_running


def test_only_one_live_session(engine: SessionEngine, three_exercise_template: str) -> None:
    engine.start_freestyle()

    with pytest.raises(SessionAlreadyActiveError):
        engine.start_templated(three_exercise_template)
    with pytest.raises(SessionAlreadyActiveError):
        engine.start_freestyle()


def test_unknown_template_cannot_start(engine: SessionEngine) -> None:
    with pytest.raises(NotFoundError):
        engine.start_templated("template_missing")
    assert engine.active is None


def test_exit_discards_and_closes_handle(engine: SessionEngine, store: DomainStore, three_exercise_template: str) -> None:
    session = engine.start_templated(three_exercise_template)
    session.add_set()

    engine.exit()

    assert store.history == ()
    assert engine.active is None
    assert session.phase is SessionPhase.EXITED
    with pytest.raises(SessionClosedError):
        session.add_set()
    with pytest.raises(NoActiveSessionError):
        engine.finish()
    engine.exit()


def test_new_session_after_terminal_transition(engine: SessionEngine, three_exercise_template: str) -> None:
    engine.start_templated(three_exercise_template)
    engine.exit()

    session = engine.start_freestyle("Evening")
    assert session.name == "Evening"


def test_freestyle_flow(engine: SessionEngine, library: ExerciseLibrary) -> None:
    session = engine.start_freestyle()

    assert session.mode is SessionMode.FREESTYLE
    assert session.phase is SessionPhase.SELECTING_EXERCISE
    with pytest.raises(SessionStateError):
        session.add_set()
    with pytest.raises(InvalidTransitionError):
        session.advance()

    session.select_exercise("ex3")
    assert session.phase is SessionPhase.LOGGING
    session.add_set()
    session.add_set()

    session.request_exercise_change()
    assert session.phase is SessionPhase.SELECTING_EXERCISE
    assert session.cursor == 1
    assert session.current_exercise is None
    with pytest.raises(SessionStateError):
        session.add_set()

    session.select_exercise("ex5")
    session.add_set()

    assert [slot.exercise_id for slot in session.planned] == ["ex3", "ex5"]
    assert [len(log.sets) for log in session.logs] == [2, 1]

    record = engine.finish()
    assert record is not None
    assert record.name == "Freestyle Session"
    assert [log.exercise_id for log in record.exercises] == ["ex3", "ex5"]


def test_append_exercise_sets_cursor_on_first_slot(engine: SessionEngine) -> None:
    session = engine.start_freestyle()

    session.append_exercise("ex1")
    assert session.cursor == 0
    assert session.phase is SessionPhase.LOGGING
    session.add_set()

    session.append_exercise("ex2")
    assert session.cursor == 0
    assert [log.exercise_id for log in session.logs] == ["ex1", "ex2"]
    assert len(session.logs[0].sets) == 1


def test_plan_changes_keep_entered_sets(engine: SessionEngine) -> None:
    session = engine.start_freestyle()
    session.select_exercise("ex1")
    session.add_set()
    session.request_exercise_change()
    session.select_exercise("ex1")
    session.add_set()
    session.add_set()

    assert [log.exercise_id for log in session.logs] == ["ex1", "ex1"]
    assert [len(log.sets) for log in session.logs] == [1, 2]
    assert len(session.logs) == len(session.planned)


def test_archived_exercise_is_not_selectable(engine: SessionEngine, library: ExerciseLibrary) -> None:
    library.archive("ex8")
    session = engine.start_freestyle()

    with pytest.raises(SessionStateError):
        session.select_exercise("ex8")
    with pytest.raises(NotFoundError):
        session.append_exercise("missing")
    assert session.planned == ()


def test_session_keeps_copy_of_template(
    engine: SessionEngine, templates: TemplateManager, three_exercise_template: str
) -> None:
    session = engine.start_templated(three_exercise_template)
    templates.delete(three_exercise_template)

    session.add_set()
    record = engine.finish()

    assert record is not None
    assert record.exercises[0].exercise_id == "ex2"


def test_finished_session_date_comes_from_clock(
    engine: SessionEngine, clock: StepClock, three_exercise_template: str
) -> None:
    session = engine.start_templated(three_exercise_template)
    session.add_set()

    record = engine.finish()

    assert record is not None
    assert record.date == clock.now
    assert record.id.startswith("session_")


def test_timer_counts_only_while_running() -> None:
    timer = SessionTimer()
    seen: list[int] = []
    timer.on_tick(seen.append)

    timer.tick()
    timer.start()
    timer.tick()
    timer.lap()
    timer.tick()
    timer.tick()
    timer.stop()
    timer.tick()

    assert timer.read_elapsed() == 3
    assert timer.read_lap() == 2
    assert seen == [1, 2, 3]
    assert not timer.is_running


def test_format_duration() -> None:
    assert format_duration(0) == "00:00:00"
    assert format_duration(3_725) == "01:02:05"
    assert format_duration(-4) == "00:00:00"
