"""Progress aggregation over the archived sessions: PRs, series and history filtering."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, tzinfo

from gym_assistant.core.enums import ProgressMetric
from gym_assistant.core.exceptions import InvalidInputError
from gym_assistant.schemas.progress import ExerciseSummary, PersonalRecord, ProgressPoint, SeriesPoint
from gym_assistant.schemas.workout import WorkoutSession


def personal_record(history: Iterable[WorkoutSession], exercise_id: str) -> PersonalRecord | None:
    """
    Heaviest set ever logged for the exercise, with its reps.
    Scan is in archive order; on equal weight the first set seen is kept.
    Returns None only when no set of that exercise exists.
    """
    best: PersonalRecord | None = None
    for session in history:
        for log in session.exercises:
            if log.exercise_id != exercise_id:
                continue
            for s in log.sets:
                if best is None or s.weight > best.weight:
                    best = PersonalRecord(weight=s.weight, reps=s.reps)
    return best


def progress_series(history: Iterable[WorkoutSession], exercise_id: str) -> list[ProgressPoint]:
    """One point per session containing the exercise, ascending by date (no minimum length)."""
    points: list[ProgressPoint] = []
    for session in history:
        logs = [log for log in session.exercises if log.exercise_id == exercise_id]
        if not logs:
            continue
        weights = [s.weight for log in logs for s in log.sets]
        points.append(
            ProgressPoint(
                date=session.date,
                max_weight=max(weights, default=0.0),
                total_volume=sum(log.volume for log in logs),
            )
        )
    return sorted(points, key=lambda p: p.date)


def series_values(points: Iterable[ProgressPoint], metric: ProgressMetric | str) -> list[SeriesPoint]:
    """Project a progress series onto ``{date, value}`` pairs for charting."""
    try:
        metric = ProgressMetric(metric)
    except ValueError:
        raise InvalidInputError(f"Unknown progress metric {metric!r}") from None
    return [SeriesPoint(date=p.date, value=getattr(p, metric.value)) for p in points]


def _day_bounds_ms(day: date, tz: tzinfo | None) -> tuple[int, int]:
    start = datetime.combine(day, time.min)
    end = datetime.combine(day, time.max)
    if tz is not None:
        start = start.replace(tzinfo=tz)
        end = end.replace(tzinfo=tz)
    # Naive datetimes are interpreted in local time by .timestamp()
    return int(start.timestamp() * 1000), int(end.timestamp() * 1000)


def _as_day(on_date: date | int, tz: tzinfo | None) -> date:
    if isinstance(on_date, datetime):
        return on_date.astimezone(tz).date() if on_date.tzinfo else on_date.date()
    if isinstance(on_date, date):
        return on_date
    return datetime.fromtimestamp(on_date / 1000, tz=tz).date()


def filter_history(
    sessions: Sequence[WorkoutSession],
    exercise_id: str | None = None,
    on_date: date | int | None = None,
    tz: tzinfo | None = None,
) -> list[WorkoutSession]:
    """
    Most recent first. Optional filters are combined with AND:
    - exercise_id: session has at least one log for that exercise;
    - on_date (date or epoch ms): session falls inside that calendar day,
      bounds inclusive, in ``tz`` (local time when None).
    """
    result = sorted(reversed(sessions), key=lambda s: s.date, reverse=True)
    if exercise_id:
        result = [s for s in result if any(log.exercise_id == exercise_id for log in s.exercises)]
    if on_date is not None:
        start_ms, end_ms = _day_bounds_ms(_as_day(on_date, tz), tz)
        result = [s for s in result if start_ms <= s.date <= end_ms]
    return result


def exercise_summary(history: Sequence[WorkoutSession], exercise_id: str) -> ExerciseSummary:
    """PR plus how often and when the exercise was performed."""
    dates: list[int] = []
    total_sets = 0
    for session in history:
        logs = [log for log in session.exercises if log.exercise_id == exercise_id]
        if logs:
            dates.append(session.date)
            total_sets += sum(len(log.sets) for log in logs)
    return ExerciseSummary(
        exercise_id=exercise_id,
        personal_record=personal_record(history, exercise_id),
        total_sessions=len(dates),
        total_sets=total_sets,
        first_performed=min(dates, default=None),
        last_performed=max(dates, default=None),
    )
