from __future__ import annotations

from gym_assistant.schemas.workout import ExerciseLog, SetLog, WorkoutSession


class StepClock:
    """Deterministic epoch-ms clock advancing one minute per reading."""

    def __init__(self, start_ms: int = 1_717_000_000_000) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        self.now += 60_000
        return self.now


def make_session(
    session_id: str,
    date_ms: int,
    logs: dict[str, list[tuple[int, float]]],
    name: str = "Workout",
) -> WorkoutSession:
    exercises = [
        ExerciseLog(exercise_id=ex_id, sets=[SetLog(reps=r, weight=w) for r, w in sets])
        for ex_id, sets in logs.items()
    ]
    return WorkoutSession(
        id=session_id,
        name=name,
        date=date_ms,
        duration=1800,
        exercises=exercises,
        total_volume=sum(log.volume for log in exercises),
    )
