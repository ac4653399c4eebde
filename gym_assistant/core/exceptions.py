"""Domain exceptions raised by the services and mapped to HTTP errors by the API."""


class GymAssistantError(Exception):
    """Base class for all domain errors."""


class NotFoundError(GymAssistantError, LookupError):
    """Referenced record does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"{kind} '{record_id}' not found")
        self.kind = kind
        self.record_id = record_id


class SessionError(GymAssistantError):
    """Live workout session misuse."""


class SessionAlreadyActiveError(SessionError):
    """A workout is already in progress."""


class NoActiveSessionError(SessionError):
    """No workout is in progress."""


class SessionClosedError(SessionError):
    """The session handle was finished or exited."""


class SessionStateError(SessionError):
    """Operation not allowed in the current session phase."""


class InvalidTransitionError(SessionError):
    """Cursor move or plan change not allowed in this mode or position."""


class InvalidInputError(GymAssistantError, ValueError):
    """Argument outside the accepted set of values."""
