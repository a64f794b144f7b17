"""Domain exceptions raised by the service and search layers.

Every subclass of ``DomainError`` is a client error: the HTTP layer renders
it as 400 with the exception message as the body (see ``app.api.errors``).
"""


class DomainError(Exception):
    """Base class for errors caused by the caller's input."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ActivityNotFoundError(DomainError):
    """Raised when an operation requires an activity that does not exist."""

    def __init__(self, alternate_key: str):
        super().__init__(f"Activity with alternate key {alternate_key} not found")
        self.alternate_key = alternate_key


class InvalidParticipantError(DomainError):
    """Raised when a participant cannot be added to an activity."""


class InvalidSearchError(DomainError):
    """Raised when a search expression cannot be parsed."""
