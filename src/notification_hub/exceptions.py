"""Domain and infrastructure exceptions for notification-hub."""

from __future__ import annotations


class NotificationHubError(Exception):
    """Root exception for the entire notification-hub package."""


class DomainError(NotificationHubError):
    """Base class for all domain-related errors."""


class InvariantViolationError(DomainError):
    """Raised when a domain invariant is violated at construction time."""


class ValidationError(NotificationHubError):
    """Raised when caller input fails validation.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(self._format(self.errors))

    @staticmethod
    def _format(errors: dict[str, list[str]]) -> str:
        root = errors.get("__root__")
        if root and len(errors) == 1:
            return "; ".join(root)
        return str(errors)


class DispatchFailedError(NotificationHubError):
    """Raised by the service facade when a dispatch created no jobs.

    ``errors`` holds the ``(channel, error)`` pairs of the failed outcome.
    """

    def __init__(self, message: str, errors: list[tuple[str, str]] | None = None):
        self.errors = errors or []
        super().__init__(message)


class InfrastructureError(NotificationHubError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class StoreConnectionError(PersistenceError):
    """Raised when connection to the document store fails."""


class DuplicateRecordError(PersistenceError):
    """Raised when an insert collides with a unique index."""


class QueueError(InfrastructureError):
    """Base class for job queue errors."""


class QueueConnectionError(QueueError):
    """Raised when connectivity to the queue broker fails."""


class JobSerializationError(QueueError):
    """Raised when a job envelope cannot be serialized or deserialized."""
