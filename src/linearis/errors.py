"""
Error taxonomy for linearis.

Every failure a command can hit is raised as a LinearisError subclass so the
CLI boundary can turn it into a single ``{"error": "..."}`` JSON object.
"""

from __future__ import annotations

from collections.abc import Sequence


class LinearisError(Exception):
    """Base class for all errors surfaced to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class AuthenticationError(LinearisError):
    """Raised when no API token is configured."""


class ValidationError(LinearisError):
    """Raised for invalid user input (exclusive flags, bad numbers, bad identifiers)."""


class NotFoundError(LinearisError):
    """A human identifier matched nothing."""

    def __init__(self, entity: str, value: str, hint: str | None = None):
        self.entity = entity
        self.value = value
        message = f'{entity} "{value}" not found'
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class AmbiguousMatchError(LinearisError):
    """A human identifier matched several candidates and nothing broke the tie."""

    def __init__(
        self,
        entity: str,
        value: str,
        candidates: Sequence[str],
        hint: str | None = None,
    ):
        self.entity = entity
        self.value = value
        self.candidates = list(candidates)
        message = (
            f'Multiple {entity.lower()}s found matching "{value}". '
            f"Candidates: {', '.join(self.candidates)}"
        )
        if hint:
            message = f"{message}. Please {hint}"
        super().__init__(message)


class RemoteFailureError(LinearisError):
    """A mutation came back with ``success: false``."""

    def __init__(self, operation: str, subject: str | None = None):
        self.operation = operation
        self.subject = subject
        message = f"Failed to {operation}"
        if subject:
            message = f"{message}: {subject}"
        super().__init__(message)


class TransportError(LinearisError):
    """HTTP, network or GraphQL-level failure talking to Linear."""

    def __init__(self, operation: str, detail: str, status_code: int | None = None):
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"Failed to {operation}: {detail}")


class FileWriteError(LinearisError):
    """A local file could not be written (downloads)."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f'Failed to write "{path}": {detail}')
