"""Domain error taxonomy.

Services raise these; api/error_handlers.py turns them into JSON
responses. Each error carries its HTTP status so routes never need
try/except blocks just to pick a status code.
"""

from typing import Optional


class TaskboardError(Exception):
    """Base class for errors that map to a client-visible response."""

    status_code = 500

    def __init__(self, message: str, headers: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers


class ValidationError(TaskboardError):
    """Malformed or semantically invalid input."""

    status_code = 400


class ConflictError(TaskboardError):
    """Uniqueness violation (duplicate user, duplicate membership)."""

    status_code = 400


class AuthError(TaskboardError):
    """Missing or invalid credentials or token."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", headers: Optional[dict[str, str]] = None):
        super().__init__(message, headers=headers)


class PermissionDeniedError(AuthError):
    """Caller is authenticated but has no right to act on the resource."""

    status_code = 403


class NotFoundError(TaskboardError):
    """Referenced resource does not exist."""

    status_code = 404


class InternalError(TaskboardError):
    """Storage or unexpected failure. The message is safe to show callers."""

    status_code = 500
