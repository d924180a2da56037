"""Application error kinds.

Learn: Services raise these instead of HTTPException so they stay usable
outside a request. create_app() registers one handler that turns any
AppError into `{"message": ...}` with the error's status code.
"""


class AppError(Exception):
    """Base class for errors reported to API clients."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    """The resource already exists (duplicate registration)."""

    status_code = 400
    default_message = "User already exists"


class NotFoundError(AppError):
    status_code = 404
    default_message = "User not found"


class UnauthorizedError(AppError):
    """Bad credentials, or a missing/invalid/expired bearer token."""

    status_code = 401
    default_message = "Unauthorized"


class OldPasswordMismatchError(UnauthorizedError):
    """Wrong current password on password change.

    Reported as 400 rather than 401: the caller holds a valid token, and
    a 401 here would make clients treat the session as expired.
    """

    status_code = 400
    default_message = "Old password is incorrect"


class ServerError(AppError):
    """Unexpected failure in persistence or hashing."""

    status_code = 500
    default_message = "Server error"
