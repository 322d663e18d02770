"""Error hierarchy shared by services and the HTTP error handlers.

Every error carries a user-facing ``message`` and the HTTP status the API
layer answers with. Messages never contain internal details.
"""


class AppError(Exception):
    """Base class for expected, caller-visible failures."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed caller input."""

    http_status = 400


class UnauthenticatedError(AppError):
    """No usable identity was presented."""

    http_status = 401


class ForbiddenError(AppError):
    """Authenticated, but not allowed to touch the resource."""

    http_status = 403


class NotFoundError(AppError):
    http_status = 404


class ConflictError(AppError):
    http_status = 409
