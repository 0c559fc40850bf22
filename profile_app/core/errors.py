"""Errors raised by the credential service and the access guard.

Each error carries the HTTP status it maps to; ``profile_app.main`` turns
them into ``{"message": ...}`` responses.
"""


class ProfileAppError(Exception):
    status_code = 500
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ProfileAppError):
    status_code = 400


class WeakPasswordError(ValidationError):
    pass


class ConflictError(ProfileAppError):
    status_code = 400


class NotFoundError(ProfileAppError):
    status_code = 404


class UnknownUserError(NotFoundError):
    """Login with a username that has no record. Answered like a failed login."""
    status_code = 401


class AuthenticationError(ProfileAppError):
    status_code = 401


class UnauthorizedError(ProfileAppError):
    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}


class ServiceUnavailableError(ProfileAppError):
    status_code = 503
