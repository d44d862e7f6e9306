"""Backend collaborator exceptions"""


class ApiError(Exception):
    """Base exception for backend calls"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkFailure(ApiError):
    """Backend unreachable, timed out, or returned an unreadable body"""

    pass


class ValidationFailure(ApiError, ValueError):
    """A required field is missing or malformed, client- or server-side"""

    pass


class AuthFailure(ApiError):
    """Backend rejected the session credentials"""

    pass


class NotFound(ApiError):
    """The target of a call no longer exists"""

    pass
