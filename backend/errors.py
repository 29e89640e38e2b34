"""Exceptions raised by the users service.

Every failure a request can hit maps to exactly one of these, and each
one maps to exactly one HTTP status in `main.py`. Nothing is retried.
"""


class UserServiceError(Exception):
    """Base exception for all users service errors.

    Attributes:
        message: Human-readable error message, returned verbatim to clients
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidArgument(UserServiceError):
    """Raised when a path parameter or request body cannot be parsed."""


class NotFound(UserServiceError):
    """Raised when a delete or update filter matches no document."""


class StoreFailure(UserServiceError):
    """Raised for any other error reported by the document store."""


class StartupFailure(UserServiceError):
    """Raised when the store cannot be reached or pinged at boot."""
