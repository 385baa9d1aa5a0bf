"""Exception hierarchy for the igem_uploader library."""

from __future__ import annotations


class IgemError(Exception):
    """Base exception for all igem_uploader errors."""

    pass


class SessionError(IgemError):
    """Raised when an operation needs a session and none is active."""

    pass


class PathTypeError(IgemError, TypeError):
    """Raised when a path is neither a string nor a list of segments."""

    pass


class LocalFileNotFoundError(IgemError, FileNotFoundError):
    """Raised when a local file referenced for upload does not exist."""

    pass


class UnsupportedFileTypeError(IgemError):
    """Raised when a file extension is not accepted by the upload service."""

    def __init__(self, message: str, extension: str) -> None:
        super().__init__(message)
        self.extension = extension


class TransportError(IgemError):
    """Raised when a request fails or returns an unexpected status code.

    expected_status and status_code are None when the request never got
    a response (connection refused, timeout, ...).
    """

    def __init__(
        self,
        message: str,
        *,
        expected_status: int | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected_status = expected_status
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Raised when signing in or validating the session fails."""

    pass
