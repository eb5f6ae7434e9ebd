"""
Typed errors raised by the stores and validation helpers.

Every error carries a human-readable ``message``, a discriminating ``kind``
and an HTTP ``status_code`` hint used by the exception handler in
``jukeboxd.main``.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Error categories surfaced to callers."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_CREDENTIALS = "invalid_credentials"
    STORE = "store"
    UNAVAILABLE = "unavailable"


class JukeboxdError(Exception):
    """Base class for all application errors."""
    kind: ErrorKind = ErrorKind.STORE
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class InputValidationError(JukeboxdError):
    """A user-supplied field is malformed."""
    kind = ErrorKind.VALIDATION
    status_code = 400


class NotFoundError(JukeboxdError):
    """No record matches the given identifier."""
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class ConflictError(JukeboxdError):
    """The write would break a uniqueness rule (duplicate email)."""
    kind = ErrorKind.CONFLICT
    status_code = 409


class InvalidCredentialsError(JukeboxdError):
    """Email or password is wrong. Deliberately does not say which."""
    kind = ErrorKind.INVALID_CREDENTIALS
    status_code = 401


class StoreError(JukeboxdError):
    """The document store did not acknowledge or return a result."""
    kind = ErrorKind.STORE
    status_code = 500


class AssetUnavailableError(JukeboxdError):
    """A bundled asset location could not be read."""
    kind = ErrorKind.UNAVAILABLE
    status_code = 503
