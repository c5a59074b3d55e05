from __future__ import annotations

from typing import Dict, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid.

    ``errors`` maps form field names to their message so callers can show
    them inline next to each field.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class NotFoundError(DomainError):
    """Raised when a referenced teacher, group or student does not exist."""


class DuplicateCodeError(DomainError):
    """Raised when a student code is already taken."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class StorageError(DomainError):
    """Raised when the database rejects a write for any other reason."""
