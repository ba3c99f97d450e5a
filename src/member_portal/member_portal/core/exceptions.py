from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a lookup returns no row."""


class ConflictError(DomainError):
    """Raised when an approved session already occupies the requested date."""

    def __init__(self, message: str, *, topic: Optional[str] = None, handler: Optional[str] = None, session_date=None):
        super().__init__(message)
        self.topic = topic
        self.handler = handler
        self.session_date = session_date


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a member lacks permission for an action."""


class BackendError(DomainError):
    """Raised when the database cannot complete a request."""
