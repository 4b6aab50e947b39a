"""
Domain error taxonomy.

Every error here is terminal for the operation that raised it; none are
retried internally. The HTTP layer maps each kind to a distinct status code.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for errors surfaced by the core."""

    error_code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Caller supplied malformed input (pagination, sale value, ...)."""

    error_code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Lookup, update or delete target does not exist."""

    error_code = "NOT_FOUND"


class UnprocessableReferenceError(DomainError):
    """A well-formed record references an entity that does not exist."""

    error_code = "UNPROCESSABLE_REFERENCE"


class ConflictError(DomainError):
    """Duplicate unique key or a write blocked by dependent records."""

    error_code = "CONFLICT"


__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "UnprocessableReferenceError",
    "ConflictError",
]
