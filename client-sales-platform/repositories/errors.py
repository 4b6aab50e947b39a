"""
Translation of store-level failures into the domain error taxonomy.

PostgREST surfaces PostgreSQL errors as `APIError` with the SQLSTATE in
`code`. Recognized codes become domain errors; anything else propagates
unmodified.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Type

from postgrest.exceptions import APIError

from domain.errors import ConflictError, DomainError, UnprocessableReferenceError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


@contextmanager
def translate_store_errors(
    action: str,
    foreign_key_error: Type[DomainError] = UnprocessableReferenceError,
) -> Iterator[None]:
    """
    Run a store call, converting recognized constraint violations.

    A foreign key violation means a missing referenced row on insert/update
    but remaining dependent rows on delete, so callers pick the error kind
    via `foreign_key_error`.

    Example:
        with translate_store_errors("create client"):
            response = get_supabase().table("clients").insert(payload).execute()
    """

    try:
        yield
    except APIError as exc:
        code = getattr(exc, "code", None)
        if code == UNIQUE_VIOLATION:
            logger.warning("Unique violation during %s: %s", action, exc.message)
            raise ConflictError(f"Failed to {action}: duplicate value ({exc.message})") from exc
        if code == FOREIGN_KEY_VIOLATION:
            logger.warning("Foreign key violation during %s: %s", action, exc.message)
            raise foreign_key_error(
                f"Failed to {action}: foreign key constraint violated ({exc.message})"
            ) from exc
        raise


def rows_or_raise(response: Any, action: str) -> list[dict[str, Any]]:
    """Return response rows, raising RuntimeError if the response carries an error."""

    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to {action}: {error}")
    return getattr(response, "data", None) or []


__all__ = ["translate_store_errors", "rows_or_raise", "UNIQUE_VIOLATION", "FOREIGN_KEY_VIOLATION"]
