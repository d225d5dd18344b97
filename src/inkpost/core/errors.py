"""Domain error taxonomy shared by services and the HTTP layer.

Services raise these; the API layer maps them to status codes in one place
(see `inkpost.main`). Nothing below the API layer imports FastAPI.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class BlogError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(BlogError):
    """Referenced entity is absent, or ownership is deliberately not disclosed."""

    status_code = 404
    default_message = "Not found"


class ForbiddenError(BlogError):
    """Caller does not own the entity it tried to change."""

    status_code = 403
    default_message = "Forbidden"


class ValidationError(BlogError):
    """Malformed input rejected before any write."""

    status_code = 422
    default_message = "Invalid input"

    def __init__(self, message: str | None = None, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ConflictError(BlogError):
    """Uniqueness violation reported by the store."""

    status_code = 409
    default_message = "Conflict"


class AuthError(BlogError):
    """Missing, expired, or invalid credentials."""

    status_code = 401
    default_message = "Could not validate credentials"


class InternalError(BlogError):
    """Store or transaction failure; detail is only exposed in debug mode."""

    status_code = 500
    default_message = "Internal server error"


@contextmanager
def atomic(db: Session, *, conflict: str | None = None) -> Iterator[Session]:
    """Run the enclosed writes as a single commit/rollback unit.

    Args:
        db: Session whose current transaction wraps every write in the block.
        conflict: Message for `ConflictError` when the store reports a
            unique-constraint violation. Without it, integrity errors are
            reported as internal failures.

    Raises:
        BlogError: Domain errors raised inside the block, unchanged.
        ConflictError: On a unique-constraint violation when `conflict` is set.
        InternalError: On any other store failure, chained to the original.
    """
    try:
        yield db
        db.commit()
    except BlogError:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        if conflict is not None:
            raise ConflictError(conflict) from exc
        logger.exception("Integrity failure, transaction rolled back")
        raise InternalError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store failure, transaction rolled back")
        raise InternalError() from exc
    except Exception:
        db.rollback()
        logger.warning("Transaction rolled back after unexpected error", exc_info=True)
        raise
