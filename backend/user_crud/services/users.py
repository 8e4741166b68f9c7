from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from user_crud.models import User
from user_crud.observability.metrics import count_operation
from user_crud.schemas.user import UserCreate, UserUpdate
from user_crud.services.errors import DatabaseUnavailable, EmailAlreadyExists, UserNotFound

logger = structlog.get_logger(__name__)

# Raised when the pool cannot check out a connection or the server went away.
_CONNECTION_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@contextmanager
def _reading(operation: str) -> Iterator[None]:
    try:
        yield
    except _CONNECTION_ERRORS as exc:
        count_operation(operation, "unavailable")
        logger.error("db.unavailable", exc_type=type(exc).__name__)
        raise DatabaseUnavailable() from exc


@contextmanager
def _writing(db: Session, operation: str, *, email: Optional[str] = None) -> Iterator[None]:
    """Commit the statement run inside the block, rolling back on any failure."""
    try:
        yield
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        count_operation(operation, "email_taken")
        logger.info("user.email_conflict")
        raise EmailAlreadyExists(email) from exc
    except _CONNECTION_ERRORS as exc:
        db.rollback()
        count_operation(operation, "unavailable")
        logger.error("db.unavailable", exc_type=type(exc).__name__)
        raise DatabaseUnavailable() from exc
    except Exception:
        db.rollback()
        raise


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def create_user(db: Session, payload: UserCreate) -> User:
    """Insert one user and return the stored row, generated columns included."""
    now = _utcnow()
    stmt = (
        insert(User)
        .values(
            name=payload.name,
            email=payload.email,
            age=payload.age,
            created_at=now,
            updated_at=now,
        )
        .returning(User)
    )
    with _writing(db, "create", email=payload.email):
        user = db.scalars(stmt).one()

    count_operation("create", "ok")
    logger.info("user.created", user_id=user.id)
    return user


def get_user(db: Session, user_id: int) -> User:
    stmt = select(User).where(User.id == user_id)
    with _reading("get"):
        user = db.execute(stmt).scalar_one_or_none()
    if user is None:
        count_operation("get", "not_found")
        raise UserNotFound(user_id)
    count_operation("get", "ok")
    return user


def update_user(db: Session, user_id: int, payload: UserUpdate) -> User:
    """Apply only the fields present in ``payload``; ``updated_at`` always moves."""
    changes = payload.changes()
    stmt = (
        update(User)
        .where(User.id == user_id)
        .values(**changes, updated_at=_utcnow())
        .returning(User)
        .execution_options(populate_existing=True)
    )
    with _writing(db, "update", email=changes.get("email")):
        user = db.scalars(stmt).one_or_none()
        if user is None:
            count_operation("update", "not_found")
            raise UserNotFound(user_id)

    count_operation("update", "ok")
    logger.info("user.updated", user_id=user_id, fields=sorted(changes))
    return user


def delete_user(db: Session, user_id: int) -> None:
    stmt = delete(User).where(User.id == user_id).returning(User.id)
    with _writing(db, "delete"):
        deleted_id = db.execute(stmt).scalar_one_or_none()
        if deleted_id is None:
            count_operation("delete", "not_found")
            raise UserNotFound(user_id)

    count_operation("delete", "ok")
    logger.info("user.deleted", user_id=user_id)
