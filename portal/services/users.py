"""Credential store access: user lookup, last-login bookkeeping, seeding upsert."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.models import User
from portal.schemas.auth import Role
from portal.services.errors import TransientStoreError

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Return the user whose email matches exactly, or None."""
    try:
        return db.query(User).filter(User.email == email).first()
    except SQLAlchemyError as e:
        db.rollback()
        raise TransientStoreError() from e


def record_login(db: Session, user_id: uuid.UUID) -> datetime:
    """Set last_login to now for one user and commit. Returns the stored timestamp."""
    now = datetime.now(UTC)
    try:
        db.query(User).filter(User.id == user_id).update(
            {User.last_login: now},
            synchronize_session=False,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise TransientStoreError() from e
    return now


def upsert_user(
    db: Session,
    email: str,
    password_hash: str,
    role: Role = Role.MEMBER,
    is_active: bool = True,
    replace_existing: bool = False,
) -> tuple[User, bool]:
    """
    Create a user, or (with replace_existing) overwrite an existing user's
    password hash, role and active flag.

    Returns (user, created). Raises ValueError if the email exists and
    replace_existing is False.
    """
    try:
        user = db.query(User).filter(User.email == email).first()
        created = user is None
        if user is None:
            user = User(
                email=email,
                password_hash=password_hash,
                role=role.value,
                is_active=is_active,
            )
            db.add(user)
        elif not replace_existing:
            raise ValueError(f"User '{email}' already exists.")
        else:
            user.password_hash = password_hash
            user.role = role.value
            user.is_active = is_active
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        raise TransientStoreError() from e
    logger.info(
        "User %s: email=%s role=%s active=%s",
        "created" if created else "updated",
        email,
        role.value,
        is_active,
    )
    return user, created
