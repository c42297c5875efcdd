"""ORM model for portal users (credential store)."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Text, Uuid, func, true

from portal.models.base import Base


class User(Base):
    """
    User account for email/password login and role-based routing.

    role: 'admin' or 'member'. Rows are created by the seeding script;
    login only ever touches last_login.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    role = Column(String(16), nullable=False, default="member", server_default="member")
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    last_login = Column(DateTime(timezone=True), nullable=True)
