"""Helpers for tests: in-memory credential store and user factory."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from portal.core.security import hash_password
from portal.models import Base, User


def make_sessionmaker() -> sessionmaker:
    """One shared in-memory SQLite database per call (StaticPool: same connection in every thread)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_user(
    db: Session,
    email: str,
    password: str,
    role: str = "member",
    is_active: bool = True,
) -> User:
    """Insert a user with a real bcrypt hash and return it."""
    user = User(
        email=email,
        password_hash=hash_password(password),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
