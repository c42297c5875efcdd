"""SQLAlchemy ORM models."""

from portal.models.base import Base
from portal.models.user import User

__all__ = ["Base", "User"]
