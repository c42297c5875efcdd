"""SQLAlchemy declarative Base with constraint naming shared by models and migrations."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Index/constraint names match the ones written in alembic/versions.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
}


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
