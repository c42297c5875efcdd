"""PostgreSQL connection and session management."""

from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from portal.core.config import settings

# Every store query is bounded: connection setup, statement run time and pool checkout.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    pool_timeout=settings.DB_POOL_TIMEOUT_SEC,
    connect_args={
        "connect_timeout": settings.DB_CONNECT_TIMEOUT_SEC,
        "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
    },
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
