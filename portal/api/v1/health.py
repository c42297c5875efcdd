"""Health check endpoint with credential store connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portal.core.config import Settings, get_settings
from portal.core.database import check_db_connected, get_db
from portal.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Report liveness and whether the users table's database answers."""
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
