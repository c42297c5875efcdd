"""Pydantic request/response schemas."""

from portal.schemas.auth import (
    ErrorResponse,
    Identity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    Role,
    TokenPayload,
)
from portal.schemas.health import HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Role",
    "TokenPayload",
]
