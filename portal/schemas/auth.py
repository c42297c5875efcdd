"""Request/response schemas for auth endpoints and token payloads."""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Authorization role; selects the dashboard a user is routed to."""

    ADMIN = "admin"
    MEMBER = "member"


class Identity(BaseModel):
    """Identity subset carried in tokens and returned after login."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    role: Role


class TokenPayload(Identity):
    """Claims of an auth token: identity plus issue and expiry times."""

    iat: datetime | None = None
    exp: datetime | None = None


class LoginRequest(BaseModel):
    """
    Credentials for login.

    Both fields are optional at the schema level so that a missing field is
    reported with the login endpoint's own 400 message rather than a 422. No
    length limits either: an overlong password is simply a wrong password (401).
    """

    email: str | None = Field(default=None, description="Email")
    password: str | None = Field(default=None, description="Password")


class LoginResponse(BaseModel):
    """Body returned on successful login (the token travels in a cookie)."""

    message: str = Field(default="Login successful")
    user: Identity


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error body for auth endpoints."""

    error: str
