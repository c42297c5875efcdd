"""Email/password login, logout and current-identity endpoints (cookie-based JWT)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from portal.core.config import Settings, get_settings
from portal.core.database import get_db
from portal.core.security import AUTH_COOKIE_MAX_AGE, AUTH_COOKIE_NAME
from portal.schemas.auth import (
    ErrorResponse,
    Identity,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from portal.services.auth import AuthService, get_auth_service
from portal.services.errors import AuthError, TransientStoreError

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> JSONResponse:
    """
    Authenticate with email and password.

    On success the signed token is set as the HttpOnly auth_token cookie
    (7 days, SameSite=Lax, Secure in prod) and the identity is returned.
    Wrong password and unknown email both return 401 with the same message.
    """
    try:
        identity = auth.authenticate(db, body.email, body.password)
        token = auth.issue_token(identity)
    except TransientStoreError as e:
        logger.exception("Login failed: credential store error")
        return _error(e.status_code, e.message)
    except AuthError as e:
        return _error(e.status_code, e.message)
    except Exception:
        logger.exception("Login failed: unexpected error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    response = JSONResponse(
        status_code=status.HTTP_200_OK,
        content=LoginResponse(user=identity).model_dump(mode="json"),
    )
    response.set_cookie(
        AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
        max_age=AUTH_COOKIE_MAX_AGE,
        path="/",
    )
    return response


@router.post("/logout", response_model=MessageResponse)
def logout(settings: Annotated[Settings, Depends(get_settings)]) -> JSONResponse:
    """Clear the auth cookie. The token itself stays valid until it expires."""
    response = JSONResponse(content=MessageResponse(message="Logged out").model_dump())
    response.delete_cookie(
        AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
    return response


@router.get("/me", response_model=Identity, responses={401: {"model": ErrorResponse}})
def me(
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Return the identity in a verified auth cookie. API routes are not gated, so this verifies."""
    token = request.cookies.get(AUTH_COOKIE_NAME)
    payload = auth.verify_token(token) if token else None
    if payload is None:
        return _error(status.HTTP_401_UNAUTHORIZED, "Not authenticated")
    return Identity(id=payload.id, email=payload.email, role=payload.role)
