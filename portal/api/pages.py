"""
Placeholder dashboard and sign-in pages.

The real dashboards are rendered elsewhere; these handlers exist so the
request gate has routes to guard. Admin and member handlers only run after
the gate verified the cookie, so they read it with decode_token. Sign-in and
sign-up are reached precisely when the cookie is missing or failed
verification, so they never read it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from portal.core.security import AUTH_COOKIE_NAME
from portal.services.auth import AuthService, get_auth_service

router = APIRouter()


def _page(name: str, request: Request, user: dict | None = None) -> dict:
    return {"page": name, "path": request.url.path, "user": user}


def _gated_page(name: str, request: Request, auth: AuthService) -> dict:
    token = request.cookies.get(AUTH_COOKIE_NAME)
    payload = auth.decode_token(token) if token else None
    user = None
    if payload is not None:
        user = {"id": str(payload.id), "email": payload.email, "role": payload.role.value}
    return _page(name, request, user)


@router.get("/signin")
def signin_page(request: Request) -> dict:
    return _page("signin", request)


@router.get("/signup")
def signup_page(request: Request) -> dict:
    return _page("signup", request)


@router.get("/admin")
@router.get("/admin/{subpath:path}")
def admin_page(request: Request, auth: Annotated[AuthService, Depends(get_auth_service)]) -> dict:
    return _gated_page("admin", request, auth)


@router.get("/member")
@router.get("/member/{subpath:path}")
def member_page(request: Request, auth: Annotated[AuthService, Depends(get_auth_service)]) -> dict:
    return _gated_page("member", request, auth)
