"""
Request gate: per-request routing decision from (path, auth cookie).

decide() is pure. It only calls the supplied verify function (signature and
expiry check, no I/O) and returns Allow or RedirectTo; the HTTP middleware in
portal.main turns that into a redirect response.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from portal.schemas.auth import Role, TokenPayload

SIGNIN_PATH = "/signin"
ADMIN_HOME = "/admin"
MEMBER_HOME = "/member"

# Matched anywhere in the path so route-group variants also count.
PUBLIC_AUTH_MARKERS = ("/signin", "/signup")
# Admin paths containing this are open to every authenticated role.
PROFILE_MARKER = "profile"

TokenVerifier = Callable[[str], TokenPayload | None]


class PathKind(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"
    PUBLIC_AUTH = "public_auth"
    OTHER = "other"


@dataclass(frozen=True)
class Allow:
    """Let the request through unchanged."""


@dataclass(frozen=True)
class RedirectTo:
    """Send the client to another route instead of serving the request."""

    location: str


GateDecision = Allow | RedirectTo


# Area prefixes are plain string prefixes: "/admin-panel" and "/members" are guarded too.
ADMIN_PREFIXES = (ADMIN_HOME, "/(admin)")
MEMBER_PREFIXES = (MEMBER_HOME,)


def classify_path(path: str) -> PathKind:
    """Admin area first, then member area, then sign-in/sign-up pages."""
    if path.startswith(ADMIN_PREFIXES):
        return PathKind.ADMIN
    if path.startswith(MEMBER_PREFIXES):
        return PathKind.MEMBER
    if any(marker in path for marker in PUBLIC_AUTH_MARKERS):
        return PathKind.PUBLIC_AUTH
    return PathKind.OTHER


def home_for(role: Role) -> str:
    return ADMIN_HOME if role == Role.ADMIN else MEMBER_HOME


def is_excluded(path: str, excluded_prefixes: Sequence[str]) -> bool:
    """True for paths the gate never inspects (API, static assets)."""
    return any(path.startswith(prefix) for prefix in excluded_prefixes)


def _verified(token: str | None, verify: TokenVerifier) -> TokenPayload | None:
    if not token:
        return None
    try:
        return verify(token)
    except Exception:
        # Any verification failure means "not signed in".
        return None


def decide(path: str, token: str | None, verify: TokenVerifier) -> GateDecision:
    """Return the routing decision for one navigational request."""
    kind = classify_path(path)

    if kind is PathKind.ADMIN:
        payload = _verified(token, verify)
        if payload is None:
            return RedirectTo(SIGNIN_PATH)
        if payload.role != Role.ADMIN and PROFILE_MARKER not in path:
            return RedirectTo(MEMBER_HOME)
        return Allow()

    if kind is PathKind.MEMBER:
        if _verified(token, verify) is None:
            return RedirectTo(SIGNIN_PATH)
        return Allow()

    if kind is PathKind.PUBLIC_AUTH:
        payload = _verified(token, verify)
        if payload is not None:
            return RedirectTo(home_for(payload.role))
        return Allow()

    return Allow()
