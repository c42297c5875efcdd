"""Password hashing and JWT issue/verify/decode for authentication."""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from portal.core.config import get_settings
from portal.schemas.auth import Identity, TokenPayload

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes; truncate the same way on hash and verify.
BCRYPT_MAX_BYTES = 72

# Tokens and the cookie that carries them share one fixed lifetime.
TOKEN_TTL = timedelta(days=7)
AUTH_COOKIE_NAME = "auth_token"
AUTH_COOKIE_MAX_AGE = int(TOKEN_TTL.total_seconds())

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (bcrypt.checkpw is timing-safe)."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Compared against when the email is unknown so both failure paths pay for one bcrypt check.
DUMMY_PASSWORD_HASH = hash_password("portal-timing-equalizer")


class TokenCodec:
    """
    Signs and reads auth tokens with one HMAC secret.

    verify() establishes trust (signature and expiry checked); decode() assumes
    it and must only be used on tokens that already passed verify(), e.g. in
    handlers that sit behind the request gate. Neither raises: any failure
    comes back as None.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = TOKEN_TTL,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("Token signing secret must be set and non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, identity: Identity, now: datetime | None = None) -> str:
        """Create a signed token with id, email, role, iat and exp claims."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "id": str(identity.id),
            "email": identity.email,
            "role": identity.role.value,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload | None:
        """Return the payload iff the signature is valid and the token has not expired."""
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except jwt.PyJWTError:
            logger.debug("Rejected token with invalid signature or format")
            return None
        return _to_payload(claims)

    def decode(self, token: str) -> TokenPayload | None:
        """Return the payload WITHOUT checking signature or expiry."""
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError:
            return None
        return _to_payload(claims)


def _to_payload(claims: dict[str, Any]) -> TokenPayload | None:
    try:
        return TokenPayload.model_validate(claims)
    except ValidationError:
        logger.debug("Token claims do not describe an identity")
        return None


@lru_cache
def get_token_codec() -> TokenCodec:
    """Return the process-wide codec built from JWT_SECRET / JWT_ALGORITHM."""
    settings = get_settings()
    return TokenCodec(
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
