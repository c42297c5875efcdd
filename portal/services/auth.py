"""Auth service: credential verification and token issue/verify/decode."""

import logging
from functools import lru_cache

from sqlalchemy.orm import Session

from portal.core.security import (
    DUMMY_PASSWORD_HASH,
    TokenCodec,
    get_token_codec,
    verify_password,
)
from portal.schemas.auth import Identity, TokenPayload
from portal.services.errors import (
    AuthError,
    InactiveAccount,
    InvalidCredentials,
    LoginValidationError,
    TransientStoreError,
)
from portal.services.users import get_user_by_email, record_login

logger = logging.getLogger(__name__)


class AuthService:
    """Verifies credentials against the store and issues/reads tokens."""

    def __init__(self, tokens: TokenCodec) -> None:
        self.tokens = tokens

    def authenticate(self, db: Session, email: str | None, password: str | None) -> Identity:
        """
        Check email/password and record the login.

        Order matters: unknown email -> InvalidCredentials, inactive account ->
        InactiveAccount, wrong password -> InvalidCredentials. On success
        last_login is updated and the identity for token issuance is returned.
        Store failures surface as TransientStoreError.
        """
        if not email or not password:
            raise LoginValidationError()

        user = get_user_by_email(db, email)
        if user is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Login rejected: unknown email")
            raise InvalidCredentials()
        if not user.is_active:
            logger.info("Login rejected: inactive account user_id=%s", user.id)
            raise InactiveAccount()
        if not verify_password(password, user.password_hash):
            logger.info("Login rejected: wrong password user_id=%s", user.id)
            raise InvalidCredentials()

        record_login(db, user.id)
        logger.info("Login succeeded: user_id=%s role=%s", user.id, user.role)
        return Identity.model_validate(user)

    def issue_token(self, identity: Identity) -> str:
        return self.tokens.issue(identity)

    def verify_token(self, token: str) -> TokenPayload | None:
        return self.tokens.verify(token)

    def decode_token(self, token: str) -> TokenPayload | None:
        """Trust-assuming read of a token; only for tokens the gate already verified."""
        return self.tokens.decode(token)


@lru_cache
def get_auth_service() -> AuthService:
    """Dependency: process-wide AuthService bound to the configured token codec."""
    return AuthService(get_token_codec())


__all__ = [
    "AuthError",
    "AuthService",
    "InactiveAccount",
    "InvalidCredentials",
    "LoginValidationError",
    "TransientStoreError",
    "get_auth_service",
]
