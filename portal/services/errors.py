"""Login error hierarchy; each error carries its client-facing message and HTTP status."""


class AuthError(Exception):
    """Base for login failures."""

    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class LoginValidationError(AuthError):
    """Raised when email or password is missing from the login request."""

    status_code = 400

    def __init__(self, message: str = "Email and password are required") -> None:
        super().__init__(message)


class InvalidCredentials(AuthError):
    """Raised for an unknown email or a wrong password (one message for both)."""

    status_code = 401

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class InactiveAccount(AuthError):
    """Raised when the account exists but is disabled."""

    status_code = 403

    def __init__(self, message: str = "User account is inactive") -> None:
        super().__init__(message)


class TransientStoreError(AuthError):
    """
    Raised when a credential store query or connection fails.

    The message is what clients see; the underlying SQLAlchemy error is chained
    as __cause__ and only ever logged.
    """

    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
