"""Domain errors raised by the authentication use cases.

Each error carries the message shown to the client and the HTTP status the
API boundary maps it to.
"""


class AuthError(Exception):
    """Base class for authentication and verification failures."""

    status_code: int = 400
    default_message: str = "Authentication error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class EmailAlreadyExistsError(AuthError):
    """Raised when registering an email that already has an account."""

    status_code = 409
    default_message = "User already exists with this email"


class InvalidCredentialsError(AuthError):
    """Raised for an unknown email or a wrong password.

    Both cases share one message so callers cannot probe for accounts.
    """

    status_code = 401
    default_message = "Invalid email or password"


class EmailNotVerifiedError(AuthError):
    """Raised when an unverified account tries to log in."""

    status_code = 403
    default_message = "Please verify your email before logging in"


class InvalidVerificationTokenError(AuthError):
    """Raised when no account holds the presented verification token."""

    status_code = 404
    default_message = "Invalid or expired token"


class TokenMismatchError(InvalidVerificationTokenError):
    """Raised when the token does not match the one stored for the user."""


class VerificationTokenExpiredError(AuthError):
    """Raised when the verification deadline has passed."""

    status_code = 400
    default_message = "Verification token is expired. Please request new one."


class UserNotFoundError(AuthError):
    """Raised when no account exists for the given email."""

    status_code = 404
    default_message = "User not found"


class AlreadyVerifiedError(AuthError):
    """Raised when requesting a new verification email for a verified account."""

    status_code = 409
    default_message = "User is already verified"


class EmailDeliveryError(AuthError):
    """Raised when the verification email could not be handed to the provider."""

    status_code = 502
    default_message = "Failed to send verification email"


class ServiceUnavailableError(AuthError):
    """Raised when the store or the email provider did not answer in time.

    The operation can be retried by the caller.
    """

    status_code = 503
    default_message = "Service temporarily unavailable, please retry"


class NotAuthenticatedError(AuthError):
    """Raised by protected routes when the request carries no principal."""

    status_code = 401
    default_message = "Not authorized, no token"
