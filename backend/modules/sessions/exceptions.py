"""
Session store module exceptions.

These exceptions are raised by the session service and can be caught
by the application shell to show a message next to the auth form.
"""

from shared.exceptions import AuthenticationError, MentorError, ValidationError


class DuplicateIdentityError(ValidationError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(
            "This email is already registered.",
            code="DUPLICATE_IDENTITY",
            details={"email": email},
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when no identity matches the given email and password."""

    def __init__(self, message: str = "Invalid credentials. Check your email and password."):
        super().__init__(message, code="INVALID_CREDENTIALS")


class CorruptedStoreError(MentorError):
    """Raised when the stored identity list cannot be parsed."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            f"Stored data under '{key}' is corrupted",
            code="CORRUPTED_STORE",
            details={"key": key, "reason": reason},
        )
