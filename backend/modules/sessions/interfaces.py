"""
Session store module interfaces.

IKeyValueStore is the storage seam: a string-to-string store in the shape of
browser local storage. ISessionService is what the application shell uses.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import AuthResponse, UserProfile


@runtime_checkable
class IKeyValueStore(Protocol):
    """A durable string key-value store."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete key. Missing keys are ignored."""
        ...


@runtime_checkable
class ISessionService(Protocol):
    """
    Interface for the mock identity and session operations.

    Implementations must provide all these methods.
    """

    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        """
        Register a new identity and sign it in.

        Raises:
            DuplicateIdentityError: If the normalized email is already registered
        """
        ...

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Sign in an existing identity.

        Raises:
            InvalidCredentialsError: If no identity matches email and password
        """
        ...

    async def current_session(self) -> Optional[UserProfile]:
        """
        Return the signed-in profile, or None.

        A corrupted session entry is removed and reported as None.
        """
        ...

    async def logout(self) -> None:
        """Remove the current session."""
        ...
