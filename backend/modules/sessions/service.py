"""
Session service implementation.

A mock identity database and current-session record kept in a key-value
store. There is no hashing, token signing or expiry: it stands in for a
real auth backend during prototyping.
"""

import asyncio
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from shared.config import Settings, get_settings

from .exceptions import (
    CorruptedStoreError,
    DuplicateIdentityError,
    InvalidCredentialsError,
)
from .interfaces import IKeyValueStore, ISessionService
from .models import AuthResponse, IdentityRecord, UserProfile, normalize_email
from .storage import JsonFileKeyValueStore

logger = logging.getLogger(__name__)


USERS_KEY = "MENTOR_AUTH_USERS_DB"
SESSION_KEY = "MENTOR_AUTH_SESSION_TOKEN"
MOCK_SESSION_TOKEN = "mock-session-token"

_identity_list = TypeAdapter(list[IdentityRecord])


class SessionService(ISessionService):
    """
    Implementation of the session service.

    Every operation sleeps for a short, configurable delay to mimic a
    network round trip.
    """

    def __init__(
        self,
        store: Optional[IKeyValueStore] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the session service.

        Args:
            store: Key-value store. Defaults to a JSON file at settings.session_store_path.
            settings: Settings. Defaults to get_settings().
        """
        self._settings = settings or get_settings()
        self._store = store or JsonFileKeyValueStore(self._settings.session_store_path)

    async def _simulate_latency(self, short: bool = False) -> None:
        if short:
            delay = self._settings.session_short_latency_seconds
        else:
            delay = self._settings.session_latency_seconds
        if delay > 0:
            await asyncio.sleep(delay)

    def _load_identities(self) -> list[IdentityRecord]:
        raw = self._store.get_item(USERS_KEY)
        if not raw:
            return []
        try:
            return _identity_list.validate_json(raw)
        except PydanticValidationError as e:
            raise CorruptedStoreError(USERS_KEY, str(e)) from e

    def _save_identities(self, identities: list[IdentityRecord]) -> None:
        self._store.set_item(USERS_KEY, _identity_list.dump_json(identities).decode("utf-8"))

    def _start_session(self, profile: UserProfile) -> AuthResponse:
        self._store.set_item(SESSION_KEY, profile.model_dump_json())
        return AuthResponse(user=profile, token=MOCK_SESSION_TOKEN)

    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        """Register a new identity and sign it in."""
        await self._simulate_latency()

        identities = self._load_identities()
        normalized = normalize_email(email)

        if any(identity.email == normalized for identity in identities):
            raise DuplicateIdentityError(normalized)

        record = IdentityRecord(name=name.strip(), email=normalized, password=password)
        identities.append(record)
        self._save_identities(identities)

        logger.info(f"Registered identity {record.id}")
        return self._start_session(record.to_profile())

    async def login(self, email: str, password: str) -> AuthResponse:
        """Sign in an existing identity."""
        await self._simulate_latency()

        normalized = normalize_email(email)
        match = next(
            (
                identity
                for identity in self._load_identities()
                if identity.email == normalized and identity.password == password
            ),
            None,
        )
        if match is None:
            raise InvalidCredentialsError()

        logger.info(f"Signed in identity {match.id}")
        return self._start_session(match.to_profile())

    async def current_session(self) -> Optional[UserProfile]:
        """
        Return the signed-in profile, or None.

        An unreadable session record is removed and reads as absent. An
        unreadable store also reads as absent but is left untouched, since
        the same file holds the identity list.
        """
        await self._simulate_latency(short=True)

        try:
            raw = self._store.get_item(SESSION_KEY)
        except CorruptedStoreError as e:
            logger.warning(f"Session store is unreadable, treating session as absent: {e.message}")
            return None
        if not raw:
            return None

        try:
            return UserProfile.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("Discarding unreadable session record")
            self._store.remove_item(SESSION_KEY)
            return None

    async def logout(self) -> None:
        """Remove the current session. An unreadable store is left as-is."""
        try:
            self._store.remove_item(SESSION_KEY)
        except CorruptedStoreError as e:
            logger.warning(f"Session store is unreadable, nothing to sign out of: {e.message}")
        await self._simulate_latency(short=True)


# Module-level instance getter
_service_instance: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get the session service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SessionService()
    return _service_instance


def reset_session_service() -> None:
    """Reset the session service singleton (for testing)."""
    global _service_instance
    _service_instance = None
