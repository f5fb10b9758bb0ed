"""Tests for the session service."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from modules.sessions.exceptions import (
    CorruptedStoreError,
    DuplicateIdentityError,
    InvalidCredentialsError,
)
from modules.sessions.models import UserProfile
from modules.sessions.service import (
    MOCK_SESSION_TOKEN,
    SESSION_KEY,
    USERS_KEY,
    SessionService,
    get_session_service,
    reset_session_service,
)
from modules.sessions.storage import InMemoryKeyValueStore, JsonFileKeyValueStore


class TestSessionService:
    @pytest.fixture
    def store(self):
        return InMemoryKeyValueStore()

    @pytest.fixture
    def service(self, store, settings):
        """Session service over an in-memory store with no latency."""
        return SessionService(store, settings)

    @pytest.mark.asyncio
    async def test_register_returns_public_profile(self, service):
        """Registering should return a profile without the password."""
        response = await service.register("  Ana ", "  Ana@X.com ", "pw")

        assert response.token == MOCK_SESSION_TOKEN
        assert response.user.name == "Ana"
        assert response.user.email == "ana@x.com"
        assert "password" not in response.user.model_dump()

    @pytest.mark.asyncio
    async def test_register_persists_identity(self, service, store):
        """The identity list should contain the new record."""
        response = await service.register("Ana", "Ana@X.com", "pw")

        stored = json.loads(store.get_item(USERS_KEY))
        assert len(stored) == 1
        assert stored[0]["id"] == response.user.id
        assert stored[0]["email"] == "ana@x.com"
        assert stored[0]["password"] == "pw"

    @pytest.mark.asyncio
    async def test_register_starts_session(self, service):
        """Registering should sign the new identity in."""
        response = await service.register("Ana", "Ana@X.com", "pw")
        assert await service.current_session() == response.user

    @pytest.mark.asyncio
    async def test_register_generates_unique_ids(self, service):
        """Every identity should get its own URL-safe id."""
        first = await service.register("Ana", "ana@x.com", "pw")
        second = await service.register("Bea", "bea@x.com", "pw")

        assert first.user.id != second.user.id
        for identity_id in (first.user.id, second.user.id):
            assert all(c.isalnum() or c == "-" for c in identity_id)

    @pytest.mark.asyncio
    async def test_duplicate_email_case_insensitive(self, service):
        """The same email in another case or with spaces is a duplicate."""
        await service.register("Ana", "Ana@X.com", "pw")

        with pytest.raises(DuplicateIdentityError) as exc_info:
            await service.register("x", " ana@x.com ", "pw2")

        assert exc_info.value.code == "DUPLICATE_IDENTITY"

    @pytest.mark.asyncio
    async def test_duplicate_does_not_change_store(self, service, store):
        """A rejected registration should leave the identity list as-is."""
        await service.register("Ana", "Ana@X.com", "pw")
        before = store.get_item(USERS_KEY)

        with pytest.raises(DuplicateIdentityError):
            await service.register("x", "ana@x.com", "pw2")

        assert store.get_item(USERS_KEY) == before

    @pytest.mark.asyncio
    async def test_login_success(self, service):
        """Logging in should return the profile without a password field."""
        registered = await service.register("Ana", "Ana@X.com", "pw")
        await service.logout()

        response = await service.login("ana@x.com", "pw")

        assert response.user == registered.user
        assert "password" not in response.user.model_dump()
        assert await service.current_session() == registered.user

    @pytest.mark.asyncio
    async def test_login_normalizes_email(self, service):
        """Login email matching should ignore case and surrounding spaces."""
        await service.register("Ana", "ana@x.com", "pw")
        response = await service.login("  ANA@X.COM ", "pw")
        assert response.user.email == "ana@x.com"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, service):
        """A wrong password should raise InvalidCredentialsError."""
        await service.register("Ana", "Ana@X.com", "pw")

        with pytest.raises(InvalidCredentialsError):
            await service.login("ana@x.com", "wrong")

    @pytest.mark.asyncio
    async def test_login_password_is_exact(self, service):
        """Passwords are compared exactly, including case and spaces."""
        await service.register("Ana", "Ana@X.com", "pw")

        with pytest.raises(InvalidCredentialsError):
            await service.login("ana@x.com", "PW")
        with pytest.raises(InvalidCredentialsError):
            await service.login("ana@x.com", " pw")

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, service):
        """An unknown email should raise InvalidCredentialsError."""
        with pytest.raises(InvalidCredentialsError):
            await service.login("nobody@x.com", "pw")

    @pytest.mark.asyncio
    async def test_login_replaces_session(self, service):
        """Logging in as someone else should overwrite the session."""
        await service.register("Ana", "ana@x.com", "pw")
        bea = await service.register("Bea", "bea@x.com", "pw")
        ana = await service.login("ana@x.com", "pw")

        session = await service.current_session()
        assert session == ana.user
        assert session != bea.user

    @pytest.mark.asyncio
    async def test_no_session_initially(self, service):
        """A fresh store has no current session."""
        assert await service.current_session() is None

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, service, store):
        """After logout there should be no current session."""
        await service.register("Ana", "Ana@X.com", "pw")

        await service.logout()

        assert await service.current_session() is None
        assert store.get_item(SESSION_KEY) is None

    @pytest.mark.asyncio
    async def test_logout_keeps_identities(self, service):
        """Logging out should not delete the identity."""
        await service.register("Ana", "Ana@X.com", "pw")
        await service.logout()
        response = await service.login("ana@x.com", "pw")
        assert response.user.email == "ana@x.com"

    @pytest.mark.asyncio
    async def test_logout_without_session(self, service):
        """Logging out twice should be harmless."""
        await service.logout()
        await service.logout()
        assert await service.current_session() is None

    @pytest.mark.asyncio
    async def test_corrupted_session_self_heals(self, service, store):
        """Unparsable session text should be removed and read as absent."""
        store.set_item(SESSION_KEY, "{not json")

        assert await service.current_session() is None
        assert store.get_item(SESSION_KEY) is None

    @pytest.mark.asyncio
    async def test_invalid_session_shape_self_heals(self, service, store):
        """Valid JSON that is not a profile should also be discarded."""
        store.set_item(SESSION_KEY, json.dumps({"hello": "world"}))

        assert await service.current_session() is None
        assert store.get_item(SESSION_KEY) is None

    @pytest.mark.asyncio
    async def test_stale_session_is_tolerated(self, service, store):
        """A session is not re-checked against the identity list."""
        profile = UserProfile(
            id="gone",
            name="Ghost",
            email="ghost@x.com",
            created_at="2024-01-01T00:00:00Z",
        )
        store.set_item(SESSION_KEY, profile.model_dump_json())

        assert await service.current_session() == profile

    @pytest.mark.asyncio
    async def test_corrupted_identity_list_raises(self, service, store):
        """A broken identity list should raise rather than be wiped."""
        store.set_item(USERS_KEY, "garbage")

        with pytest.raises(CorruptedStoreError):
            await service.register("Ana", "ana@x.com", "pw")

        assert store.get_item(USERS_KEY) == "garbage"

    @pytest.mark.asyncio
    async def test_works_with_file_store(self, tmp_path, settings):
        """Identities should survive a new service over the same file."""
        path = tmp_path / "store.json"
        first = SessionService(JsonFileKeyValueStore(path), settings)
        registered = await first.register("Ana", "Ana@X.com", "pw")

        second = SessionService(JsonFileKeyValueStore(path), settings)
        assert await second.current_session() == registered.user
        response = await second.login("ana@x.com", "pw")
        assert response.user.id == registered.user.id

    @pytest.mark.asyncio
    async def test_unreadable_file_store_reads_as_no_session(self, tmp_path, settings):
        """A store file that no longer parses should read as signed out."""
        path = tmp_path / "store.json"
        service = SessionService(JsonFileKeyValueStore(path), settings)
        await service.register("Ana", "Ana@X.com", "pw")
        path.write_text('{"MENTOR_AUTH_SESSION_TOKEN": "{trunc', encoding="utf-8")

        assert await service.current_session() is None
        assert path.read_text(encoding="utf-8") == '{"MENTOR_AUTH_SESSION_TOKEN": "{trunc'

    @pytest.mark.asyncio
    async def test_logout_with_unreadable_file_store(self, tmp_path, settings):
        """Logout should not raise when the store file is garbage."""
        path = tmp_path / "store.json"
        path.write_text("garbage", encoding="utf-8")
        service = SessionService(JsonFileKeyValueStore(path), settings)

        await service.logout()

        assert await service.current_session() is None
        assert path.read_text(encoding="utf-8") == "garbage"

    @pytest.mark.asyncio
    async def test_unreadable_file_store_still_fails_identity_operations(self, tmp_path, settings):
        """Register and login should keep raising on an unreadable store."""
        path = tmp_path / "store.json"
        path.write_text("garbage", encoding="utf-8")
        service = SessionService(JsonFileKeyValueStore(path), settings)

        with pytest.raises(CorruptedStoreError):
            await service.register("Ana", "ana@x.com", "pw")
        with pytest.raises(CorruptedStoreError):
            await service.login("ana@x.com", "pw")


class TestSimulatedLatency:
    @pytest.mark.asyncio
    async def test_register_waits(self, settings):
        """Register and login should sleep for the configured latency."""
        settings = settings.model_copy(update={"session_latency_seconds": 0.8})
        service = SessionService(InMemoryKeyValueStore(), settings)

        with patch("modules.sessions.service.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await service.register("Ana", "ana@x.com", "pw")
            await service.login("ana@x.com", "pw")

        assert [c.args[0] for c in mock_sleep.await_args_list] == [0.8, 0.8]

    @pytest.mark.asyncio
    async def test_logout_waits_short(self, settings):
        """Logout and session reads use the short latency."""
        settings = settings.model_copy(update={"session_short_latency_seconds": 0.2})
        service = SessionService(InMemoryKeyValueStore(), settings)

        with patch("modules.sessions.service.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await service.current_session()
            await service.logout()

        assert [c.args[0] for c in mock_sleep.await_args_list] == [0.2, 0.2]

    @pytest.mark.asyncio
    async def test_zero_latency_skips_sleep(self, settings):
        """No latency configured means no sleep."""
        service = SessionService(InMemoryKeyValueStore(), settings)

        with patch("modules.sessions.service.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await service.logout()

        mock_sleep.assert_not_awaited()


class TestSessionServiceSingleton:
    def test_get_session_service_caches(self):
        """get_session_service should return the same instance."""
        with patch("modules.sessions.service.SessionService") as mock_cls:
            first = get_session_service()
            second = get_session_service()
        assert first is second
        mock_cls.assert_called_once_with()

    def test_reset_session_service(self):
        """reset_session_service should drop the cached instance."""
        with patch("modules.sessions.service.SessionService") as mock_cls:
            get_session_service()
            reset_session_service()
            get_session_service()
        assert mock_cls.call_count == 2
