"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest

from shared.config import Settings
from modules.credentials.models import CredentialPool, CredentialPools
from modules.credentials.resolver import reset_credential_pools
from modules.generation.service import reset_generation_service
from modules.sessions.service import reset_session_service


# Long enough to pass the default plausibility threshold
KEY_1 = "AIzaTestKey-0000000001"
KEY_2 = "AIzaTestKey-0000000002"
KEY_3 = "AIzaTestKey-0000000003"


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module singletons before and after each test."""
    reset_credential_pools()
    reset_generation_service()
    reset_session_service()
    yield
    reset_credential_pools()
    reset_generation_service()
    reset_session_service()


@pytest.fixture
def settings() -> Settings:
    """Settings with no simulated latency and no .env file."""
    return Settings(
        _env_file=None,
        session_latency_seconds=0,
        session_short_latency_seconds=0,
    )


@pytest.fixture
def pools() -> CredentialPools:
    """Pools with three text keys, one voice key and one outline key."""
    return CredentialPools(
        pools=(
            CredentialPool(name="text", env_var="API_KEY_A1", credentials=(KEY_1, KEY_2, KEY_3)),
            CredentialPool(name="voice", env_var="API_KEY_B1", credentials=(KEY_2,)),
            CredentialPool(name="structured-output", env_var="API_KEY_C1", credentials=(KEY_1,)),
        )
    )


@pytest.fixture
def empty_pools() -> CredentialPools:
    """Pools with no keys configured anywhere."""
    return CredentialPools(
        pools=(
            CredentialPool(name="text", env_var="API_KEY_A1"),
            CredentialPool(name="voice", env_var="API_KEY_B1"),
            CredentialPool(name="structured-output", env_var="API_KEY_C1"),
        )
    )
