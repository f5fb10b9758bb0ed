"""
Session store module.

Mock identity database and current-session record backed by a key-value
store.

Public API:
- ISessionService / IKeyValueStore: Interfaces
- SessionService: Implementation
- InMemoryKeyValueStore / JsonFileKeyValueStore: Stores
- UserProfile, IdentityRecord, AuthResponse: Models
- Session exceptions: DuplicateIdentityError, InvalidCredentialsError, CorruptedStoreError
"""

from .interfaces import IKeyValueStore, ISessionService
from .models import AuthResponse, IdentityRecord, UserProfile, normalize_email
from .exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    CorruptedStoreError,
)
from .storage import InMemoryKeyValueStore, JsonFileKeyValueStore
from .service import (
    USERS_KEY,
    SESSION_KEY,
    SessionService,
    get_session_service,
    reset_session_service,
)

__all__ = [
    # Interfaces
    "IKeyValueStore",
    "ISessionService",
    # Models
    "AuthResponse",
    "IdentityRecord",
    "UserProfile",
    "normalize_email",
    # Exceptions
    "DuplicateIdentityError",
    "InvalidCredentialsError",
    "CorruptedStoreError",
    # Stores
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Service
    "USERS_KEY",
    "SESSION_KEY",
    "SessionService",
    "get_session_service",
    "reset_session_service",
]
