"""
Session store data models.

IdentityRecord is what gets persisted; UserProfile is the public projection
that is returned to callers and stored as the current session.
"""

from datetime import datetime, timezone
import uuid

from pydantic import BaseModel, Field


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address for storage and comparison."""
    return email.strip().lower()


class UserProfile(BaseModel):
    """
    Public view of a registered identity.

    Never carries the password. Also used as the current-session record.
    """

    id: str = Field(..., description="Identity ID (UUID)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Normalized email address")
    created_at: datetime = Field(..., description="Registration time")


class IdentityRecord(BaseModel):
    """
    A stored registration entry.

    The password is kept in plaintext. This is a mock identity database for a
    client-only prototype, not a pattern to reuse.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Normalized email address")
    password: str = Field(..., description="Plaintext password (mock store only)")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_profile(self) -> UserProfile:
        """Project the record onto its public fields."""
        return UserProfile(
            id=self.id,
            name=self.name,
            email=self.email,
            created_at=self.created_at,
        )


class AuthResponse(BaseModel):
    """Result of a successful register or login."""

    user: UserProfile
    token: str = Field(..., description="Opaque mock session token")
