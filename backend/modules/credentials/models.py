"""
Credentials module data models.

Pools are frozen once built; the registry hands out the same immutable
objects for the lifetime of the process.
"""

from pydantic import BaseModel, Field

from .exceptions import ConfigurationError


class PoolSpec(BaseModel):
    """
    Static description of a credential pool.

    Candidates are read from ``{env_prefix}1`` .. ``{env_prefix}{max_candidates}``.
    """

    name: str = Field(..., description="Pool name (e.g., 'text')")
    env_prefix: str = Field(..., description="Environment variable prefix (e.g., 'API_KEY_A')")
    max_candidates: int = Field(..., ge=1, description="Number of numbered variables to try")

    model_config = {"frozen": True}

    @property
    def first_env_var(self) -> str:
        return f"{self.env_prefix}1"


class CredentialPool(BaseModel):
    """An ordered, deduplicated sequence of credentials for one kind of call."""

    name: str = Field(..., description="Pool name")
    env_var: str = Field(..., description="Primary environment variable feeding this pool")
    credentials: tuple[str, ...] = Field(default=(), description="Usable credentials, in order")

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.credentials


class CredentialPools(BaseModel):
    """
    Immutable registry of credential pools.

    Built once at start-up and passed to whatever needs to invoke the
    upstream API, rather than read from module-level state.
    """

    pools: tuple[CredentialPool, ...] = Field(default=())

    model_config = {"frozen": True}

    @property
    def names(self) -> list[str]:
        return [pool.name for pool in self.pools]

    def get(self, name: str) -> CredentialPool:
        """
        Get a pool by name.

        Raises:
            ConfigurationError: If no pool with that name was configured
        """
        for pool in self.pools:
            if pool.name == name:
                return pool
        raise ConfigurationError(name, reason="unknown pool")
