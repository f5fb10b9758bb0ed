"""
Credentials module.

Resolves named pools of API keys from the environment.

Public API:
- CredentialPool / CredentialPools: Immutable pool models
- resolve_pool / build_credential_pools: Pool resolution
- Lookup strategies for the runtime and bundle namespaces
- ConfigurationError: No usable key for a pool
"""

from .exceptions import ConfigurationError
from .lookups import (
    EnvLookup,
    process_env_lookup,
    prefixed_env_lookup,
    mapping_lookup,
    default_lookups,
    first_match,
)
from .models import PoolSpec, CredentialPool, CredentialPools
from .resolver import (
    TEXT_POOL,
    VOICE_POOL,
    STRUCTURED_OUTPUT_POOL,
    standard_pool_specs,
    is_plausible,
    redact_credential,
    resolve_pool,
    build_credential_pools,
    get_credential_pools,
    reset_credential_pools,
)

__all__ = [
    # Exceptions
    "ConfigurationError",
    # Lookups
    "EnvLookup",
    "process_env_lookup",
    "prefixed_env_lookup",
    "mapping_lookup",
    "default_lookups",
    "first_match",
    # Models
    "PoolSpec",
    "CredentialPool",
    "CredentialPools",
    # Resolution
    "TEXT_POOL",
    "VOICE_POOL",
    "STRUCTURED_OUTPUT_POOL",
    "standard_pool_specs",
    "is_plausible",
    "redact_credential",
    "resolve_pool",
    "build_credential_pools",
    "get_credential_pools",
    "reset_credential_pools",
]
