"""
Credential pool resolution.

Reads numbered API key variables from the environment, drops placeholders
and duplicates, and falls back to the master key when a pool has no
candidates of its own.
"""

import logging
from typing import Optional, Sequence

from shared.config import Settings, get_settings

from .lookups import EnvLookup, default_lookups, first_match
from .models import CredentialPool, CredentialPools, PoolSpec

logger = logging.getLogger(__name__)


TEXT_POOL = "text"
VOICE_POOL = "voice"
STRUCTURED_OUTPUT_POOL = "structured-output"


def standard_pool_specs(master_var: str = "API_KEY") -> tuple[PoolSpec, ...]:
    """
    The three pools used by the mentor application.

    text: conversational chat, voice: realtime voice sessions,
    structured-output: mental map outlines.
    """
    return (
        PoolSpec(name=TEXT_POOL, env_prefix=f"{master_var}_A", max_candidates=3),
        PoolSpec(name=VOICE_POOL, env_prefix=f"{master_var}_B", max_candidates=3),
        PoolSpec(name=STRUCTURED_OUTPUT_POOL, env_prefix=f"{master_var}_C", max_candidates=1),
    )


def is_plausible(value: Optional[str], min_length: int) -> bool:
    """A credential is plausible when it is longer than min_length characters."""
    return value is not None and len(value) > min_length


def redact_credential(value: str) -> str:
    """Return a short trailing fragment of a credential, safe for logs."""
    if len(value) <= 8:
        return "..."
    return f"...{value[-4:]}"


def resolve_pool(
    prefix: str,
    max_candidates: int,
    lookups: Sequence[EnvLookup],
    master_var: str = "API_KEY",
    min_length: int = 10,
) -> tuple[str, ...]:
    """
    Resolve the ordered credentials for one pool.

    Args:
        prefix: Variable prefix; candidates are ``{prefix}1``..``{prefix}{max_candidates}``
        max_candidates: Number of numbered variables to look up
        lookups: Ordered lookup strategies, first non-empty match wins
        master_var: Variable holding the master key used when no candidate passes
        min_length: Values of this length or shorter are rejected

    Returns:
        Deduplicated credentials in variable order, ``(master,)``, or an empty tuple
    """
    candidates: list[str] = []
    for index in range(1, max_candidates + 1):
        name = f"{prefix}{index}"
        value = first_match(name, lookups)
        if value is None:
            continue
        if not is_plausible(value, min_length):
            logger.debug(f"Ignoring {name}: value too short to be a real key")
            continue
        if value not in candidates:
            candidates.append(value)

    if candidates:
        return tuple(candidates)

    master = first_match(master_var, lookups)
    if is_plausible(master, min_length):
        logger.debug(f"No keys found for {prefix}*, using {master_var}")
        return (master,)

    return ()


def build_credential_pools(
    settings: Optional[Settings] = None,
    lookups: Optional[Sequence[EnvLookup]] = None,
    specs: Optional[Sequence[PoolSpec]] = None,
) -> CredentialPools:
    """
    Build the immutable pool registry.

    Args:
        settings: Settings to read the master variable, threshold and prefixes from
        lookups: Lookup strategies. Defaults to one per configured namespace prefix.
        specs: Pools to build. Defaults to the standard text/voice/structured-output pools.
    """
    settings = settings or get_settings()
    if lookups is None:
        lookups = default_lookups(settings.credential_env_prefixes)
    if specs is None:
        specs = standard_pool_specs(settings.credential_master_var)

    pools = []
    for spec in specs:
        credentials = resolve_pool(
            spec.env_prefix,
            spec.max_candidates,
            lookups,
            master_var=settings.credential_master_var,
            min_length=settings.credential_min_length,
        )
        if not credentials:
            logger.warning(
                f"Pool '{spec.name}' has no usable keys "
                f"(checked {spec.env_prefix}1..{spec.max_candidates} and {settings.credential_master_var})"
            )
        pools.append(
            CredentialPool(
                name=spec.name,
                env_var=spec.first_env_var,
                credentials=credentials,
            )
        )

    return CredentialPools(pools=tuple(pools))


# Module-level instance getter
_pools_instance: Optional[CredentialPools] = None


def get_credential_pools() -> CredentialPools:
    """Get the pools built from the process environment (built once)."""
    global _pools_instance
    if _pools_instance is None:
        _pools_instance = build_credential_pools()
    return _pools_instance


def reset_credential_pools() -> None:
    """Reset the cached pools (for testing)."""
    global _pools_instance
    _pools_instance = None
