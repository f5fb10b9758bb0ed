"""
Environment lookup strategies.

A lookup takes a variable name and returns its value, or None if the name is
not set in that namespace. The resolver tries an ordered list of lookups and
keeps the first non-empty answer, so the same code can read keys exposed by
the runtime process (``API_KEY_A1``) or injected by a bundler under a public
prefix (``VITE_API_KEY_A1``).
"""

import os
from typing import Callable, Iterable, Mapping, Optional, Sequence

EnvLookup = Callable[[str], Optional[str]]


def process_env_lookup(name: str) -> Optional[str]:
    """Read a variable from the runtime process environment."""
    return os.environ.get(name)


def prefixed_env_lookup(prefix: str) -> EnvLookup:
    """
    Build a lookup that reads ``{prefix}{name}`` from the process environment.

    An empty prefix is equivalent to process_env_lookup.
    """
    if not prefix:
        return process_env_lookup

    def lookup(name: str) -> Optional[str]:
        return os.environ.get(f"{prefix}{name}")

    lookup.__name__ = f"prefixed_env_lookup[{prefix}]"
    return lookup


def mapping_lookup(values: Mapping[str, str]) -> EnvLookup:
    """Build a lookup over an explicit mapping (tests, injected config)."""

    def lookup(name: str) -> Optional[str]:
        return values.get(name)

    return lookup


def default_lookups(prefixes: Iterable[str]) -> list[EnvLookup]:
    """Build the ordered lookup list for the configured namespace prefixes."""
    return [prefixed_env_lookup(prefix) for prefix in prefixes]


def first_match(name: str, lookups: Sequence[EnvLookup]) -> Optional[str]:
    """
    Try each lookup in order and return the first non-empty value.

    Values are stripped of surrounding whitespace; a blank value counts as
    absent and the next lookup is tried.
    """
    for lookup in lookups:
        value = lookup(name)
        if value is not None and value.strip():
            return value.strip()
    return None
