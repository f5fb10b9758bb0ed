"""
Credentials module exceptions.
"""

from typing import Optional

from shared.exceptions import MentorError


class ConfigurationError(MentorError):
    """Raised when no usable API key is configured for a pool."""

    def __init__(self, pool: str, env_var: Optional[str] = None, reason: Optional[str] = None):
        hint = f" Set {env_var} in the environment." if env_var else ""
        super().__init__(
            f"No API key available for the '{pool}' pool.{hint}",
            code="CONFIGURATION_ERROR",
            details={"pool": pool, "env_var": env_var, "reason": reason},
        )
        self.pool = pool
        self.env_var = env_var
