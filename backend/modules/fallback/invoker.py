"""
Fallback invocation across a pool of API keys.

Each key in the pool is tried in order until one call succeeds. Rate limits
and server errors move on to the next key; any other status aborts at once,
since a malformed request fails the same way whichever key sends it.

Attempts are strictly sequential: key N+1 is never tried before key N's call
has finished. There is no delay between attempts.
"""

import logging
from typing import Any, Optional

from modules.credentials.exceptions import ConfigurationError
from modules.credentials.models import CredentialPool, CredentialPools
from modules.credentials.resolver import redact_credential

from .exceptions import UpstreamFailure
from .interfaces import CredentialOperation, T

logger = logging.getLogger(__name__)


RETRYABLE_STATUS_CODES = frozenset({429, 500, 503})

_STATUS_ATTRIBUTES = ("status_code", "code", "status")


def _as_status(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value)
    return None


def extract_status_code(exc: BaseException) -> Optional[int]:
    """
    Find an HTTP-like status code on an exception.

    Checks ``status_code``, ``code`` and ``status`` on the exception and on
    its ``response`` attribute, then follows the ``__cause__`` /
    ``__context__`` chain. Non-integer values (e.g. gRPC status names) are
    ignored.
    """
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))

        for attr in _STATUS_ATTRIBUTES:
            status = _as_status(getattr(current, attr, None))
            if status is not None:
                return status

        response = getattr(current, "response", None)
        if response is not None:
            for attr in ("status_code", "status"):
                status = _as_status(getattr(response, attr, None))
                if status is not None:
                    return status

        current = current.__cause__ or current.__context__
    return None


def is_retryable(exc: BaseException) -> bool:
    """
    Decide whether a failed attempt should move on to the next key.

    An explicit boolean ``retryable`` attribute wins. Otherwise the error is
    retryable when it has no status code or its code is 429, 500 or 503.
    """
    explicit = getattr(exc, "retryable", None)
    if isinstance(explicit, bool):
        return explicit

    status = extract_status_code(exc)
    return status is None or status in RETRYABLE_STATUS_CODES


async def execute_with_fallback(
    pool: CredentialPool,
    operation: CredentialOperation[T],
) -> T:
    """
    Run an operation with each key of a pool until one succeeds.

    Args:
        pool: The pool to draw keys from
        operation: Async callable taking one API key

    Returns:
        The result of the first successful call

    Raises:
        ConfigurationError: If the pool has no keys (operation is not called)
        UpstreamFailure: If every key failed with a retryable error
        Exception: The original error, unwrapped, on a terminal failure
    """
    if pool.is_empty:
        raise ConfigurationError(pool.name, env_var=pool.env_var, reason="empty pool")

    total = len(pool.credentials)
    last_error: Optional[Exception] = None

    for index, api_key in enumerate(pool.credentials, start=1):
        try:
            result = await operation(api_key)
        except Exception as e:
            last_error = e
            status = extract_status_code(e)
            if not is_retryable(e):
                logger.warning(
                    f"Key {index}/{total} ({redact_credential(api_key)}) in pool "
                    f"'{pool.name}' failed with non-retryable {type(e).__name__} "
                    f"(status={status}); not trying remaining keys"
                )
                raise
            logger.warning(
                f"Key {index}/{total} ({redact_credential(api_key)}) in pool "
                f"'{pool.name}' failed with {type(e).__name__} (status={status}); "
                f"trying next key"
            )
            continue

        if index > 1:
            logger.info(f"Pool '{pool.name}' succeeded on key {index}/{total}")
        return result

    raise UpstreamFailure(pool.name, last_error, attempts=total) from last_error


class FallbackInvoker:
    """
    Invokes operations against named credential pools.

    The pools are injected at construction; the invoker never reads the
    environment itself.
    """

    def __init__(self, pools: CredentialPools):
        """
        Initialize the invoker.

        Args:
            pools: Immutable pool registry built at start-up
        """
        self._pools = pools

    @property
    def pools(self) -> CredentialPools:
        return self._pools

    async def invoke(self, pool_name: str, operation: CredentialOperation[T]) -> T:
        """Run an operation against the named pool. See execute_with_fallback."""
        pool = self._pools.get(pool_name)
        return await execute_with_fallback(pool, operation)
