"""
Fallback module.

Tries each key of a credential pool in turn until an upstream call succeeds.

Public API:
- FallbackInvoker: Pool-aware invoker
- execute_with_fallback: Functional core over a single pool
- is_retryable / extract_status_code: Failure classification
- UpstreamFailure: All keys exhausted
"""

from .exceptions import UpstreamFailure
from .interfaces import CredentialOperation, ICredentialOperation
from .invoker import (
    RETRYABLE_STATUS_CODES,
    FallbackInvoker,
    execute_with_fallback,
    extract_status_code,
    is_retryable,
)

__all__ = [
    # Interfaces
    "CredentialOperation",
    "ICredentialOperation",
    # Exceptions
    "UpstreamFailure",
    # Invoker
    "RETRYABLE_STATUS_CODES",
    "FallbackInvoker",
    "execute_with_fallback",
    "extract_status_code",
    "is_retryable",
]
