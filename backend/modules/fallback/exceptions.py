"""
Fallback module exceptions.
"""

from shared.exceptions import ExternalServiceError


class UpstreamFailure(ExternalServiceError):
    """Raised when every key in a pool failed with a retryable error."""

    def __init__(self, pool: str, last_error: BaseException, attempts: int):
        last_message = str(last_error) or type(last_error).__name__
        super().__init__(
            f"All API keys in the '{pool}' pool failed. Last error: {last_message}",
            service="generative-api",
            code="UPSTREAM_FAILURE",
            details={
                "pool": pool,
                "attempts": attempts,
                "last_error": last_message,
                "last_error_type": type(last_error).__name__,
            },
        )
        self.pool = pool
        self.last_error = last_error
        self.attempts = attempts
