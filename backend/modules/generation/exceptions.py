"""
Generation module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class SafetyBlockedError(ExternalServiceError):
    """
    Raised when the upstream withheld its output for policy reasons.

    Not retryable: the same prompt is blocked whichever key sends it.
    """

    retryable = False

    def __init__(self, model: str, reason: Optional[str] = None):
        super().__init__(
            "The response was withheld by the content safety filter.",
            service="generative-api",
            code="SAFETY_BLOCKED",
            details={"model": model, "reason": reason},
        )
        self.model = model
        self.reason = reason
