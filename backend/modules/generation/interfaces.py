"""
Generation module interface.

The application shell depends on IGenerationService, not the concrete
implementation, so it can be replaced by a fake in UI tests.
"""

from typing import Protocol, Sequence, runtime_checkable

from .models import ChatTurn


@runtime_checkable
class IGenerationService(Protocol):
    """Interface for the mentor's generative calls."""

    async def generate_text_response(
        self,
        history: Sequence[ChatTurn],
        user_message: str,
    ) -> str:
        """
        Continue a conversation with the mentor.

        Args:
            history: Previous turns, oldest first
            user_message: The new user message

        Returns:
            The mentor's reply text

        Raises:
            ConfigurationError: If the text pool has no keys
            UpstreamFailure: If every key failed transiently
            SafetyBlockedError: If the reply was withheld
        """
        ...

    async def generate_mental_map(self, topic: str) -> str:
        """
        Produce an ASCII tree outline for a topic.

        Args:
            topic: Subject of the outline

        Returns:
            The outline text

        Raises:
            ConfigurationError: If the structured-output pool has no keys
            UpstreamFailure: If every key failed transiently
            SafetyBlockedError: If the outline was withheld
        """
        ...

    def get_voice_api_key(self) -> str:
        """
        Return the first key of the voice pool for a realtime voice client.

        Raises:
            ConfigurationError: If the voice pool has no keys
        """
        ...
