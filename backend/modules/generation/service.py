"""
Generation service implementation.

Thin callers of the fallback invoker: each public method builds the request
once and hands the invoker an operation that runs it with a given key.
"""

import logging
from typing import Any, Optional, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from shared.config import Settings, get_settings
from modules.credentials.exceptions import ConfigurationError
from modules.credentials.resolver import (
    TEXT_POOL,
    VOICE_POOL,
    STRUCTURED_OUTPUT_POOL,
    get_credential_pools,
)
from modules.fallback.invoker import FallbackInvoker
from providers.base import LLMProvider, ModelConfig
from providers.gemini import GeminiProvider

from .exceptions import SafetyBlockedError
from .interfaces import IGenerationService
from .models import ChatTurn
from .prompts import SYSTEM_INSTRUCTION, build_mental_map_prompt

logger = logging.getLogger(__name__)


# Finish reasons meaning the candidate was withheld, not merely truncated
BLOCKED_FINISH_REASONS = frozenset(
    {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII", "IMAGE_SAFETY"}
)


def _enum_name(value: Any) -> str:
    """Normalize an enum member, its name, or 'Enum.NAME' to 'NAME'."""
    name = getattr(value, "name", None)
    if isinstance(name, str):
        return name
    return str(value).rsplit(".", 1)[-1]


def blocked_reason(message: BaseMessage) -> Optional[str]:
    """
    Return why the upstream withheld a response, or None if it did not.

    Looks at the candidate finish reason and at the prompt feedback block
    reason reported in the message's response metadata.
    """
    metadata = getattr(message, "response_metadata", None) or {}

    finish_reason = metadata.get("finish_reason")
    if finish_reason is not None and _enum_name(finish_reason) in BLOCKED_FINISH_REASONS:
        return _enum_name(finish_reason)

    feedback = metadata.get("prompt_feedback")
    if isinstance(feedback, dict):
        block_reason = feedback.get("block_reason")
        if block_reason and _enum_name(block_reason) != "BLOCK_REASON_UNSPECIFIED":
            return f"PROMPT_{_enum_name(block_reason)}"

    return None


def extract_text(message: BaseMessage) -> str:
    """Concatenate the text parts of a chat model response."""
    content = message.content
    if isinstance(content, str):
        return content

    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


def to_messages(history: Sequence[ChatTurn], user_message: str) -> list[BaseMessage]:
    """Convert mentor chat history into LangChain messages."""
    messages: list[BaseMessage] = [SystemMessage(content=SYSTEM_INSTRUCTION)]
    for turn in history:
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.text))
        else:
            messages.append(AIMessage(content=turn.text))
    messages.append(HumanMessage(content=user_message))
    return messages


class GenerationService(IGenerationService):
    """
    Implementation of the mentor's generative calls.

    Uses the text pool for conversation, the structured-output pool for
    mental maps, and exposes the voice pool's first key for realtime voice.
    """

    def __init__(
        self,
        invoker: Optional[FallbackInvoker] = None,
        provider: Optional[LLMProvider] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the generation service.

        Args:
            invoker: Fallback invoker. Defaults to one over the environment's pools.
            provider: LLM provider. Defaults to GeminiProvider.
            settings: Settings. Defaults to get_settings().
        """
        self._settings = settings or get_settings()
        self._invoker = invoker or FallbackInvoker(get_credential_pools())
        self._provider = provider or GeminiProvider()

    async def _generate(self, config: ModelConfig, messages: list[BaseMessage]) -> str:
        llm = self._provider.get_llm(config)
        response = await llm.ainvoke(messages)

        reason = blocked_reason(response)
        if reason is not None:
            logger.warning(f"Model {config.model_id} withheld its response ({reason})")
            raise SafetyBlockedError(config.model_id, reason)

        return extract_text(response)

    async def generate_text_response(
        self,
        history: Sequence[ChatTurn],
        user_message: str,
    ) -> str:
        """Continue a conversation with the mentor."""
        messages = to_messages(history, user_message)

        async def operation(api_key: str) -> str:
            config = ModelConfig(
                model_id=self._settings.text_model,
                api_key=api_key,
                temperature=self._settings.text_temperature,
                max_output_tokens=self._settings.text_max_output_tokens,
                thinking_budget=self._settings.text_thinking_budget,
                permissive_safety=True,
            )
            return await self._generate(config, messages)

        return await self._invoker.invoke(TEXT_POOL, operation)

    async def generate_mental_map(self, topic: str) -> str:
        """Produce an ASCII tree outline for a topic."""
        messages: list[BaseMessage] = [HumanMessage(content=build_mental_map_prompt(topic))]

        async def operation(api_key: str) -> str:
            config = ModelConfig(
                model_id=self._settings.outline_model,
                api_key=api_key,
            )
            return await self._generate(config, messages)

        return await self._invoker.invoke(STRUCTURED_OUTPUT_POOL, operation)

    def get_voice_api_key(self) -> str:
        """Return the first key of the voice pool."""
        pool = self._invoker.pools.get(VOICE_POOL)
        if pool.is_empty:
            raise ConfigurationError(pool.name, env_var=pool.env_var, reason="empty pool")
        return pool.credentials[0]


# Module-level instance getter
_service_instance: Optional[GenerationService] = None


def get_generation_service() -> GenerationService:
    """Get the generation service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = GenerationService()
    return _service_instance


def reset_generation_service() -> None:
    """Reset the generation service singleton (for testing)."""
    global _service_instance
    _service_instance = None
