"""Google Gemini LLM provider implementation.

Handles Google's Gemini models via the langchain-google-genai package.
Requires a valid API key for authentication.
"""

from typing import Any

from langchain_google_genai import (
    ChatGoogleGenerativeAI,
    HarmBlockThreshold,
    HarmCategory,
)

from .base import LLMProvider, ModelConfig


PERMISSIVE_SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
}


class GeminiProvider(LLMProvider):
    """Provider for Google Gemini models.

    Gemini models use the ChatGoogleGenerativeAI client from langchain-google-genai.
    Unlike local providers, this requires a valid API key.

    Models used by the mentor services:
        - gemini-3-pro-preview (conversational mentor)
        - gemini-2.5-flash (fast, good for structured text)
    """

    def get_llm(self, config: ModelConfig) -> ChatGoogleGenerativeAI:
        """Return a ChatGoogleGenerativeAI client configured for Gemini.

        Args:
            config: Model configuration with the API key for this attempt

        Returns:
            A configured ChatGoogleGenerativeAI client

        Raises:
            ValueError: If api_key is not provided
        """
        if not config.api_key:
            raise ValueError(
                "Google AI API key is required. "
                "Set API_KEY (or a pool key such as API_KEY_A1) in the environment."
            )

        kwargs: dict[str, Any] = {
            "model": config.model_id,
            "google_api_key": config.api_key,
            # 1 disables the client's own retries; fallback across keys replaces them.
            "max_retries": 1,
        }
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        if config.max_output_tokens is not None:
            kwargs["max_output_tokens"] = config.max_output_tokens
        if config.thinking_budget is not None:
            kwargs["thinking_budget"] = config.thinking_budget
        if config.permissive_safety:
            kwargs["safety_settings"] = PERMISSIVE_SAFETY_SETTINGS

        return ChatGoogleGenerativeAI(**kwargs)
