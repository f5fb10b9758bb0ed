"""Base classes and models for LLM providers."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel


class ModelConfig(BaseModel):
    """Configuration for a single generation call.

    A fresh config is built for every attempt, since each attempt may use a
    different API key from the pool.

    Attributes:
        model_id: Model identifier (e.g., "gemini-2.5-flash")
        api_key: API key for this attempt
        temperature: Sampling temperature (None for the model default)
        max_output_tokens: Upper bound on generated tokens (None for the model default)
        thinking_budget: Reasoning token budget (None to leave unset)
        permissive_safety: Set every safety category to its most permissive threshold
    """

    model_config = {"frozen": True}

    model_id: str
    api_key: str = ""
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    thinking_budget: Optional[int] = None
    permissive_safety: bool = False


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations are thin wrappers returning a LangChain chat model
    configured for one call.
    """

    @abstractmethod
    def get_llm(self, config: ModelConfig) -> Any:
        """Return a configured chat model for the given config.

        Args:
            config: Model configuration including the API key to use

        Returns:
            A LangChain chat model supporting ``ainvoke``
        """
        pass
