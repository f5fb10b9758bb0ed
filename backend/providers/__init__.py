"""LLM provider implementations."""

from .base import LLMProvider, ModelConfig
from .gemini import GeminiProvider, PERMISSIVE_SAFETY_SETTINGS

__all__ = ["LLMProvider", "ModelConfig", "GeminiProvider", "PERMISSIVE_SAFETY_SETTINGS"]
