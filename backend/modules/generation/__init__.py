"""
Generation module.

Conversational and structured-outline calls to the generative API, each
routed through the fallback invoker.

Public API:
- IGenerationService: Interface for generation operations
- GenerationService: Gemini-backed implementation
- ChatTurn: One turn of conversation history
- SafetyBlockedError: Output withheld by the safety filter
"""

from .interfaces import IGenerationService
from .models import ChatTurn
from .exceptions import SafetyBlockedError
from .prompts import SYSTEM_INSTRUCTION, build_mental_map_prompt
from .service import (
    GenerationService,
    get_generation_service,
    reset_generation_service,
)

__all__ = [
    # Interface
    "IGenerationService",
    # Models
    "ChatTurn",
    # Exceptions
    "SafetyBlockedError",
    # Prompts
    "SYSTEM_INSTRUCTION",
    "build_mental_map_prompt",
    # Service
    "GenerationService",
    "get_generation_service",
    "reset_generation_service",
]
