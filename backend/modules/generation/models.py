"""
Generation module data models.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    """One entry of conversation history."""

    role: Literal["user", "model"] = Field(..., description="Who produced the turn")
    text: str = Field(..., description="Turn content")

    model_config = {"frozen": True}
