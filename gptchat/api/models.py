"""Pydantic models for API requests and responses."""
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..profiles import ChatMessage


class ChatRequest(BaseModel):
    """Chat request model."""

    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage]
    system_prompt: Optional[str] = Field(default=None, alias="systemPrompt")
    model: Optional[str] = None  # unknown keys resolve to the default profile

    @field_validator("model", mode="before")
    @classmethod
    def _ignore_malformed_model(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class ChatResponse(BaseModel):
    """Successful chat reply."""
    message: Optional[str]
    role: str


class ChatErrorResponse(BaseModel):
    """Failed chat reply."""
    error: str
    details: str
