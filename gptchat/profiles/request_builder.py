"""Builds the upstream completion call from a profile and a transcript."""
from typing import Any, Dict, List, Literal, Optional, Sequence
from pydantic import BaseModel, ConfigDict, model_validator

from .base import ModelProfile, TokenLimitField


class ChatMessage(BaseModel):
    """One transcript entry."""

    role: Literal["system", "user", "assistant"]
    content: str


class CompletionRequest(BaseModel):
    """Parameters for one chat-completions call.

    Exactly one of the two token-limit fields is set; ``temperature`` is left
    as None when the model does not accept it, and unset fields are dropped
    from :meth:`to_params` rather than sent as nulls.
    """

    model_config = ConfigDict(frozen=True)

    model: str
    messages: List[ChatMessage]
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    temperature: Optional[float] = None

    @model_validator(mode="after")
    def _single_token_limit(self) -> "CompletionRequest":
        if (self.max_tokens is None) == (self.max_completion_tokens is None):
            raise ValueError("exactly one of max_tokens or max_completion_tokens must be set")
        return self

    @property
    def token_limit_field(self) -> TokenLimitField:
        if self.max_tokens is not None:
            return TokenLimitField.MAX_TOKENS
        return TokenLimitField.MAX_COMPLETION_TOKENS

    def to_params(self) -> Dict[str, Any]:
        """Keyword arguments for ``client.chat.completions.create``."""
        return self.model_dump(exclude_none=True)


def build_completion_request(
    profile: ModelProfile,
    messages: Sequence[ChatMessage],
    system_prompt: Optional[str] = None
) -> CompletionRequest:
    """
    Assemble the upstream request for one turn.

    Args:
        profile: Resolved model profile
        messages: Conversation transcript, oldest first
        system_prompt: Optional system prompt from the client; blank prompts
            are treated as absent

    Returns:
        CompletionRequest ready to send
    """
    chat_messages = list(messages)
    if profile.supports_system_prompt and system_prompt and system_prompt.strip():
        chat_messages = [ChatMessage(role="system", content=system_prompt), *chat_messages]

    params: Dict[str, Any] = {
        "model": profile.model_id,
        "messages": chat_messages,
        profile.token_limit_field.value: profile.token_limit,
    }

    if profile.supports_temperature:
        params["temperature"] = profile.temperature

    return CompletionRequest(**params)
