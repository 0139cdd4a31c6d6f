"""Immutable per-model configuration records."""
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict


class TokenLimitField(str, Enum):
    """Name of the parameter that caps completion length.

    Chat models take ``max_tokens``; the reasoning (o-series) models reject it
    and take ``max_completion_tokens`` instead.
    """

    MAX_TOKENS = "max_tokens"
    MAX_COMPLETION_TOKENS = "max_completion_tokens"


class ModelProfile(BaseModel):
    """Upstream call parameters bound to one selectable model key."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    key: str
    model_id: str
    token_limit_field: TokenLimitField
    token_limit: int
    temperature: float
    supports_temperature: bool
    supports_system_prompt: bool

    # Model picker metadata
    display_name: str
    description: str = ""
    context_window: str = ""
    features: Tuple[str, ...] = ()
    icon: str = ""
