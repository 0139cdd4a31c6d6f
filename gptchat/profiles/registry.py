"""Lookup table from client-selected model keys to model profiles."""
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from .base import ModelProfile, TokenLimitField
from ..config import Config
from ..logging_config import get_logger

logger = get_logger("gptchat.profiles.registry")


def _chat_profile(key: str, token_limit: int, **display: Any) -> ModelProfile:
    return ModelProfile(
        key=key,
        model_id=key,
        token_limit_field=TokenLimitField.MAX_TOKENS,
        token_limit=token_limit,
        temperature=0.7,
        supports_temperature=True,
        supports_system_prompt=True,
        **display,
    )


def _reasoning_profile(key: str, token_limit: int, **display: Any) -> ModelProfile:
    # o-series models reject an explicit temperature
    return ModelProfile(
        key=key,
        model_id=key,
        token_limit_field=TokenLimitField.MAX_COMPLETION_TOKENS,
        token_limit=token_limit,
        temperature=1.0,
        supports_temperature=False,
        supports_system_prompt=True,
        **display,
    )


MODEL_PROFILES: Mapping[str, ModelProfile] = MappingProxyType({
    profile.key: profile
    for profile in (
        _chat_profile(
            "gpt-4.1", 32_768,
            display_name="GPT-4.1",
            description="Flagship model for large contexts and complex reasoning",
            context_window="1M tokens",
            features=("Multimodal", "Coding", "Complex instructions"),
            icon="🚀",
        ),
        _chat_profile(
            "gpt-4.1-mini", 16_384,
            display_name="GPT-4.1 Mini",
            description="Lightweight model tuned for speed and cost",
            context_window="65K tokens",
            features=("Fast", "Cost efficient", "High volume"),
            icon="⚡",
        ),
        _chat_profile(
            "gpt-4o", 16_384,
            display_name="GPT-4o",
            description="General purpose multimodal chat model",
            context_window="128K tokens",
            features=("Multimodal", "General purpose"),
            icon="🌐",
        ),
        _chat_profile(
            "gpt-4o-mini", 8_192,
            display_name="GPT-4o Mini",
            description="Small multimodal chat model",
            context_window="128K tokens",
            features=("Fast", "Cost efficient"),
            icon="💡",
        ),
        _reasoning_profile(
            "o4-mini", 65_536,
            display_name="o4-mini",
            description="Small reasoning model with multimodal input and tool calls",
            context_window="200K/100K tokens",
            features=("Tool calls", "Multimodal", "Real-time analysis"),
            icon="🧠",
        ),
        _reasoning_profile(
            "o3", 32_768,
            display_name="o3",
            description="Strongest reasoning model with private chain of thought",
            context_window="200K/100K tokens",
            features=("Deep reasoning", "Science and math", "Complex decisions"),
            icon="🎯",
        ),
        _reasoning_profile(
            "o3-mini", 65_536,
            display_name="o3-mini",
            description="Compact reasoning model",
            context_window="200K/100K tokens",
            features=("Reasoning", "Cost efficient"),
            icon="🔬",
        ),
    )
})

DEFAULT_MODEL_KEY = "gpt-4.1-mini"


def resolve_profile(key: Any) -> ModelProfile:
    """
    Resolve a client-supplied model key to its profile.

    Missing, unknown or non-string keys fall back to the default profile;
    this never raises.

    Args:
        key: Model key sent by the client

    Returns:
        The bound ModelProfile, or the default one
    """
    if isinstance(key, str) and key in MODEL_PROFILES:
        return MODEL_PROFILES[key]

    if key is not None:
        logger.warning(f"Unknown model key {key!r}, falling back to {ModelProfileRegistry.get_default_model_key()}")
    return MODEL_PROFILES[ModelProfileRegistry.get_default_model_key()]


class ModelProfileRegistry:
    """Read-only view over the profile table for the model picker."""

    # Accepted by /api/chat but not offered in the picker
    _hidden_keys = {"gpt-4o", "gpt-4o-mini", "o3-mini"}

    @classmethod
    def get_default_model_key(cls) -> str:
        """
        Get the key of the fallback profile.

        DEFAULT_MODEL_KEY from the environment wins when it names a known
        profile; otherwise the built-in default is used.

        Returns:
            A key present in MODEL_PROFILES
        """
        if Config.DEFAULT_MODEL_KEY in MODEL_PROFILES:
            return Config.DEFAULT_MODEL_KEY
        return DEFAULT_MODEL_KEY

    @classmethod
    def get_available_models(cls) -> List[Dict[str, Any]]:
        """
        Get the models shown in the picker.

        Returns:
            List of dicts with key, display_name, description, context_window,
            features, icon and reasoning flag
        """
        models = []
        for key, profile in MODEL_PROFILES.items():
            if key in cls._hidden_keys:
                continue

            models.append({
                "id": key,
                "name": profile.display_name,
                "description": profile.description,
                "context_tokens": profile.context_window,
                "features": list(profile.features),
                "icon": profile.icon,
                "reasoning": profile.token_limit_field is TokenLimitField.MAX_COMPLETION_TOKENS,
            })

        return models
