"""Model profiles and request shaping for the upstream completion API."""

from .base import ModelProfile, TokenLimitField
from .registry import MODEL_PROFILES, ModelProfileRegistry, resolve_profile
from .request_builder import ChatMessage, CompletionRequest, build_completion_request

__all__ = [
    'ModelProfile',
    'TokenLimitField',
    'MODEL_PROFILES',
    'ModelProfileRegistry',
    'resolve_profile',
    'ChatMessage',
    'CompletionRequest',
    'build_completion_request',
]
