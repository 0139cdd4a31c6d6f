"""Chat-completions client wrapping the OpenAI SDK."""
from typing import Any, Optional
from openai import OpenAI
from pydantic import BaseModel

from .config import Config
from .logging_config import get_logger
from .profiles import CompletionRequest

logger = get_logger("gptchat.upstream")


class UpstreamResponseError(RuntimeError):
    """Raised when the completion response has no usable first choice."""


class CompletionResult(BaseModel):
    """Normalized completion: the reply text and its role."""

    message: Optional[str]
    role: str


def describe_error(exc: BaseException) -> str:
    """
    Best-effort human readable detail for a failed call.

    OpenAI status errors keep the provider's error object in ``body``; its
    ``message`` is the short detail. Their own ``message`` attribute is
    prefixed with the status ("Error code: 429 - {...}") and is used only when
    the body has none. Anything else falls back to ``str(exc)``.
    """
    body = getattr(exc, "body", None)
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]

    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or "Unknown error"


class ChatCompletionClient:
    """Issues one blocking chat-completions call per turn."""

    def __init__(self, client: Any = None, api_key: Optional[str] = None):
        """
        Initialize the completion client.

        Args:
            client: Pre-built OpenAI-compatible client (used by tests)
            api_key: API key; defaults to the required OPENAI_API_KEY setting
        """
        if client is None:
            client = OpenAI(api_key=api_key or Config.require_openai_api_key())
        self.client = client
        logger.info("Chat completion client initialized")

    def complete(self, request: CompletionRequest) -> CompletionResult:
        """
        Send the request and normalize the first choice.

        Args:
            request: Shaped completion request

        Returns:
            CompletionResult with the first choice's content and role

        Raises:
            UpstreamResponseError: If the response carries no first message
        """
        params = request.to_params()
        logger.info(
            f"Calling {request.model} with {len(request.messages)} messages "
            f"({request.token_limit_field.value}={params[request.token_limit_field.value]}, "
            f"temperature={'omitted' if request.temperature is None else request.temperature})"
        )

        completion = self.client.chat.completions.create(**params)

        choices = getattr(completion, "choices", None)
        if not choices:
            raise UpstreamResponseError("Completion response contained no choices")

        message = getattr(choices[0], "message", None)
        if message is None:
            raise UpstreamResponseError("Completion response choice contained no message")

        result = CompletionResult(message=message.content, role=message.role)
        logger.info(f"Received {len(result.message or '')} characters from {request.model}")
        return result


# Process-wide instance, built once at startup
_completion_client: Optional[ChatCompletionClient] = None


def get_completion_client() -> ChatCompletionClient:
    """Get or create the shared completion client."""
    global _completion_client
    if _completion_client is None:
        _completion_client = ChatCompletionClient()
    return _completion_client
