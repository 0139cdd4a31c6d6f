"""Chat completion endpoint."""
from typing import Optional
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from gptchat.api.models import ChatRequest, ChatResponse, ChatErrorResponse
from gptchat.logging_config import get_logger, LoggerAdapter
from gptchat.profiles import build_completion_request, resolve_profile
from gptchat.upstream import ChatCompletionClient, describe_error

logger = get_logger("gptchat.routes.chat")

router = APIRouter(prefix="/api", tags=["chat"])

ERROR_LABEL = "OpenAI API call failed"

# Completion client will be injected by the app
_completion_client: Optional[ChatCompletionClient] = None


def set_completion_client(completion_client: ChatCompletionClient):
    """Inject the shared completion client."""
    global _completion_client
    _completion_client = completion_client


def error_response(details: str) -> JSONResponse:
    """Build the 500 body returned for any failed turn."""
    body = ChatErrorResponse(error=ERROR_LABEL, details=details or "Unknown error")
    return JSONResponse(status_code=500, content=body.model_dump())


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={500: {"model": ChatErrorResponse}},
)
def chat(request: ChatRequest):
    """
    Forward the transcript to the upstream model selected by the client.

    Args:
        request: ChatRequest with the full transcript, optional system prompt
            and model key

    Returns:
        ChatResponse with the reply text and role, or a 500 error body
    """
    profile = resolve_profile(request.model)
    request_logger = LoggerAdapter(logger, {"extra_data": {
        "model_key": request.model,
        "model_id": profile.model_id,
        "messages": len(request.messages),
    }})
    request_logger.info(f"Chat request received for {profile.model_id}")

    try:
        if _completion_client is None:
            raise RuntimeError("Completion client not initialized")

        completion_request = build_completion_request(profile, request.messages, request.system_prompt)
        result = _completion_client.complete(completion_request)
        return ChatResponse(message=result.message, role=result.role)
    except Exception as e:
        request_logger.error(f"Upstream call failed: {type(e).__name__}: {e}", exc_info=True)
        return error_response(describe_error(e))
