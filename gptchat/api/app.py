"""FastAPI application initialization and configuration."""
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse
from gptchat import __version__
from gptchat.config import Config
from gptchat.logging_config import get_logger
from gptchat.profiles import ModelProfileRegistry
from gptchat.upstream import ChatCompletionClient, get_completion_client
from .routes import chat, models

logger = get_logger("gptchat.api")


def create_app(completion_client: Optional[ChatCompletionClient] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        completion_client: Client used for upstream calls; the shared
            instance is built when omitted, which fails fast with
            ConfigurationError if OPENAI_API_KEY is missing

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(title="GPT Chat Relay", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.mount("/static", StaticFiles(directory=Config.FRONTEND_DIR, check_dir=False), name="static")

    # Inject the upstream client into the chat route
    chat.set_completion_client(completion_client or get_completion_client())

    app.include_router(chat.router)
    app.include_router(models.router)

    @app.exception_handler(RequestValidationError)
    async def chat_validation_error(request: Request, exc: RequestValidationError):
        """Report malformed chat bodies with the chat error shape."""
        if request.url.path != "/api/chat":
            return await request_validation_exception_handler(request, exc)

        logger.warning(f"Rejected malformed chat request: {exc.errors()}")
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        details = f"Invalid request body: {location} {first.get('msg', '')}".strip()
        return chat.error_response(details)

    @app.get("/")
    async def read_root():
        """Serve the chat page."""
        return FileResponse(Config.FRONTEND_DIR / "index.html")

    @app.get("/api/health")
    async def health_check():
        """Check API health status."""
        return {"status": "healthy", "default_model": ModelProfileRegistry.get_default_model_key()}

    logger.info("FastAPI application initialized successfully")
    return app
