"""Configuration management for the chat relay application."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing at startup."""


class Config:
    """Application configuration."""

    # OpenAI API Configuration
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")

    # Model selection
    DEFAULT_MODEL_KEY: str = os.getenv("DEFAULT_MODEL_KEY", "gpt-4.1-mini")
    DEFAULT_SYSTEM_PROMPT: str = "You are a helpful AI assistant."

    # FastAPI Server
    FASTAPI_HOST: str = os.getenv("FASTAPI_HOST", "0.0.0.0")
    FASTAPI_PORT: int = int(os.getenv("FASTAPI_PORT", "8000"))
    FRONTEND_DIR: Path = Path(os.getenv("FRONTEND_DIR", str(Path(__file__).parent / "frontend")))

    # Terminal shell
    CHAT_API_URL: str = os.getenv("CHAT_API_URL", "http://127.0.0.1:8000/api/chat")
    REVEAL_DELAY_MS: int = int(os.getenv("REVEAL_DELAY_MS", "20"))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "True").lower() in ("true", "1", "yes")
    LOG_TO_CONSOLE: bool = os.getenv("LOG_TO_CONSOLE", "True").lower() in ("true", "1", "yes")
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", str(Path(__file__).parent.parent / "logs")))

    @classmethod
    def require_openai_api_key(cls) -> str:
        """
        Get the OpenAI API key, failing fast when it is not configured.

        Returns:
            The configured API key

        Raises:
            ConfigurationError: If OPENAI_API_KEY is empty or unset
        """
        if not cls.OPENAI_API_KEY:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set. Add it to your environment or .env file."
            )
        return cls.OPENAI_API_KEY

    @classmethod
    def get_server_config(cls) -> tuple[str, int]:
        """Get FastAPI server configuration."""
        return cls.FASTAPI_HOST, cls.FASTAPI_PORT

    @classmethod
    def get_reveal_delay(cls) -> float:
        """Get the per-character reveal delay in seconds."""
        return cls.REVEAL_DELAY_MS / 1000.0


config = Config()
