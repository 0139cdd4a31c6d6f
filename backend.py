"""FastAPI backend for the chat relay - Main entry point."""
from gptchat.api import create_app
from gptchat.config import Config

# Create the FastAPI application; fails fast without OPENAI_API_KEY
app = create_app()


def main():
    import uvicorn
    host, port = Config.get_server_config()
    uvicorn.run(
        "backend:app",
        host=host,
        port=port,
        reload=True,
        reload_dirs=[".", "gptchat"],
        log_level="warning"
    )


if __name__ == "__main__":
    main()
