"""Model picker endpoints."""
from fastapi import APIRouter
from gptchat.profiles import ModelProfileRegistry
from gptchat.logging_config import get_logger

logger = get_logger("gptchat.routes.models")

router = APIRouter(prefix="/api/models", tags=["models"])


@router.get("")
async def get_models():
    """
    Get the models offered in the picker.

    Returns:
        Dictionary with the picker entries and the default model key
    """
    models = ModelProfileRegistry.get_available_models()
    logger.debug(f"Listing {len(models)} models")
    return {
        "models": models,
        "default": ModelProfileRegistry.get_default_model_key()
    }
