"""API module for the chat relay."""
from .app import create_app
from .models import ChatRequest, ChatResponse, ChatErrorResponse

__all__ = ['create_app', 'ChatRequest', 'ChatResponse', 'ChatErrorResponse']
