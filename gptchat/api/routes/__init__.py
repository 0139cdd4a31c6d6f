"""API route modules."""
from . import chat, models

__all__ = ['chat', 'models']
