"""Terminal client for the chat relay."""
from .reveal import TypingReveal, reveal_prefixes
from .session import APOLOGY_MESSAGE, ChatSession, ChatTransportError, TranscriptEntry

__all__ = [
    'TypingReveal',
    'reveal_prefixes',
    'APOLOGY_MESSAGE',
    'ChatSession',
    'ChatTransportError',
    'TranscriptEntry',
]
