"""In-memory chat session that talks to the relay's /api/chat endpoint."""
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Literal, Optional
import requests
from pydantic import BaseModel, Field

from ..config import Config
from ..logging_config import get_logger
from ..profiles import MODEL_PROFILES, ModelProfileRegistry
from .reveal import TypingReveal

logger = get_logger("gptchat.shell.session")

APOLOGY_MESSAGE = "Sorry, I encountered an error while processing your message. Please try again."


class ChatTransportError(RuntimeError):
    """Raised when the relay answers with a non-2xx status or an unusable body."""


class TranscriptEntry(BaseModel):
    """A message as displayed in the shell."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    is_streaming: bool = False
    model: Optional[str] = None


class ChatSession:
    """Transcript, settings and turn handling for one shell session.

    The whole transcript is sent on every turn. ``is_loading`` is only set
    while the request is outstanding; a new ``send`` is refused during that
    window but not while a reply is being revealed.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        http: Any = None,
        reveal_delay: Optional[float] = None,
        on_change: Optional[Callable[[TranscriptEntry], None]] = None
    ):
        """
        Initialize the session.

        Args:
            api_url: Chat endpoint URL (default: CHAT_API_URL)
            http: requests-compatible client with a ``post`` method
            reveal_delay: Seconds per revealed character (default: REVEAL_DELAY_MS)
            on_change: Called whenever an entry is added or updated
        """
        self.api_url = api_url or Config.CHAT_API_URL
        self.http = http or requests.Session()
        self.reveal_delay = reveal_delay
        self.on_change = on_change

        self.messages: List[TranscriptEntry] = []
        self.system_prompt: str = Config.DEFAULT_SYSTEM_PROMPT
        self.selected_model: str = ModelProfileRegistry.get_default_model_key()
        self.is_loading = False
        self._active_reveal: Optional[TypingReveal] = None

    def _notify(self, entry: TranscriptEntry) -> None:
        if self.on_change:
            self.on_change(entry)

    def _append(self, entry: TranscriptEntry) -> TranscriptEntry:
        self.messages.append(entry)
        self._notify(entry)
        return entry

    def build_payload(self, history: List[TranscriptEntry]) -> Dict[str, Any]:
        """Request body for /api/chat; a blank system prompt is left out."""
        payload: Dict[str, Any] = {
            "messages": [{"role": m.role, "content": m.content} for m in history],
            "model": self.selected_model,
        }
        if self.system_prompt.strip():
            payload["systemPrompt"] = self.system_prompt.strip()
        return payload

    def _request_reply(self, history: List[TranscriptEntry]) -> str:
        response = self.http.post(self.api_url, json=self.build_payload(history))

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                raise ChatTransportError(f"API Error: {response.status_code} - Unexpected response body")
            detail = body.get("details") or body.get("error") or "Unknown error"
            raise ChatTransportError(f"API Error: {response.status_code} - {detail}")

        data = response.json()
        if not isinstance(data, dict):
            raise ChatTransportError("Response body was not a JSON object")
        if data.get("error"):
            raise ChatTransportError(data["error"])

        message = data.get("message")
        if not isinstance(message, str):
            raise ChatTransportError("Response contained no message text")
        return message

    def send(self, text: str) -> Optional[TranscriptEntry]:
        """
        Run one turn: post the transcript, then reveal the reply.

        Args:
            text: User input

        Returns:
            The assistant entry added for this turn, or None if the input was
            blank or a request is still outstanding
        """
        content = text.strip()
        if not content or self.is_loading:
            return None

        user_entry = self._append(TranscriptEntry(role="user", content=content))
        history = list(self.messages)
        self.is_loading = True
        logger.info(f"Sending {len(history)} messages to {self.selected_model}")

        try:
            reply = self._request_reply(history)
        except (requests.RequestException, ValueError, ChatTransportError) as e:
            logger.error(f"Error sending message {user_entry.id}: {e}")
            return self._append(TranscriptEntry(role="assistant", content=APOLOGY_MESSAGE))
        finally:
            self.is_loading = False

        assistant_entry = self._append(TranscriptEntry(
            role="assistant",
            content="",
            is_streaming=True,
            model=self.selected_model,
        ))

        def show(prefix: str) -> None:
            assistant_entry.content = prefix
            self._notify(assistant_entry)

        self._active_reveal = TypingReveal(reply, show, self.reveal_delay)
        try:
            self._active_reveal.run()
        finally:
            self._active_reveal = None
            assistant_entry.is_streaming = False
            self._notify(assistant_entry)

        return assistant_entry

    def select_model(self, key: str) -> bool:
        """
        Switch the model used for following turns.

        Returns:
            False if the key is not a known model
        """
        if key not in MODEL_PROFILES:
            return False
        self.selected_model = key
        return True

    def set_system_prompt(self, prompt: str) -> None:
        self.system_prompt = prompt

    def reset_system_prompt(self) -> None:
        self.system_prompt = Config.DEFAULT_SYSTEM_PROMPT

    def clear(self) -> None:
        """Drop the transcript."""
        self.messages = []

    def close(self) -> None:
        """Tear down the session, cancelling any running reveal."""
        if self._active_reveal is not None:
            self._active_reveal.cancel()
