"""Timed character reveal used to make a complete reply look typed out."""
import threading
from typing import Callable, Iterator, Optional

from ..config import Config
from ..logging_config import get_logger

logger = get_logger("gptchat.shell.reveal")


def reveal_prefixes(text: str) -> Iterator[str]:
    """
    Yield every prefix of ``text`` from the empty string to the full text.

    A text of length N produces N + 1 prefixes in increasing length.
    """
    for i in range(len(text) + 1):
        yield text[:i]


class TypingReveal:
    """Reveals a finished reply one character per fixed interval.

    The reveal is independent of the network call: it only starts once the
    whole reply is in hand. ``cancel()`` may be called from another thread and
    stops the reveal at the next step.
    """

    def __init__(self, text: str, on_update: Callable[[str], None], delay: Optional[float] = None):
        """
        Initialize the reveal.

        Args:
            text: Full reply text
            on_update: Called with each displayed prefix
            delay: Seconds between characters (default: REVEAL_DELAY_MS)
        """
        self.text = text
        self.on_update = on_update
        self.delay = Config.get_reveal_delay() if delay is None else delay
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop the reveal before the next character."""
        self._cancelled.set()

    def run(self) -> bool:
        """
        Run the reveal to completion.

        Returns:
            True if the full text was shown, False if cancelled first
        """
        for prefix in reveal_prefixes(self.text):
            if self._cancelled.is_set():
                logger.debug(f"Reveal cancelled at {len(prefix)}/{len(self.text)} characters")
                return False
            self.on_update(prefix)
            if len(prefix) < len(self.text) and self._cancelled.wait(self.delay):
                logger.debug(f"Reveal cancelled at {len(prefix)}/{len(self.text)} characters")
                return False
        return True
