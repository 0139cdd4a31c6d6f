"""Interactive terminal chat shell."""
import sys
from typing import Dict, Optional, TextIO

from ..config import Config
from ..profiles import ModelProfileRegistry
from .session import ChatSession, TranscriptEntry

HELP_TEXT = """Commands:
  /models          list available models
  /model <key>     switch model
  /system <text>   set the system prompt
  /system-reset    restore the default system prompt
  /clear           clear the conversation
  /quit            exit
Press Enter to send."""


class TerminalRenderer:
    """Prints transcript changes, writing revealed text as it grows."""

    def __init__(self, out: TextIO = sys.stdout):
        self.out = out
        self._printed: Dict[str, int] = {}

    def __call__(self, entry: TranscriptEntry) -> None:
        if entry.role == "user":
            return

        shown = self._printed.get(entry.id)
        if shown is None:
            label = f"assistant ({entry.model})" if entry.model else "assistant"
            self.out.write(f"{label}> ")
            shown = 0

        self.out.write(entry.content[shown:])
        self._printed[entry.id] = len(entry.content)

        if not entry.is_streaming:
            self.out.write("\n")
            self._printed.pop(entry.id, None)
        self.out.flush()


def handle_command(session: ChatSession, line: str, out: TextIO) -> bool:
    """
    Apply a slash command to the session.

    Returns:
        False when the shell should exit
    """
    command, _, argument = line.partition(" ")
    argument = argument.strip()

    if command == "/quit":
        return False
    if command == "/clear":
        session.clear()
        out.write("Conversation cleared.\n")
    elif command == "/models":
        for model in ModelProfileRegistry.get_available_models():
            marker = "*" if model["id"] == session.selected_model else " "
            out.write(f"{marker} {model['icon']} {model['id']:<14} {model['description']}\n")
    elif command == "/model":
        if session.select_model(argument):
            out.write(f"Model set to {argument}.\n")
        else:
            out.write(f"Unknown model '{argument}'. Use /models to list models.\n")
    elif command == "/system":
        session.set_system_prompt(argument)
        out.write("System prompt updated.\n")
    elif command == "/system-reset":
        session.reset_system_prompt()
        out.write(f"System prompt reset to: {session.system_prompt}\n")
    else:
        out.write(HELP_TEXT + "\n")
    return True


def main(api_url: Optional[str] = None) -> None:
    """Run the shell against a running relay."""
    out = sys.stdout
    session = ChatSession(api_url=api_url or Config.CHAT_API_URL, on_change=TerminalRenderer(out))
    out.write(f"Connected to {session.api_url} using {session.selected_model}. Type /help for commands.\n")

    try:
        while True:
            try:
                line = input("you> ").strip()
            except EOFError:
                break
            if not line:
                continue
            if line.startswith("/"):
                if not handle_command(session, line, out):
                    break
                continue
            session.send(line)
    except KeyboardInterrupt:
        out.write("\n")
    finally:
        session.close()


if __name__ == "__main__":
    main()
