import os
from types import SimpleNamespace

# Settings must be in place before gptchat.config is imported
os.environ["LOG_TO_FILE"] = "False"
os.environ["LOG_TO_CONSOLE"] = "False"
os.environ["DEFAULT_MODEL_KEY"] = "gpt-4.1-mini"

import pytest
from fastapi.testclient import TestClient

from gptchat.api import create_app
from gptchat.upstream import ChatCompletionClient


class FakeCompletions:
    """Stands in for ``OpenAI().chat.completions``."""

    def __init__(self):
        self.calls = []
        self.response = completion("Hello there!")
        self.error = None

    def create(self, **params):
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return self.response


def completion(content, role="assistant"):
    """Shape of a chat-completions response as far as the relay reads it."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content, role=role))])


@pytest.fixture
def fake_completions():
    return FakeCompletions()


@pytest.fixture
def completion_client(fake_completions):
    openai_client = SimpleNamespace(chat=SimpleNamespace(completions=fake_completions))
    return ChatCompletionClient(client=openai_client)


@pytest.fixture
def client(completion_client):
    return TestClient(create_app(completion_client))


@pytest.fixture
def make_completion():
    return completion
