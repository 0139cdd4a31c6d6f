from types import SimpleNamespace

import pytest
import requests

from gptchat.shell.session import APOLOGY_MESSAGE, ChatSession


@pytest.fixture
def session(client):
    return ChatSession(api_url="/api/chat", http=client, reveal_delay=0)


def test_send_reveals_reply_into_transcript(session, fake_completions, make_completion):
    fake_completions.response = make_completion("Hi!")
    seen = []
    session.on_change = lambda entry: seen.append((entry.role, entry.content, entry.is_streaming))

    entry = session.send("  hello  ")

    assert [(m.role, m.content) for m in session.messages] == [("user", "hello"), ("assistant", "Hi!")]
    assert entry.is_streaming is False
    assert entry.model == "gpt-4.1-mini"
    assert session.is_loading is False

    revealed = [content for role, content, streaming in seen if role == "assistant" and streaming]
    assert revealed == ["", "", "H", "Hi", "Hi!"]
    assert seen[-1] == ("assistant", "Hi!", False)


def test_full_transcript_and_settings_are_sent(session, fake_completions, make_completion):
    fake_completions.response = make_completion("one")
    session.send("first")
    fake_completions.response = make_completion("two")
    session.select_model("gpt-4.1")
    session.set_system_prompt("Be terse.")

    session.send("second")

    assert fake_completions.calls[-1]["model"] == "gpt-4.1"
    assert fake_completions.calls[-1]["messages"] == [
        {"role": "system", "content": "Be terse."},
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "one"},
        {"role": "user", "content": "second"},
    ]


def test_blank_system_prompt_is_omitted(session):
    session.set_system_prompt("   ")

    payload = session.build_payload([])

    assert "systemPrompt" not in payload
    assert payload["model"] == "gpt-4.1-mini"


def test_blank_input_is_ignored(session, fake_completions):
    assert session.send("   ") is None
    assert session.messages == []
    assert fake_completions.calls == []


def test_send_refused_while_request_outstanding(session, fake_completions):
    session.is_loading = True

    assert session.send("hello") is None
    assert session.messages == []


def test_upstream_failure_leaves_user_message_and_apology(session, fake_completions):
    fake_completions.error = RuntimeError("rate limit exceeded")

    entry = session.send("hello")

    assert entry.content == APOLOGY_MESSAGE
    assert [(m.role, m.content) for m in session.messages] == [("user", "hello"), ("assistant", APOLOGY_MESSAGE)]
    assert session.is_loading is False


def test_network_failure_produces_apology():
    class Unreachable:
        def post(self, url, json):
            raise requests.ConnectionError("refused")

    session = ChatSession(api_url="http://127.0.0.1:9/api/chat", http=Unreachable(), reveal_delay=0)

    entry = session.send("hello")

    assert entry.content == APOLOGY_MESSAGE
    assert len(session.messages) == 2


def test_null_reply_produces_apology(session, fake_completions, make_completion):
    fake_completions.response = make_completion(None)

    assert session.send("hello").content == APOLOGY_MESSAGE


def test_select_model_rejects_unknown_key(session):
    assert session.select_model("gpt-9") is False
    assert session.selected_model == "gpt-4.1-mini"
    assert session.select_model("o3") is True


def test_clear_and_reset_system_prompt(session, fake_completions):
    session.send("hello")
    session.set_system_prompt("Be terse.")

    session.clear()
    session.reset_system_prompt()

    assert session.messages == []
    assert session.system_prompt == "You are a helpful AI assistant."


def test_close_cancels_running_reveal(session, fake_completions, make_completion):
    fake_completions.response = make_completion("abcdef")

    def on_change(entry):
        if entry.role == "assistant" and entry.content == "ab":
            session.close()

    session.on_change = on_change
    entry = session.send("hello")

    assert entry.content == "ab"
    assert entry.is_streaming is False


@pytest.mark.parametrize("status_code", [200, 502])
def test_non_object_body_produces_apology_and_unblocks_session(status_code):
    class ListBody:
        def post(self, url, json):
            return SimpleNamespace(status_code=status_code, json=lambda: ["unexpected"])

    session = ChatSession(api_url="http://127.0.0.1:9/api/chat", http=ListBody(), reveal_delay=0)

    entry = session.send("hello")

    assert entry.content == APOLOGY_MESSAGE
    assert session.is_loading is False
    assert session.send("again").content == APOLOGY_MESSAGE


def test_unexpected_error_still_clears_loading():
    class Broken:
        def post(self, url, json):
            raise KeyError("boom")

    session = ChatSession(api_url="http://127.0.0.1:9/api/chat", http=Broken(), reveal_delay=0)

    with pytest.raises(KeyError):
        session.send("hello")
    assert session.is_loading is False
