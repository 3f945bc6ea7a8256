"""Tests for the chat assistant adapter and the /chat endpoint."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

import storefront.services.assistant as assistant_module
from storefront.errors import ErrorKind
from storefront.services.assistant import SYSTEM_PROMPT, AssistantSettings, ChatAssistant


@pytest.fixture
def assistant() -> ChatAssistant:
    return ChatAssistant(
        AssistantSettings(api_key="or-test-key", base_url="https://openrouter.test/api/v1/")
    )


def _completion(content: str) -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    return response


@patch("httpx.Client.post")
def test_reply_sends_fixed_system_prompt(mock_post, assistant) -> None:
    mock_post.return_value = _completion("Our deadbolts are ANSI grade 1.")

    result = assistant.reply("How strong are your deadbolts?")

    assert result.value == "Our deadbolts are ANSI grade 1."
    args, kwargs = mock_post.call_args
    assert args[0] == "https://openrouter.test/api/v1/chat/completions"
    payload = kwargs["json"]
    assert payload["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert payload["messages"][1] == {"role": "user", "content": "How strong are your deadbolts?"}
    assert payload["max_tokens"] == 1000
    assert payload["temperature"] == 0.7
    assert kwargs["headers"]["Authorization"] == "Bearer or-test-key"


def test_reply_requires_message(assistant) -> None:
    assert assistant.reply("  ").error.kind is ErrorKind.VALIDATION
    assert assistant.reply(None).error.status_code == 400


@patch("httpx.Client.post")
def test_provider_error_status_is_502(mock_post, assistant) -> None:
    response = MagicMock()
    response.status_code = 429
    response.text = "rate limited"
    mock_post.return_value = response

    result = assistant.reply("hello")

    assert result.error.kind is ErrorKind.UPSTREAM
    assert result.error.status_code == 502
    assert result.error.message == "Failed to get AI response"


@patch("httpx.Client.post")
def test_transport_failure_is_500(mock_post, assistant) -> None:
    mock_post.side_effect = httpx.ConnectError("connection refused")

    result = assistant.reply("hello")

    assert result.error.kind is ErrorKind.UPSTREAM
    assert result.error.status_code == 500


@patch("httpx.Client.post")
def test_malformed_body_is_502(mock_post, assistant) -> None:
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = {"choices": []}
    mock_post.return_value = response

    assert assistant.reply("hello").error.status_code == 502


def test_chat_endpoint(client, monkeypatch) -> None:
    calls = {}

    class DummyClient:
        def __init__(self, *args, **kwargs) -> None:
            calls["init_kwargs"] = kwargs

        def __enter__(self) -> "DummyClient":
            return self

        def __exit__(self, exc_type, exc, tb) -> bool:
            return False

        def post(self, url: str, json=None, headers=None):
            calls["request"] = {"url": url, "json": json, "headers": headers}
            return _completion("We stock hinges in three finishes.")

    monkeypatch.setattr(assistant_module.httpx, "Client", DummyClient)

    response = client.post("/chat", json={"message": "What hinges do you have?"})

    assert response.status_code == 200
    assert response.json() == {"reply": "We stock hinges in three finishes."}
    assert calls["request"]["url"] == "https://openrouter.test/api/v1/chat/completions"
    assert calls["init_kwargs"]["timeout"] == 60.0


def test_chat_endpoint_requires_message(client) -> None:
    response = client.post("/chat", json={})

    assert response.status_code == 400
    assert response.json() == {"detail": "Message is required"}


def test_chat_endpoint_without_body_is_400(client) -> None:
    response = client.post("/chat")

    assert response.status_code == 400
    assert response.json() == {"detail": "Message is required"}


def test_chat_endpoint_wrongly_typed_message_is_400(client) -> None:
    response = client.post("/chat", json={"message": 42})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("Invalid request: message")
