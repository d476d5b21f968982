from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.main import app, get_orchestrator, get_provider
from chatbot.orchestrator import FALLBACK_REPLY, ChatOrchestrator
from config.settings import Settings
from tests.conftest import FakeProvider


@pytest.fixture
def client(fake_provider: FakeProvider) -> Iterator[TestClient]:
    app.dependency_overrides[get_orchestrator] = lambda: ChatOrchestrator(fake_provider)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_chat_relays_reply(client: TestClient, fake_provider: FakeProvider) -> None:
    response = client.post(
        "/api/chat",
        json={
            "messages": [
                {"role": "assistant", "content": "Hi! How can I help?"},
                {"role": "user", "content": "hi"},
                {"role": "assistant", "content": "hello"},
                {"role": "user", "content": "bye"},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json() == {"message": "hello there"}
    history = fake_provider.sessions[0].history
    assert [(t.role.value, t.content) for t in history] == [("user", "hi"), ("model", "hello")]
    assert fake_provider.sent == ["bye"]


def test_chat_ignores_extra_message_fields(client: TestClient) -> None:
    response = client.post(
        "/api/chat",
        json={"messages": [{"id": "1", "role": "user", "content": "hi", "timestamp": "12:00"}]},
    )

    assert response.status_code == 200


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"messages": None},
        {"messages": "hi"},
        {"messages": {"role": "user", "content": "hi"}},
        {"messages": []},
        {"messages": [{"role": "bot", "content": "hi"}]},
        {"messages": [{"role": "user"}]},
        ["not", "an", "object"],
    ],
)
def test_invalid_body_is_rejected_without_provider_call(
    client: TestClient, fake_provider: FakeProvider, body
) -> None:
    response = client.post("/api/chat", json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] == "Messages are required"
    assert payload["category"] == "invalid_input"
    assert payload["details"]
    assert fake_provider.sessions == []


def test_non_json_body_is_rejected(client: TestClient, fake_provider: FakeProvider) -> None:
    response = client.post(
        "/api/chat", content=b"messages=hi", headers={"content-type": "text/plain"}
    )

    assert response.status_code == 400
    assert response.json()["category"] == "invalid_input"
    assert fake_provider.sessions == []


@pytest.mark.parametrize(
    ("signal", "category", "error"),
    [
        ("[400] API_KEY_INVALID", "auth", "Invalid Google API key. Please check your configuration."),
        ("quota: QUOTA_EXCEEDED (per minute)", "rate_limit", "API quota exceeded. Please try again later."),
        ("blocked for SAFETY", "content_policy", "Content blocked by safety filters. Please rephrase your message."),
        ("socket closed", "upstream", "Failed to get response from AI"),
    ],
)
def test_provider_failures_are_classified(
    client: TestClient, fake_provider: FakeProvider, signal: str, category: str, error: str
) -> None:
    fake_provider.error = RuntimeError(signal)

    response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert response.status_code == 500
    assert response.json() == {"error": error, "details": signal, "category": category}


def test_empty_reply_returns_fallback(client: TestClient, fake_provider: FakeProvider) -> None:
    fake_provider.reply = ""

    response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})

    assert response.status_code == 200
    assert response.json() == {"message": FALLBACK_REPLY}


def test_missing_api_key_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("NEXT_GOOGLE_API_KEY", raising=False)
    monkeypatch.setattr("app.main.get_settings", Settings)
    get_provider.cache_clear()

    with TestClient(app) as test_client:
        response = test_client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
        bad = test_client.post("/api/chat", json={"messages": []})

    get_provider.cache_clear()
    assert response.status_code == 500
    assert response.json()["category"] == "auth"
    assert response.json()["details"] == "GOOGLE_API_KEY is not configured"
    assert bad.status_code == 400
