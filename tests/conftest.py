"""Pytest configuration and shared fixtures."""

import os

os.environ.setdefault("GOOGLE_API_KEY", "test-google-key")
os.environ.setdefault("APP_ENV", "test")

from typing import List, Optional

import pytest

from chatbot.core.schema import HistoryTurn


class FakeSession:
    def __init__(self, provider: "FakeProvider", history: List[HistoryTurn]) -> None:
        self._provider = provider
        self.history = list(history)

    async def send_message(self, text: str) -> str:
        self._provider.sent.append(text)
        if self._provider.error is not None:
            raise self._provider.error
        return self._provider.reply


class FakeProvider:
    """Stands in for GeminiChatProvider and records what it was asked."""

    def __init__(self, reply: str = "hello there", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.sessions: List[FakeSession] = []
        self.sent: List[str] = []

    def start_session(self, history: List[HistoryTurn]) -> FakeSession:
        session = FakeSession(self, history)
        self.sessions.append(session)
        return session


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()
