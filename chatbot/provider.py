from __future__ import annotations

from typing import Any, List, Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from chatbot.core.errors import AuthError
from chatbot.core.schema import GenerationConfig, HistoryRole, HistoryTurn
from config.settings import Settings


class ProviderNotConfigured(AuthError):
    default_message = "Missing GOOGLE_API_KEY in environment or .env"


def to_lc_messages(history: Sequence[HistoryTurn]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for turn in history:
        if turn.role is HistoryRole.MODEL:
            messages.append(AIMessage(content=turn.content))
        else:
            messages.append(HumanMessage(content=turn.content))
    return messages


def extract_text(reply: Any) -> str:
    content = getattr(reply, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(part.get("text") or "")
        return "".join(parts)
    return ""


class ChatSession:
    """A single conversation seeded with prior turns. Request scoped."""

    def __init__(self, llm: BaseChatModel, history: Sequence[HistoryTurn]) -> None:
        self._llm = llm
        self._history = to_lc_messages(history)

    @property
    def history(self) -> List[BaseMessage]:
        return list(self._history)

    async def send_message(self, text: str) -> str:
        reply = await self._llm.ainvoke(self._history + [HumanMessage(content=text)])
        return extract_text(reply)


class GeminiChatProvider:
    """Process-wide handle on the Gemini chat model.

    Built once and shared read-only; each request opens its own session.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-1.5-flash",
        generation: GenerationConfig = GenerationConfig(),
        llm: Optional[BaseChatModel] = None,
    ) -> None:
        self.model = model
        self.generation = generation
        if llm is None:
            if not api_key:
                raise ProviderNotConfigured(details="GOOGLE_API_KEY is not configured")
            llm = ChatGoogleGenerativeAI(
                model=model,
                google_api_key=api_key,
                temperature=generation.temperature,
                max_output_tokens=generation.max_output_tokens,
            )
        self._llm = llm

    def start_session(self, history: Sequence[HistoryTurn]) -> ChatSession:
        return ChatSession(self._llm, history)


def build_provider(settings: Settings) -> GeminiChatProvider:
    return GeminiChatProvider(api_key=settings.google_api_key, model=settings.gemini_model)
