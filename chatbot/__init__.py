from chatbot.orchestrator import FALLBACK_REPLY, ChatOrchestrator
from chatbot.provider import ChatSession, GeminiChatProvider, build_provider
from chatbot.transcript import normalize_transcript

__all__ = [
    "FALLBACK_REPLY",
    "ChatOrchestrator",
    "ChatSession",
    "GeminiChatProvider",
    "build_provider",
    "normalize_transcript",
]
