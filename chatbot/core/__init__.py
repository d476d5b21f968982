from chatbot.core.errors import (
    AuthError,
    ChatError,
    ContentPolicyError,
    InvalidInput,
    RateLimitError,
    UpstreamError,
    classify_provider_error,
)
from chatbot.core.schema import GenerationConfig, HistoryRole, HistoryTurn, Message, NormalizedRequest, Role

__all__ = [
    "AuthError",
    "ChatError",
    "ContentPolicyError",
    "InvalidInput",
    "RateLimitError",
    "UpstreamError",
    "classify_provider_error",
    "GenerationConfig",
    "HistoryRole",
    "HistoryTurn",
    "Message",
    "NormalizedRequest",
    "Role",
]
