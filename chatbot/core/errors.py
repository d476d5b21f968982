"""Error taxonomy for the chat relay.

Provider failures only carry free-form text, so the mapping from that text to
a category lives in :func:`classify_provider_error` and nowhere else.
"""

from __future__ import annotations

from typing import Dict, List, Tuple, Type


class ChatError(Exception):
    category: str = "upstream"
    status_code: int = 500
    default_message: str = "Failed to get response from AI"

    def __init__(self, details: str = "", message: str | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, str]:
        return {"error": self.message, "details": self.details, "category": self.category}


class InvalidInput(ChatError):
    category = "invalid_input"
    status_code = 400
    default_message = "Messages are required"


class AuthError(ChatError):
    category = "auth"
    default_message = "Invalid Google API key. Please check your configuration."


class RateLimitError(ChatError):
    category = "rate_limit"
    default_message = "API quota exceeded. Please try again later."


class ContentPolicyError(ChatError):
    category = "content_policy"
    default_message = "Content blocked by safety filters. Please rephrase your message."


class UpstreamError(ChatError):
    category = "upstream"


# First match wins.
PROVIDER_ERROR_MARKERS: List[Tuple[str, Type[ChatError]]] = [
    ("API_KEY_INVALID", AuthError),
    ("QUOTA_EXCEEDED", RateLimitError),
    ("SAFETY", ContentPolicyError),
]


def classify_provider_error(exc: BaseException) -> ChatError:
    if isinstance(exc, ChatError):
        return exc
    signal = str(exc)
    for marker, error_cls in PROVIDER_ERROR_MARKERS:
        if marker in signal:
            return error_cls(details=signal)
    return UpstreamError(details=signal or exc.__class__.__name__)
