from __future__ import annotations

import logging

from chatbot.core.errors import ChatError, UpstreamError, classify_provider_error
from chatbot.core.schema import NormalizedRequest
from chatbot.provider import GeminiChatProvider


logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I couldn't generate a response."


class ChatOrchestrator:
    """Sends a normalized request to the provider and classifies failures.

    Never retries; a failure is raised once as a ``ChatError`` subclass.
    """

    def __init__(self, provider: GeminiChatProvider) -> None:
        self.provider = provider

    async def reply(self, request: NormalizedRequest) -> str:
        try:
            session = self.provider.start_session(request.history)
            text = await session.send_message(request.latest_message)
        except ChatError:
            raise
        except Exception as exc:
            error = classify_provider_error(exc)
            if isinstance(error, UpstreamError):
                logger.exception("Gemini call failed: %s", exc)
            else:
                logger.warning("Gemini call rejected: category=%s", error.category)
            raise error from exc

        if not text:
            logger.warning("Gemini returned empty text; using fallback reply")
            return FALLBACK_REPLY
        return text
