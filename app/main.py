from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from chatbot.core.errors import ChatError, InvalidInput, UpstreamError
from chatbot.core.schema import ChatResponse, ErrorResponse, NormalizedRequest
from chatbot.orchestrator import ChatOrchestrator
from chatbot.provider import GeminiChatProvider, build_provider
from chatbot.transcript import normalize_transcript
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("gemini_chat")

app = FastAPI(title="Gemini Chat API", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(ChatError)
async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@lru_cache(maxsize=1)
def get_provider() -> GeminiChatProvider:
    settings = get_settings()
    logger.info(
        "Config: model=%s key_set=%s",
        settings.gemini_model,
        bool(settings.google_api_key),
    )
    return build_provider(settings)


def get_orchestrator() -> ChatOrchestrator:
    return ChatOrchestrator(get_provider())


async def read_chat_request(request: Request) -> NormalizedRequest:
    try:
        body = await request.json()
    except ValueError as exc:
        raise InvalidInput(details="Request body must be JSON") from exc
    if not isinstance(body, dict):
        raise InvalidInput(details="Request body must be a JSON object")

    messages = body.get("messages")
    logger.info(
        "Incoming chat: messages=%s",
        len(messages) if isinstance(messages, list) else None,
    )
    return normalize_transcript(messages)


# Body is validated before the orchestrator is resolved, so bad input never reaches Gemini.
@app.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    normalized: NormalizedRequest = Depends(read_chat_request),
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    logger.info(
        "Normalized request: history_turns=%s latest_len=%s",
        len(normalized.history),
        len(normalized.latest_message),
    )
    try:
        message = await orchestrator.reply(normalized)
    except ChatError:
        raise
    except Exception as e:
        logger.exception("Chat processing failed: %s", e)
        raise UpstreamError(details=str(e)) from e

    logger.info("Model responded: %s chars", len(message))
    return {"message": message}


@app.get("/health")
def health():
    return {"status": "ok"}
