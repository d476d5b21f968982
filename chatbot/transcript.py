from __future__ import annotations

from typing import Any, List, Sequence

from pydantic import ValidationError

from chatbot.core.errors import InvalidInput
from chatbot.core.schema import HistoryRole, HistoryTurn, Message, NormalizedRequest


def to_messages(raw: Any) -> List[Message]:
    """Validate a client transcript into ``Message`` objects, latest last."""
    if raw is None or isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise InvalidInput(details="'messages' must be a list of {role, content} objects")
    if not raw:
        raise InvalidInput(details="'messages' must contain at least one message")

    messages: List[Message] = []
    for idx, item in enumerate(raw):
        if isinstance(item, Message):
            messages.append(item)
            continue
        try:
            messages.append(Message.model_validate(item))
        except ValidationError as exc:
            raise InvalidInput(details=f"messages[{idx}]: {exc.errors()[0]['msg']}") from exc
    return messages


def trim_leading_model_turns(history: List[HistoryTurn]) -> List[HistoryTurn]:
    # Gemini rejects histories that open with a model turn.
    first_user = next(
        (idx for idx, turn in enumerate(history) if turn.role is HistoryRole.USER),
        -1,
    )
    if first_user > 0:
        return history[first_user:]
    if first_user == -1 and history and history[0].role is HistoryRole.MODEL:
        # Single-step correction only; a run of model turns keeps its tail.
        return history[1:]
    return history


def normalize_transcript(raw: Any) -> NormalizedRequest:
    """Split a transcript into provider history and the message to send.

    Every message but the last becomes history (``assistant`` mapped to
    ``model``), with leading model turns trimmed. The last message's content
    is sent as-is whatever its role.
    """
    messages = to_messages(raw)
    *earlier, latest = messages
    history = trim_leading_model_turns([HistoryTurn.from_message(m) for m in earlier])
    return NormalizedRequest(history=history, latest_message=latest.content)
