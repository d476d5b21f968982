from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class HistoryRole(str, Enum):
    USER = "user"
    MODEL = "model"


class Message(BaseModel):
    """One client-supplied chat message. Order in the list is conversation order."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    role: Role = Field(..., description="'user' or 'assistant'")
    content: str = Field(..., description="Message text")


class HistoryTurn(BaseModel):
    """Provider-shaped turn: ``assistant`` becomes ``model``."""

    model_config = ConfigDict(frozen=True)

    role: HistoryRole
    content: str

    @classmethod
    def from_message(cls, message: Message) -> "HistoryTurn":
        role = HistoryRole.MODEL if message.role is Role.ASSISTANT else HistoryRole.USER
        return cls(role=role, content=message.content)


class NormalizedRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    history: List[HistoryTurn] = Field(default_factory=list)
    latest_message: str


class GenerationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_output_tokens: int = 500
    temperature: float = 0.7


class ChatResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: str
    category: str
