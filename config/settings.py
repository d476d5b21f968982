from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


def _split_origins(raw: str) -> List[str]:
    origins = [item.strip() for item in raw.split(",")]
    return [item for item in origins if item] or ["*"]


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Generation parameters
    are fixed policy in ``chatbot.core.schema.GenerationConfig``, not settings.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.google_api_key: Optional[str] = (
            os.getenv("GOOGLE_API_KEY") or os.getenv("NEXT_GOOGLE_API_KEY") or None
        )
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        self.cors_origins: List[str] = _split_origins(os.getenv("CORS_ORIGINS", "*"))

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
