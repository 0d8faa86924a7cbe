from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

DEFAULT_TIMEOUT_MS = 8000


def _timeout_ms(raw: str | None) -> int:
    """Parse a millisecond timeout, falling back to the default when blank or invalid."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT_MS
    return value if value > 0 else DEFAULT_TIMEOUT_MS


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    # API_TIMEOUT is given in milliseconds
    timeout: float = _timeout_ms(os.getenv("API_TIMEOUT")) / 1000
    max_tokens: int = 800
    temperature: float = 0.2
    top_p: float = 0.95
    retry_delay: float = 0.5
    enabled: bool = True


DEFAULT_LLM_CONFIG = LLMConfig()
