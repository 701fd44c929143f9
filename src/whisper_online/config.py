from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from whisper_online.errors import InputError

DEFAULT_BASE_URL = "https://api.openai.com/v1"


@dataclass(slots=True)
class Settings:
    api_key: str | None
    base_url: str
    timeout_seconds: float | None


def _as_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise InputError(f"{name} must be a number, got {raw!r}") from exc


def _normalized_base_url(url: str) -> str:
    return url.strip().rstrip("/") or DEFAULT_BASE_URL


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        api_key=os.getenv("OPENAI_API_KEY", "").strip() or None,
        base_url=_normalized_base_url(os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL)),
        timeout_seconds=_as_float("OPENAI_TIMEOUT_SECONDS", None),
    )
