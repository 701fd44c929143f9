from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DEFAULT_MODEL = "whisper-1"
DEFAULT_RESPONSE_FORMAT = "text"


class ResponseFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"

    @classmethod
    def lookup(cls, name: str | None) -> ResponseFormat | None:
        """Case-insensitive lookup; unknown names map to None (pass-through)."""
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


@dataclass(slots=True)
class TranscriptionRequest:
    audio_path: Path
    api_key: str
    model: str = DEFAULT_MODEL
    language: str | None = None
    temperature: float = 0.0
    prompt: str | None = None
    response_format: str = DEFAULT_RESPONSE_FORMAT
    word_timestamps: bool = False
    translate: bool = False


@dataclass(slots=True)
class TranscriptionResult:
    status_code: int
    body: str
    endpoint: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(slots=True)
class FormattedOutput:
    content: str
    fallback: bool = False
    error: str | None = None
