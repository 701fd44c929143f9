from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, BinaryIO, Iterator

from whisper_online.errors import FileAccessError
from whisper_online.types import DEFAULT_MODEL, TranscriptionRequest


@dataclass(slots=True)
class MultipartSubmission:
    data: dict[str, Any]
    files: dict[str, tuple[str, BinaryIO]]


def build_form_fields(request: TranscriptionRequest) -> dict[str, Any]:
    """Text fields of the multipart body, in submission order.

    ``language`` and ``prompt`` are sent only when non-empty. ``response_format``
    is always sent; neither it nor ``temperature`` is validated locally.
    """
    fields: dict[str, Any] = {"model": request.model or DEFAULT_MODEL}
    if request.language:
        fields["language"] = request.language
    if request.prompt:
        fields["prompt"] = request.prompt
    fields["response_format"] = request.response_format
    fields["temperature"] = str(float(request.temperature))
    if request.word_timestamps:
        fields["timestamp_granularities[]"] = ["word"]
    return fields


@contextmanager
def open_submission(request: TranscriptionRequest) -> Iterator[MultipartSubmission]:
    """Open the audio file and yield the multipart fields for one request.

    The file handle lives only inside the ``with`` block.
    """
    audio_path = request.audio_path
    try:
        audio_stream = audio_path.open("rb")
    except OSError as exc:
        raise FileAccessError(f"Cannot open audio file {audio_path}: {exc.strerror or exc}") from exc

    with audio_stream:
        yield MultipartSubmission(
            data=build_form_fields(request),
            files={"file": (audio_path.name, audio_stream)},
        )
