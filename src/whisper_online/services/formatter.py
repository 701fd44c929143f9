from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Callable, TextIO

from whisper_online.errors import OutputWriteError
from whisper_online.types import FormattedOutput, ResponseFormat

logger = logging.getLogger(__name__)

STDOUT_TARGET = "-"

_EXTENSIONS: dict[ResponseFormat, str] = {
    ResponseFormat.JSON: ".json",
    ResponseFormat.VERBOSE_JSON: ".json",
    ResponseFormat.SRT: ".srt",
    ResponseFormat.VTT: ".vtt",
    ResponseFormat.TEXT: ".txt",
}


def extension_for_format(response_format: str) -> str:
    return _EXTENSIONS.get(ResponseFormat.lookup(response_format), ".txt")


def derive_output_path(audio_path: Path, response_format: str) -> Path:
    return audio_path.with_suffix(extension_for_format(response_format))


def resolve_output_target(audio_path: Path, response_format: str, output: str | None) -> Path | None:
    """Explicit ``output`` wins, ``-`` means stdout, otherwise derive from the input."""
    if output == STDOUT_TARGET:
        return None
    if output:
        return Path(output)
    return derive_output_path(audio_path, response_format)


def _raw(body: str) -> FormattedOutput:
    return FormattedOutput(content=body)


def _parse_failure(body: str, exc: ValueError) -> FormattedOutput:
    return FormattedOutput(content=body, fallback=True, error=str(exc))


def _pretty_json(body: str) -> FormattedOutput:
    try:
        document = json.loads(body)
    except ValueError as exc:
        return _parse_failure(body, exc)
    if not isinstance(document, dict):
        return _parse_failure(body, ValueError("expected a JSON object"))
    return FormattedOutput(content=json.dumps(document, indent=2, ensure_ascii=False))


def _plain_text(body: str) -> FormattedOutput:
    if not body.lstrip().startswith("{"):
        return _raw(body)
    try:
        document = json.loads(body)
    except ValueError as exc:
        return _parse_failure(body, exc)

    text = document.get("text") if isinstance(document, dict) else None
    if text is None:
        return _raw(body)
    return FormattedOutput(content=text if isinstance(text, str) else json.dumps(text, ensure_ascii=False))


_PROCESSORS: dict[ResponseFormat, Callable[[str], FormattedOutput]] = {
    ResponseFormat.JSON: _pretty_json,
    ResponseFormat.VERBOSE_JSON: _pretty_json,
    ResponseFormat.TEXT: _plain_text,
    ResponseFormat.SRT: _raw,
    ResponseFormat.VTT: _raw,
}


class ResponseFormatter:
    def __init__(self, *, verbose: bool = False, stdout: TextIO | None = None) -> None:
        self.verbose = verbose
        self._stdout = stdout

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def format(self, body: str, response_format: str) -> FormattedOutput:
        if self.verbose:
            logger.info("Processing response in %s format...", response_format)

        fmt = ResponseFormat.lookup(response_format)
        processor = _PROCESSORS[fmt] if fmt is not None else _raw
        formatted = processor(body)

        if formatted.fallback:
            logger.warning(
                "Could not process response in %s format. Outputting raw response.",
                response_format,
            )
            if self.verbose:
                logger.info("Error details: %s", formatted.error)
        return formatted

    def write(self, formatted: FormattedOutput, target: Path | None) -> None:
        if target is None:
            print(formatted.content, file=self.stdout)
            return

        try:
            target.write_text(formatted.content, encoding="utf-8", newline="")
        except OSError as exc:
            raise OutputWriteError(f"Cannot write output to {target}: {exc.strerror or exc}") from exc

        label = "Raw output written to" if formatted.fallback else "Output written to"
        print(f"{label}: {target}", file=self.stdout)

    def render(self, body: str, response_format: str, target: Path | None) -> FormattedOutput:
        formatted = self.format(body, response_format)
        self.write(formatted, target)
        return formatted
