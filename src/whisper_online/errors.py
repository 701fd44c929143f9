"""Exceptions raised by whisper-online, one per fatal error category."""

from __future__ import annotations


class WhisperOnlineError(Exception):
    """Base class; ``exit_code`` is what the CLI returns for it."""

    exit_code = 1


class InputError(WhisperOnlineError):
    """Bad local input: missing audio file or missing API key."""

    exit_code = 1


class FileAccessError(InputError):
    """The audio file could not be opened for reading."""


class TransportError(WhisperOnlineError):
    """The HTTP call itself failed (DNS, connect, timeout, reset)."""

    exit_code = 2


class RemoteError(WhisperOnlineError):
    """The service answered with a non-2xx status."""

    exit_code = 3

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Request failed with HTTP status {status_code}")
        self.status_code = status_code
        self.body = body


class OutputWriteError(WhisperOnlineError):
    """The transcript could not be written to the output path."""

    exit_code = 4
