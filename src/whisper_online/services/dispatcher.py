from __future__ import annotations

import logging

import httpx

from whisper_online.config import DEFAULT_BASE_URL
from whisper_online.errors import TransportError
from whisper_online.services.request_builder import open_submission
from whisper_online.types import TranscriptionRequest, TranscriptionResult

logger = logging.getLogger(__name__)

TRANSCRIBE = "transcribe"
TRANSLATE = "translate"

_OPERATION_PATHS = {
    TRANSCRIBE: "/audio/transcriptions",
    TRANSLATE: "/audio/translations",
}


class WhisperDispatcher:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float | None = None,
        *,
        verbose: bool = False,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.verbose = verbose
        self._transport = transport

    def endpoint_for(self, translate: bool) -> str:
        operation = TRANSLATE if translate else TRANSCRIBE
        return f"{self.base_url}{_OPERATION_PATHS[operation]}"

    def dispatch(self, request: TranscriptionRequest) -> TranscriptionResult:
        """POST the request once and capture status and body.

        Non-2xx responses are returned, not raised. Transport failures are
        raised as TransportError.
        """
        endpoint = self.endpoint_for(request.translate)
        headers = {"Authorization": f"Bearer {request.api_key}"}
        if self.verbose:
            logger.info("API endpoint: %s", endpoint)

        with open_submission(request) as submission:
            try:
                with httpx.Client(timeout=self.timeout_seconds, transport=self._transport) as client:
                    response = client.post(
                        endpoint,
                        headers=headers,
                        data=submission.data,
                        files=submission.files,
                    )
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise TransportError(f"Request to {endpoint} failed: {exc}") from exc

        if self.verbose:
            logger.info("Response status: %s", response.status_code)
        return TranscriptionResult(status_code=response.status_code, body=response.text, endpoint=endpoint)
