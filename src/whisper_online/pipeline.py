from __future__ import annotations

import logging

from whisper_online.errors import RemoteError
from whisper_online.services.dispatcher import WhisperDispatcher
from whisper_online.services.formatter import ResponseFormatter, resolve_output_target
from whisper_online.types import TranscriptionRequest

logger = logging.getLogger(__name__)


class TranscriptionPipeline:
    def __init__(
        self,
        *,
        dispatcher: WhisperDispatcher,
        formatter: ResponseFormatter,
        verbose: bool = False,
    ) -> None:
        self.dispatcher = dispatcher
        self.formatter = formatter
        self.verbose = verbose

    def run(self, request: TranscriptionRequest, output: str | None = None) -> None:
        """Submit one file and write the formatted transcript to a file or stdout."""
        if self.verbose:
            self._describe(request, output)
            logger.info("Sending request to %s...", self.dispatcher.endpoint_for(request.translate))

        result = self.dispatcher.dispatch(request)
        if not result.ok:
            raise RemoteError(result.status_code, result.body)

        if self.verbose:
            logger.info("Request successful! (%s, HTTP %s)", result.endpoint, result.status_code)

        target = resolve_output_target(request.audio_path, request.response_format, output)
        if self.verbose and not output:
            logger.info("No output path specified. Using: %s", target)

        self.formatter.render(result.body, request.response_format, target)

    @staticmethod
    def _describe(request: TranscriptionRequest, output: str | None) -> None:
        logger.info("Processing file: %s", request.audio_path.resolve())
        logger.info("Model: %s", request.model)
        if request.language:
            logger.info("Language: %s", request.language)
        if output:
            logger.info("Output path: %s", output)
        logger.info("Temperature: %s", request.temperature)
        if request.prompt:
            logger.info("Prompt: %s", request.prompt)
        logger.info("Response format: %s", request.response_format)
        logger.info("Word timestamps: %s", request.word_timestamps)
        logger.info("Translate: %s", request.translate)
