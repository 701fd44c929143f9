from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import httpx

from whisper_online import __version__
from whisper_online.config import Settings, load_settings
from whisper_online.errors import InputError, RemoteError, WhisperOnlineError
from whisper_online.pipeline import TranscriptionPipeline
from whisper_online.services.dispatcher import WhisperDispatcher
from whisper_online.services.formatter import ResponseFormatter
from whisper_online.types import DEFAULT_MODEL, DEFAULT_RESPONSE_FORMAT, TranscriptionRequest

logger = logging.getLogger(__name__)

MISSING_API_KEY_HELP = """\
OpenAI API key is required. Provide it with --api-key or set the OPENAI_API_KEY environment variable.
To set the environment variable:
  - Windows (Command Prompt): set OPENAI_API_KEY=your_api_key
  - Windows (PowerShell): $env:OPENAI_API_KEY="your_api_key"
  - Linux/macOS: export OPENAI_API_KEY=your_api_key"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whisper-online",
        description=f"whisper-online v{__version__} - A proxy to the OpenAI Whisper API",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--file", required=True, help="The audio file to transcribe")
    parser.add_argument("--model", default=DEFAULT_MODEL, help="Model to use for transcription")
    parser.add_argument("--language", default=None, help="Language of the audio file")
    parser.add_argument(
        "--output",
        default=None,
        help="Output file path ('-' for stdout; if not specified, uses input filename with appropriate extension)",
    )
    parser.add_argument("--temperature", type=float, default=0.0, help="Temperature for sampling")
    parser.add_argument("--prompt", default=None, help="Initial prompt for the transcription")
    parser.add_argument(
        "--response-format",
        default=DEFAULT_RESPONSE_FORMAT,
        help="Response format (json, text, srt, verbose_json, vtt)",
    )
    parser.add_argument("--word-timestamps", action="store_true", help="Include word-level timestamps")
    parser.add_argument("--translate", action="store_true", help="Translate to English")
    parser.add_argument("--api-key", default=None, help="OpenAI API key")
    parser.add_argument("--verbose", action="store_true", help="Display detailed processing information")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
            force=True,
        )
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", force=True)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_request(args: argparse.Namespace, settings: Settings) -> TranscriptionRequest:
    audio_path = Path(args.file).expanduser()
    if not audio_path.is_file():
        raise InputError(f"The specified audio file does not exist: {audio_path}")

    api_key = (args.api_key or "").strip() or settings.api_key
    if not api_key:
        raise InputError(MISSING_API_KEY_HELP)

    return TranscriptionRequest(
        audio_path=audio_path,
        api_key=api_key,
        model=args.model,
        language=args.language,
        temperature=args.temperature,
        prompt=args.prompt,
        response_format=args.response_format,
        word_timestamps=args.word_timestamps,
        translate=args.translate,
    )


def main(argv: Sequence[str] | None = None, *, transport: httpx.BaseTransport | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings()
        request = build_request(args, settings)
        pipeline = TranscriptionPipeline(
            dispatcher=WhisperDispatcher(
                settings.base_url,
                settings.timeout_seconds,
                verbose=args.verbose,
                transport=transport,
            ),
            formatter=ResponseFormatter(verbose=args.verbose),
            verbose=args.verbose,
        )
        pipeline.run(request, output=args.output)
    except RemoteError as exc:
        logger.error("%s", exc)
        print(exc.body, file=sys.stderr)
        return exc.exit_code
    except WhisperOnlineError as exc:
        logger.error("%s", exc, exc_info=args.verbose)
        return exc.exit_code
    except KeyboardInterrupt:
        logger.warning("Interrupted by user. Exiting.")
        return 130
    return 0


def cli() -> None:
    sys.exit(main())
