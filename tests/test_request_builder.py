from pathlib import Path

import pytest

from whisper_online.errors import FileAccessError, InputError
from whisper_online.services.request_builder import build_form_fields, open_submission
from whisper_online.types import TranscriptionRequest


def test_form_fields_defaults(audio_file: Path) -> None:
    fields = build_form_fields(TranscriptionRequest(audio_path=audio_file, api_key="k"))
    assert fields == {
        "model": "whisper-1",
        "response_format": "text",
        "temperature": "0.0",
    }


def test_form_fields_optional_values(audio_file: Path) -> None:
    request = TranscriptionRequest(
        audio_path=audio_file,
        api_key="k",
        model="gpt-4o-transcribe",
        language="pt",
        prompt="Names: Ana, Rui",
        response_format="verbose_json",
        temperature=0.4,
        word_timestamps=True,
    )
    fields = build_form_fields(request)
    assert fields["model"] == "gpt-4o-transcribe"
    assert fields["language"] == "pt"
    assert fields["prompt"] == "Names: Ana, Rui"
    assert fields["response_format"] == "verbose_json"
    assert fields["temperature"] == "0.4"
    assert fields["timestamp_granularities[]"] == ["word"]


def test_empty_model_falls_back_to_default(audio_file: Path) -> None:
    fields = build_form_fields(TranscriptionRequest(audio_path=audio_file, api_key="k", model="", language=""))
    assert fields["model"] == "whisper-1"
    assert "language" not in fields
    assert "timestamp_granularities[]" not in fields


def test_unknown_format_is_sent_as_is(audio_file: Path) -> None:
    fields = build_form_fields(TranscriptionRequest(audio_path=audio_file, api_key="k", response_format="XML"))
    assert fields["response_format"] == "XML"


def test_open_submission_closes_file(audio_file: Path) -> None:
    request = TranscriptionRequest(audio_path=audio_file, api_key="k")
    with open_submission(request) as submission:
        filename, stream = submission.files["file"]
        assert filename == "speech.mp3"
        assert stream.read() == b"ID3fake-audio-bytes"
    assert stream.closed


def test_open_submission_closes_file_on_error(audio_file: Path) -> None:
    request = TranscriptionRequest(audio_path=audio_file, api_key="k")
    with pytest.raises(RuntimeError):
        with open_submission(request) as submission:
            stream = submission.files["file"][1]
            raise RuntimeError("boom")
    assert stream.closed


def test_open_submission_missing_file(tmp_path: Path) -> None:
    request = TranscriptionRequest(audio_path=tmp_path / "missing.wav", api_key="k")
    with pytest.raises(FileAccessError) as excinfo:
        with open_submission(request):
            pass
    assert isinstance(excinfo.value, InputError)
