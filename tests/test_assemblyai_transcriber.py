from unittest.mock import Mock

import assemblyai as aai
import pytest

from media_transcriber.exceptions import EngineError
from media_transcriber.infrastructure import AssemblyAITranscriber


def make_transcript(status, **kwargs):
    transcript = Mock()
    transcript.status = status
    transcript.error = kwargs.get("error")
    transcript.text = kwargs.get("text", "")
    transcript.utterances = kwargs.get("utterances", [])
    transcript.json_response = kwargs.get("json_response", {})
    return transcript


def test_completed_transcript_is_mapped():
    utterance = Mock(speaker="A", text="Hello.", start=0, end=900)
    transcriber = Mock()
    transcriber.transcribe.return_value = make_transcript(
        aai.TranscriptStatus.completed,
        text="Hello.",
        utterances=[utterance],
        json_response={"id": "abc", "text": "Hello."},
    )

    result = AssemblyAITranscriber(transcriber).transcribe("https://example.com/a.mp3")

    transcriber.transcribe.assert_called_once_with("https://example.com/a.mp3")
    assert result.status == "completed"
    assert result.text == "Hello."
    assert result.structured == {"id": "abc", "text": "Hello."}
    assert result.utterances[0].speaker == "A"
    assert result.utterances[0].end == 900


def test_error_status_is_reported_not_raised():
    transcriber = Mock()
    transcriber.transcribe.return_value = make_transcript(
        aai.TranscriptStatus.error, error="File does not appear to contain audio"
    )

    result = AssemblyAITranscriber(transcriber).transcribe("/tmp/a.mp3")

    assert result.status == "error"
    assert result.error == "File does not appear to contain audio"


def test_sdk_exception_becomes_engine_error():
    transcriber = Mock()
    transcriber.transcribe.side_effect = RuntimeError("connection reset")

    with pytest.raises(EngineError) as exc_info:
        AssemblyAITranscriber(transcriber).transcribe("/tmp/a.mp3")
    assert isinstance(exc_info.value.cause, RuntimeError)
