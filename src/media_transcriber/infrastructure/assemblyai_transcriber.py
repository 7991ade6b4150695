"""AssemblyAI implementation of the TranscriptionService interface."""

import logging

import assemblyai as aai

from media_transcriber.domain.models import EngineResult, Utterance
from media_transcriber.exceptions import EngineError

from .interfaces.transcription_service import TranscriptionService

logger = logging.getLogger(__name__)


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    def transcribe(self, audio_location: str) -> EngineResult:
        """
        Transcribes a local file or remote URL using AssemblyAI.

        The SDK uploads local files, submits the job and polls until the
        transcript reaches a terminal status.
        """
        try:
            transcript = self._transcriber.transcribe(audio_location)
        except Exception as e:
            logger.exception(
                "AssemblyAI request failed", extra={"audio_location": audio_location}
            )
            raise EngineError(audio_location, e) from e

        if transcript is None or transcript.status != aai.TranscriptStatus.completed:
            error = getattr(transcript, "error", None)
            logger.warning(
                "AssemblyAI transcription did not complete",
                extra={"audio_location": audio_location, "error": error},
            )
            return EngineResult(status="error", error=error)

        utterances = [
            Utterance(speaker=u.speaker, text=u.text, start=u.start, end=u.end)
            for u in (transcript.utterances or [])
        ]

        logger.info(
            "Audio transcription successful",
            extra={
                "audio_location": audio_location,
                "utterance_count": len(utterances),
            },
        )
        return EngineResult(
            status="completed",
            text=transcript.text or "",
            structured=transcript.json_response or {},
            utterances=utterances,
        )
