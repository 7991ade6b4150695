"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod

from media_transcriber.domain.models import EngineResult


class TranscriptionService(ABC):
    """Abstract base class for speech transcription backends."""

    @abstractmethod
    def transcribe(self, audio_location: str) -> EngineResult:
        """
        Transcribes audio and blocks until the engine reaches a terminal status.

        Args:
            audio_location: Local file path or remote URL of the audio.

        Returns:
            EngineResult with status, text and speaker-segmented payload.

        Raises:
            EngineError: If the engine cannot be reached or rejects the request.
        """
        pass
