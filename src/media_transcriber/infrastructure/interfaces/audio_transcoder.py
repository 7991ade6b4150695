"""Abstract interface for audio extraction from container files."""

from abc import ABC, abstractmethod
from pathlib import Path

from media_transcriber.config import TranscodeProfile
from media_transcriber.domain.models import TranscodeDiagnostic


class TranscodeError(Exception):
    """Raised by a transcoder when a single encode attempt fails."""

    def __init__(
        self,
        profile: str,
        diagnostic: TranscodeDiagnostic,
        reason: str,
        cause: Exception | None = None,
    ):
        self.profile = profile
        self.diagnostic = diagnostic
        self.reason = reason
        self.cause = cause
        super().__init__(f"Transcode with profile '{profile}' failed: {reason}")


class AudioTranscoder(ABC):
    """Abstract base class for audio transcoding backends."""

    @abstractmethod
    def transcode(
        self, input_path: Path, output_path: Path, profile: TranscodeProfile
    ) -> None:
        """
        Writes the audio track of input_path to output_path.

        Args:
            input_path: The container file to read.
            output_path: The audio file to write.
            profile: Encoder settings for this attempt.

        Raises:
            TranscodeError: With a diagnostic code if the attempt fails.
        """
        pass
