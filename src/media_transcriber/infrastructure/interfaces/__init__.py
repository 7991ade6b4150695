"""Infrastructure interface exports."""

from .artifact_store import ArtifactStore
from .audio_transcoder import AudioTranscoder, TranscodeError
from .feed_fetcher import FeedFetcher
from .media_fetcher import MediaFetcher
from .source_probe import SourceProbe
from .transcription_service import TranscriptionService

__all__ = [
    "ArtifactStore",
    "AudioTranscoder",
    "TranscodeError",
    "FeedFetcher",
    "MediaFetcher",
    "SourceProbe",
    "TranscriptionService",
]
