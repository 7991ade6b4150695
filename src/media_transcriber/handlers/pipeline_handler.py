"""Handler wiring acquisition and transcription for every entry point."""

import logging
from collections.abc import Callable
from typing import BinaryIO

from media_transcriber.domain import (
    AudioSource,
    FeedEpisode,
    FeedEpisodeExtractor,
    MediaAcquirer,
    PipelineResult,
    PodcastResolution,
    ProcessingState,
    ProcessingTracker,
    SourceClassifier,
    TranscriptOrchestrator,
    UrlKind,
)
from media_transcriber.exceptions import PipelineError, UnsupportedFormatError

logger = logging.getLogger(__name__)


class PipelineHandler:
    """Orchestrates media-to-transcript operations."""

    def __init__(
        self,
        classifier: SourceClassifier,
        extractor: FeedEpisodeExtractor,
        acquirer: MediaAcquirer,
        orchestrator: TranscriptOrchestrator,
    ):
        self._classifier = classifier
        self._extractor = extractor
        self._acquirer = acquirer
        self._orchestrator = orchestrator

    def process_video_url(
        self, url: str, tracker: ProcessingTracker | None = None
    ) -> PipelineResult:
        """
        Downloads the audio of a video page and transcribes it.

        The transcript is named after the video title.
        """
        return self._run(
            tracker or ProcessingTracker(),
            ProcessingState.DOWNLOADING,
            lambda: self._acquirer.acquire_video_url(url),
        )

    def process_upload(
        self,
        file_name: str,
        data: BinaryIO,
        tracker: ProcessingTracker | None = None,
    ) -> PipelineResult:
        """
        Stages an uploaded file, extracts its audio if needed, and transcribes it.

        The transcript is named after the uploaded file.
        """
        return self._run(
            tracker or ProcessingTracker(),
            ProcessingState.EXTRACTING,
            lambda: self._acquirer.acquire_upload(file_name, data),
            output_name=file_name,
        )

    def resolve_podcast(
        self, url: str, tracker: ProcessingTracker | None = None
    ) -> PodcastResolution:
        """
        Classifies a podcast URL.

        A feed returns its episodes and leaves the tracker idle so the caller
        can pick one; a direct audio URL is transcribed straight away.

        Raises:
            UnsupportedFormatError: If the URL is neither a feed nor audio.
            PipelineError: Any classification, feed or transcription failure.
        """
        tracker = tracker or ProcessingTracker()
        try:
            kind = self._classifier.classify(url)
            if kind == UrlKind.FEED:
                episodes = self._extractor.extract(url)
                return PodcastResolution(kind=UrlKind.FEED, episodes=episodes)
            if kind == UrlKind.UNKNOWN:
                raise UnsupportedFormatError(
                    url,
                    "Unable to determine if URL is an RSS feed or audio file. "
                    "Please check the URL and try again.",
                )
        except PipelineError as e:
            self._fail(tracker, e)
            raise

        result = self._run(
            tracker,
            ProcessingState.DOWNLOADING,
            lambda: self._acquirer.from_audio_url(url),
        )
        return PodcastResolution(kind=UrlKind.AUDIO, result=result)

    def process_episode(
        self, episode: FeedEpisode, tracker: ProcessingTracker | None = None
    ) -> PipelineResult:
        """Transcribes an episode picked from a feed, named after its title."""
        return self._run(
            tracker or ProcessingTracker(),
            ProcessingState.DOWNLOADING,
            lambda: self._acquirer.from_feed_episode(episode),
        )

    def _run(
        self,
        tracker: ProcessingTracker,
        acquisition_state: ProcessingState,
        acquire: Callable[[], AudioSource],
        output_name: str | None = None,
    ) -> PipelineResult:
        try:
            tracker.advance(acquisition_state)
            source = acquire()

            tracker.advance(ProcessingState.TRANSCRIBING)
            artifact = self._orchestrator.transcribe(
                source, output_name or source.display_name
            )

            tracker.advance(ProcessingState.COMPLETE)
        except PipelineError as e:
            self._fail(tracker, e)
            raise

        logger.info(
            "Pipeline complete",
            extra={
                "source_kind": source.kind.value,
                "location": source.location,
                "base_name": artifact.base_name,
            },
        )
        return PipelineResult(
            source=source, artifact=artifact, status=tracker.snapshot()
        )

    @staticmethod
    def _fail(tracker: ProcessingTracker, error: PipelineError) -> None:
        logger.error(
            "Pipeline failed",
            extra={
                "state": tracker.state.value,
                "error_type": type(error).__name__,
                "error": error.message,
                "detail": error.detail,
            },
        )
        tracker.fail(error.message, error.detail)
