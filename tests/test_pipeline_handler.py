import io

import pytest

from fakes import FakeFeedFetcher, FakeProbe, FakeTranscriptionService
from media_transcriber.domain import (
    FeedEpisode,
    FeedEpisodeExtractor,
    ProcessingState,
    ProcessingTracker,
    SourceClassifier,
    SourceKind,
    TranscriptOrchestrator,
    UrlKind,
)
from media_transcriber.domain.models import EngineResult
from media_transcriber.exceptions import (
    SourceNotFoundError,
    TranscriptionFailedError,
    UnsupportedFormatError,
)
from media_transcriber.handlers import PipelineHandler

S = ProcessingState


def states(status):
    return [change.state for change in status.history]


def build_handler(acquirer, orchestrator, probe=None, feed_fetcher=None):
    return PipelineHandler(
        SourceClassifier(probe or FakeProbe(content_type="audio/mpeg")),
        FeedEpisodeExtractor(feed_fetcher or FakeFeedFetcher()),
        acquirer,
        orchestrator,
    )


def test_video_url_flow(handler, store):
    result = handler.process_video_url("https://video.example.com/watch?v=1")

    assert states(result.status) == [S.IDLE, S.DOWNLOADING, S.TRANSCRIBING, S.COMPLETE]
    assert result.source.display_name == "My Video"
    assert result.artifact.base_name == "My Video"
    assert store.exists("transcripts/My Video.txt")


def test_upload_flow_names_transcript_after_file(handler, store):
    result = handler.process_upload("clip.mp4", io.BytesIO(b"video-bytes"))

    assert states(result.status) == [S.IDLE, S.EXTRACTING, S.TRANSCRIBING, S.COMPLETE]
    assert result.artifact.text_file_name == "clip.txt"
    assert store.exists("transcripts/clip.json")


def test_feed_url_lists_episodes_and_stays_idle(acquirer, orchestrator, feed_fetcher):
    handler = build_handler(
        acquirer, orchestrator, FakeProbe(content_type="application/rss+xml"), feed_fetcher
    )
    tracker = ProcessingTracker()

    resolution = handler.resolve_podcast("https://example.com/feed", tracker)

    assert resolution.kind == UrlKind.FEED
    assert [e.guid for e in resolution.episodes] == ["g1", "g2"]
    assert resolution.result is None
    assert tracker.state == S.IDLE


def test_direct_audio_url_is_transcribed(handler, transcription_service):
    url = "https://cdn.example.com/shows/ep7.mp3"

    resolution = handler.resolve_podcast(url)

    assert resolution.kind == UrlKind.AUDIO
    result = resolution.result
    assert result.source.kind == SourceKind.REMOTE_URL
    assert result.artifact.base_name == "ep7"
    assert transcription_service.locations == [url]
    assert states(result.status) == [S.IDLE, S.DOWNLOADING, S.TRANSCRIBING, S.COMPLETE]


def test_unknown_podcast_url_fails_from_idle(acquirer, orchestrator):
    handler = build_handler(acquirer, orchestrator, FakeProbe(content_type="text/html"))
    tracker = ProcessingTracker()

    with pytest.raises(UnsupportedFormatError) as exc_info:
        handler.resolve_podcast("https://example.com/page", tracker)

    assert "RSS feed or audio file" in exc_info.value.message
    assert states(tracker.snapshot()) == [S.IDLE, S.ERROR]


def test_missing_podcast_url_fails(acquirer, orchestrator):
    handler = build_handler(acquirer, orchestrator, FakeProbe(status_code=404))
    tracker = ProcessingTracker()

    with pytest.raises(SourceNotFoundError):
        handler.resolve_podcast("https://example.com/gone.mp3", tracker)

    status = tracker.snapshot()
    assert status.state == S.ERROR
    assert "File not found" in status.message


def test_selected_episode_is_transcribed_by_title(handler, transcription_service):
    episode = FeedEpisode(
        title="Pilot Episode",
        description="First",
        published_at="",
        audio_url="https://example.com/pilot.mp3",
        guid="g1",
    )

    result = handler.process_episode(episode)

    assert transcription_service.locations == ["https://example.com/pilot.mp3"]
    assert result.artifact.base_name == "Pilot Episode"
    assert result.source.display_name == "Pilot Episode"


def test_engine_failure_ends_in_error_after_transcribing(acquirer, store):
    service = FakeTranscriptionService(EngineResult(status="error", error="bad audio"))
    handler = build_handler(acquirer, TranscriptOrchestrator(service, store))
    tracker = ProcessingTracker()

    with pytest.raises(TranscriptionFailedError):
        handler.process_upload("talk.mp3", io.BytesIO(b"ID3"), tracker)

    status = tracker.snapshot()
    assert states(status) == [S.IDLE, S.EXTRACTING, S.TRANSCRIBING, S.ERROR]
    assert status.message == "bad audio"
    assert not store.exists("transcripts/talk.txt")


def test_acquisition_failure_never_reaches_transcribing(handler, transcription_service):
    tracker = ProcessingTracker()

    with pytest.raises(UnsupportedFormatError):
        handler.process_upload("notes.txt", io.BytesIO(b"text"), tracker)

    assert states(tracker.snapshot()) == [S.IDLE, S.EXTRACTING, S.ERROR]
    assert transcription_service.locations == []
