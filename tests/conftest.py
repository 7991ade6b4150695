import pytest

from fakes import (
    FakeFeedFetcher,
    FakeMediaFetcher,
    FakeProbe,
    FakeTranscoder,
    FakeTranscriptionService,
)
from media_transcriber.config import MediaConfig
from media_transcriber.domain import (
    FeedEpisodeExtractor,
    MediaAcquirer,
    SourceClassifier,
    TranscriptOrchestrator,
)
from media_transcriber.domain.models import FeedEntry
from media_transcriber.handlers import PipelineHandler
from media_transcriber.infrastructure import LocalArtifactStore


@pytest.fixture
def audio_dir(tmp_path):
    return tmp_path / "uploads" / "audio"


@pytest.fixture
def store(tmp_path):
    return LocalArtifactStore(tmp_path / "uploads")


@pytest.fixture
def probe():
    return FakeProbe(content_type="audio/mpeg")


@pytest.fixture
def feed_fetcher():
    return FakeFeedFetcher(
        entries=[
            FeedEntry(title="First", enclosure_url="https://example.com/1.mp3", guid="g1"),
            FeedEntry(title="Second", enclosure_url="https://example.com/2.mp3", guid="g2"),
        ]
    )


@pytest.fixture
def media_fetcher():
    return FakeMediaFetcher()


@pytest.fixture
def transcoder():
    return FakeTranscoder()


@pytest.fixture
def transcription_service():
    return FakeTranscriptionService()


@pytest.fixture
def acquirer(audio_dir, media_fetcher, transcoder):
    return MediaAcquirer(audio_dir, media_fetcher, transcoder, MediaConfig())


@pytest.fixture
def orchestrator(transcription_service, store):
    return TranscriptOrchestrator(transcription_service, store)


@pytest.fixture
def handler(probe, feed_fetcher, acquirer, orchestrator):
    return PipelineHandler(
        SourceClassifier(probe),
        FeedEpisodeExtractor(feed_fetcher),
        acquirer,
        orchestrator,
    )
