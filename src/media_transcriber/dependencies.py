"""FastAPI dependency injection configuration."""

from functools import lru_cache
from pathlib import Path

import assemblyai as aai
import requests
from minio import Minio

from media_transcriber.config import AppConfig, load_config
from media_transcriber.domain import (
    FeedEpisodeExtractor,
    MediaAcquirer,
    SourceClassifier,
    TranscriptBuilder,
    TranscriptOrchestrator,
)
from media_transcriber.handlers import PipelineHandler
from media_transcriber.infrastructure import (
    AssemblyAITranscriber,
    LocalArtifactStore,
    MinioArtifactStore,
    MoviePyTranscoder,
    RequestsFeedFetcher,
    RequestsSourceProbe,
    YtDlpFetcher,
)
from media_transcriber.infrastructure.interfaces import ArtifactStore, TranscriptionService


@lru_cache
def get_config() -> AppConfig:
    """Returns the configuration loaded from the environment."""
    return load_config()


@lru_cache
def get_http_session() -> requests.Session:
    """Returns the shared outbound HTTP session."""
    return requests.Session()


@lru_cache
def get_store() -> ArtifactStore:
    """Returns the configured artifact store."""
    config = get_config()
    if config.storage.backend == "minio":
        if config.minio is None:
            raise ValueError("STORAGE_BACKEND=minio requires MinIO settings")
        client = Minio(
            endpoint=config.minio.endpoint,
            access_key=config.minio.user,
            secret_key=config.minio.password,
            secure=config.minio.secure,
        )
        store = MinioArtifactStore(client, config.minio.bucket_name)
        store.ensure_bucket_exists()
        return store
    return LocalArtifactStore(Path(config.storage.local_root))


@lru_cache
def get_audio_store() -> ArtifactStore:
    """
    Returns the store holding staged audio.

    Audio is always staged on local disk, so this is a local store rooted at
    the storage root even when transcripts go to MinIO.
    """
    return LocalArtifactStore(Path(get_config().storage.local_root))


@lru_cache
def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription service."""
    config = get_config()
    aai.settings.api_key = config.assemblyai.api_key
    aai_config = aai.TranscriptionConfig(
        speaker_labels=config.assemblyai.speaker_labels,
        auto_chapters=config.assemblyai.auto_chapters,
    )
    return AssemblyAITranscriber(aai.Transcriber(config=aai_config))


def get_classifier() -> SourceClassifier:
    """Returns a source classifier backed by HEAD probes."""
    config = get_config()
    probe = RequestsSourceProbe(
        get_http_session(), config.http.probe_timeout, config.http.user_agent
    )
    return SourceClassifier(probe, config.media.audio_extensions)


def get_extractor() -> FeedEpisodeExtractor:
    """Returns a feed episode extractor."""
    config = get_config()
    fetcher = RequestsFeedFetcher(
        get_http_session(), config.http.feed_timeout, config.http.user_agent
    )
    return FeedEpisodeExtractor(fetcher, config.media.audio_extensions)


def get_acquirer() -> MediaAcquirer:
    """Returns the media acquirer staging into the audio directory."""
    config = get_config()
    audio_dir = Path(config.storage.local_root) / config.storage.audio_dir
    return MediaAcquirer(
        audio_dir,
        YtDlpFetcher(config.media.output_format),
        MoviePyTranscoder(),
        config.media,
    )


def get_orchestrator() -> TranscriptOrchestrator:
    """Returns the transcription orchestrator."""
    config = get_config()
    return TranscriptOrchestrator(
        get_transcription_service(),
        get_store(),
        TranscriptBuilder(config.transcript.text_format),
        config.storage.public_prefix,
    )


def get_handler() -> PipelineHandler:
    """Returns the configured pipeline handler."""
    return PipelineHandler(
        get_classifier(), get_extractor(), get_acquirer(), get_orchestrator()
    )
