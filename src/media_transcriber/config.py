"""Application configuration loaded from environment variables."""

import os
from typing import Literal

from pydantic import BaseModel


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    speaker_labels: bool = True
    auto_chapters: bool = False


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "transcripts"
    secure: bool = False


class StorageConfig(BaseModel, frozen=True):
    """Where staged audio and transcript artifacts live."""

    backend: Literal["local", "minio"] = "local"
    local_root: str = "uploads"
    audio_dir: str = "audio"
    public_prefix: str = "/files"


class HttpConfig(BaseModel, frozen=True):
    """Outbound HTTP settings for probing sources and fetching feeds."""

    probe_timeout: float = 10.0
    feed_timeout: float = 30.0
    user_agent: str = "media-transcriber/1.0"


class TranscodeProfile(BaseModel, frozen=True):
    """One encoder setting tried when extracting audio from a video upload."""

    name: str
    codec: str = "libmp3lame"
    quality: int | None = None
    channels: int | None = None
    sample_rate: int | None = None


DEFAULT_TRANSCODE_PROFILES = (
    TranscodeProfile(name="vbr-q2", quality=2),
    TranscodeProfile(name="stereo-44k", channels=2, sample_rate=44100),
)


class MediaConfig(BaseModel, frozen=True):
    """Accepted media formats and audio extraction settings."""

    upload_extensions: tuple[str, ...] = ("mp4", "mp3", "m4a")
    audio_extensions: tuple[str, ...] = ("mp3", "m4a", "wav", "aac")
    video_extensions: tuple[str, ...] = ("mp4",)
    output_format: str = "mp3"
    transcode_profiles: tuple[TranscodeProfile, ...] = DEFAULT_TRANSCODE_PROFILES


class TranscriptConfig(BaseModel, frozen=True):
    """How the plain-text transcript artifact is rendered."""

    text_format: Literal["plain", "speakers"] = "plain"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    assemblyai: AssemblyAIConfig
    storage: StorageConfig = StorageConfig()
    minio: MinioConfig | None = None
    http: HttpConfig = HttpConfig()
    media: MediaConfig = MediaConfig()
    transcript: TranscriptConfig = TranscriptConfig()
    log_level: str = "INFO"


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    backend = os.getenv("STORAGE_BACKEND", "local")
    minio = None
    if backend == "minio":
        minio = MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "transcripts"),
            secure=os.getenv("MINIO_SECURE", "false").lower() == "true",
        )

    return AppConfig(
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        storage=StorageConfig(
            backend=backend,
            local_root=os.getenv("STORAGE_ROOT", "uploads"),
        ),
        minio=minio,
        http=HttpConfig(
            probe_timeout=float(os.getenv("PROBE_TIMEOUT_SECONDS", "10")),
            feed_timeout=float(os.getenv("FEED_TIMEOUT_SECONDS", "30")),
        ),
        transcript=TranscriptConfig(
            text_format=os.getenv("TRANSCRIPT_TEXT_FORMAT", "plain"),
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
