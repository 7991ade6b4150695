"""Domain models for the media transcription pipeline."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class SourceKind(str, Enum):
    """Where the audio handed to the engine lives."""

    LOCAL_FILE = "local_file"
    REMOTE_URL = "remote_url"


class UrlKind(str, Enum):
    """Outcome of probing an arbitrary URL."""

    FEED = "feed"
    AUDIO = "audio"
    UNKNOWN = "unknown"


class ArtifactKind(str, Enum):
    """Top-level groups of stored artifacts."""

    AUDIO = "audio"
    TRANSCRIPT = "transcripts"


class ProcessingState(str, Enum):
    """Lifecycle of one pipeline request."""

    IDLE = "idle"
    DOWNLOADING = "downloading"
    EXTRACTING = "extracting"
    TRANSCRIBING = "transcribing"
    COMPLETE = "complete"
    ERROR = "error"


class TranscodeDiagnostic(str, Enum):
    """Failure category reported by the audio transcoder."""

    CODEC_UNAVAILABLE = "codec_unavailable"
    CONVERSION_ERROR = "conversion_error"


class AudioSource(BaseModel, frozen=True):
    """Canonical reference to audio ready for transcription."""

    kind: SourceKind
    location: str
    display_name: str

    @classmethod
    def local(cls, path: str, display_name: str) -> "AudioSource":
        return cls(kind=SourceKind.LOCAL_FILE, location=path, display_name=display_name)

    @classmethod
    def remote(cls, url: str, display_name: str) -> "AudioSource":
        return cls(kind=SourceKind.REMOTE_URL, location=url, display_name=display_name)


class FeedEntry(BaseModel, frozen=True):
    """A raw syndication entry as parsed from the feed document."""

    title: str | None = None
    link: str | None = None
    enclosure_url: str | None = None
    enclosure_type: str | None = None
    content: str | None = None
    content_snippet: str | None = None
    published: str | None = None
    duration: str | None = None
    guid: str | None = None


class FeedEpisode(BaseModel, frozen=True):
    """A playable podcast episode with every required field populated."""

    title: str
    description: str
    published_at: str
    audio_url: str = Field(min_length=1)
    duration: str | None = None
    guid: str


class MediaMetadata(BaseModel, frozen=True):
    """Metadata resolved by the media fetcher before download."""

    title: str | None = None
    duration: float | None = None
    uploader: str | None = None


class ProbeResult(BaseModel, frozen=True):
    """Response of a metadata-only request against a URL."""

    status_code: int
    reason: str = ""
    content_type: str = ""


class Utterance(BaseModel, frozen=True):
    """A single speaker utterance from transcription."""

    speaker: str
    text: str
    start: int | None = None
    end: int | None = None


class EngineResult(BaseModel, frozen=True):
    """Terminal response of the transcription engine."""

    status: Literal["completed", "error"]
    text: str = ""
    structured: dict[str, Any] = Field(default_factory=dict)
    utterances: list[Utterance] = Field(default_factory=list)
    error: str | None = None


class TranscriptArtifact(BaseModel, frozen=True):
    """A finished transcript held in memory together with its stored locations."""

    base_name: str
    text: str
    structured: dict[str, Any]
    utterances: list[Utterance] = Field(default_factory=list)
    text_url: str
    structured_url: str

    @property
    def text_file_name(self) -> str:
        return f"{self.base_name}.txt"

    @property
    def structured_file_name(self) -> str:
        return f"{self.base_name}.json"


class StateChange(BaseModel, frozen=True):
    """A single recorded transition of a processing tracker."""

    state: ProcessingState
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProcessingStatus(BaseModel, frozen=True):
    """Snapshot of a processing tracker for callers rendering progress."""

    state: ProcessingState
    message: str | None = None
    detail: str | None = None
    history: list[StateChange] = Field(default_factory=list)


class PipelineResult(BaseModel, frozen=True):
    """Outcome of a pipeline run that reached the complete state."""

    source: AudioSource
    artifact: TranscriptArtifact
    status: ProcessingStatus


class PodcastResolution(BaseModel, frozen=True):
    """
    What a podcast URL resolved to.

    A feed yields episodes for the caller to choose from; a direct audio URL
    yields a finished pipeline result.
    """

    kind: UrlKind
    episodes: list[FeedEpisode] = Field(default_factory=list)
    result: PipelineResult | None = None
