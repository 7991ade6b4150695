"""Domain layer containing business logic and models."""

from .feed_extractor import FeedEpisodeExtractor
from .media_acquirer import MediaAcquirer
from .models import (
    ArtifactKind,
    AudioSource,
    FeedEntry,
    FeedEpisode,
    PipelineResult,
    PodcastResolution,
    ProcessingState,
    ProcessingStatus,
    SourceKind,
    TranscriptArtifact,
    UrlKind,
)
from .processing_state import ProcessingTracker
from .source_classifier import SourceClassifier
from .transcript_builder import TranscriptBuilder
from .transcript_orchestrator import TranscriptOrchestrator

__all__ = [
    "ArtifactKind",
    "AudioSource",
    "FeedEntry",
    "FeedEpisode",
    "FeedEpisodeExtractor",
    "MediaAcquirer",
    "PipelineResult",
    "PodcastResolution",
    "ProcessingState",
    "ProcessingStatus",
    "ProcessingTracker",
    "SourceClassifier",
    "SourceKind",
    "TranscriptArtifact",
    "TranscriptBuilder",
    "TranscriptOrchestrator",
    "UrlKind",
]
