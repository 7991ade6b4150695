"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .local_artifact_store import LocalArtifactStore
from .minio_artifact_store import MinioArtifactStore
from .moviepy_transcoder import MoviePyTranscoder
from .requests_feed_fetcher import RequestsFeedFetcher
from .requests_probe import RequestsSourceProbe
from .ytdlp_fetcher import YtDlpFetcher

__all__ = [
    "AssemblyAITranscriber",
    "LocalArtifactStore",
    "MinioArtifactStore",
    "MoviePyTranscoder",
    "RequestsFeedFetcher",
    "RequestsSourceProbe",
    "YtDlpFetcher",
]
