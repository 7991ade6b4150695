"""Custom exceptions for the media transcriber service."""


class PipelineError(Exception):
    """Base class for failures reported to the caller as the error state."""

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        cause: Exception | None = None,
    ):
        self.message = message
        self.detail = detail
        self.cause = cause
        super().__init__(message)


class AccessDeniedError(PipelineError):
    """Raised when a remote source answers 403."""

    def __init__(self, url: str, cause: Exception | None = None):
        self.url = url
        super().__init__(
            "Access denied: this file appears to be private or requires authentication",
            detail=url,
            cause=cause,
        )


class SourceNotFoundError(PipelineError):
    """Raised when a remote source answers 404."""

    def __init__(self, url: str, cause: Exception | None = None):
        self.url = url
        super().__init__(
            "File not found: the URL does not exist or has been moved",
            detail=url,
            cause=cause,
        )


class UnreachableSourceError(PipelineError):
    """Raised when a remote source cannot be reached or answers with an error."""

    def __init__(
        self,
        url: str,
        status_code: int | None = None,
        reason: str | None = None,
        cause: Exception | None = None,
    ):
        self.url = url
        self.status_code = status_code
        if status_code is not None:
            message = f"Unable to access URL: server returned {status_code}"
            if reason:
                message = f"{message} {reason}"
        else:
            message = "Unable to access the provided URL"
        super().__init__(message, detail=url, cause=cause)


class InvalidFeedFormatError(PipelineError):
    """Raised when a feed document cannot be parsed."""

    def __init__(self, url: str, cause: Exception | None = None):
        self.url = url
        super().__init__(
            "Invalid RSS feed format. Please check that the URL points to a valid podcast RSS feed.",
            detail=str(cause) if cause else None,
            cause=cause,
        )


class EmptyFeedError(PipelineError):
    """Raised when a feed contains no entries."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("No episodes found in this RSS feed", detail=url)


class NoAudioEpisodesError(PipelineError):
    """Raised when no feed entry carries a usable audio reference."""

    def __init__(self, url: str, entry_count: int):
        self.url = url
        self.entry_count = entry_count
        super().__init__(
            "No audio files found in this RSS feed. "
            "Make sure it's a podcast feed with audio episodes.",
            detail=f"{entry_count} entries without an audio enclosure",
        )


class UnsupportedFormatError(PipelineError):
    """Raised when an input is not a format the pipeline accepts."""

    def __init__(self, subject: str, message: str | None = None):
        self.subject = subject
        super().__init__(
            message
            or "Unsupported file type. Please upload MP4, MP3, or M4A files.",
            detail=subject,
        )


class EmptyArtifactError(PipelineError):
    """Raised when an acquired file is missing or has zero bytes."""

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or "Acquired media file is missing or empty", detail=path)


class ConversionFailedError(PipelineError):
    """Raised when every transcode profile failed for a video upload."""

    def __init__(self, file_name: str, reason: str, cause: Exception | None = None):
        self.file_name = file_name
        self.reason = reason
        super().__init__(
            f"Failed to extract audio from video: {reason}",
            detail=file_name,
            cause=cause,
        )


class CodecUnavailableError(ConversionFailedError):
    """Raised when conversion failed because the encoder is not installed."""

    def __init__(self, file_name: str, reason: str, cause: Exception | None = None):
        super().__init__(file_name, reason, cause)
        self.message = (
            f"FFmpeg codec issue: {reason}. Please ensure ffmpeg is installed "
            "with MP3 support (for example: brew install ffmpeg, apt install ffmpeg)."
        )
        self.args = (self.message,)


class AcquisitionFailedError(PipelineError):
    """Raised when the remote media fetcher fails."""

    def __init__(self, url: str, diagnostic: str, cause: Exception | None = None):
        self.url = url
        self.diagnostic = diagnostic
        super().__init__(
            f"Failed to download media: {diagnostic}", detail=url, cause=cause
        )


class TranscriptionFailedError(PipelineError):
    """Raised when the engine reports a non-success terminal status."""

    def __init__(self, source: str, engine_message: str | None = None):
        self.source = source
        super().__init__(engine_message or "Transcription failed", detail=source)


class EngineError(PipelineError):
    """Raised when talking to the transcription engine fails."""

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        super().__init__(
            "Failed to reach the transcription engine",
            detail=str(cause) if cause else source,
            cause=cause,
        )


class StorageError(PipelineError):
    """Raised when reading or writing an artifact fails."""

    def __init__(self, name: str, cause: Exception | None = None):
        self.name = name
        super().__init__(
            f"Failed to store artifact '{name}'",
            detail=str(cause) if cause else None,
            cause=cause,
        )


class ArtifactNotFoundError(StorageError):
    """Raised when a requested artifact does not exist in the store."""

    def __init__(self, name: str):
        super().__init__(name)
        self.message = f"Artifact '{name}' not found"
        self.args = (self.message,)


class IllegalStateTransitionError(Exception):
    """Raised when a pipeline tries an out-of-order state change."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move from '{current}' to '{requested}'")
