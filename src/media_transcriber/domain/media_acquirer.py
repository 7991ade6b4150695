"""Core business logic for turning media inputs into audio sources."""

import logging
import shutil
import time
import uuid
from pathlib import Path
from typing import BinaryIO

from media_transcriber.config import MediaConfig
from media_transcriber.exceptions import (
    CodecUnavailableError,
    ConversionFailedError,
    EmptyArtifactError,
    StorageError,
    UnsupportedFormatError,
)
from media_transcriber.infrastructure.interfaces.audio_transcoder import (
    AudioTranscoder,
    TranscodeError,
)
from media_transcriber.infrastructure.interfaces.media_fetcher import MediaFetcher

from .models import AudioSource, FeedEpisode, TranscodeDiagnostic
from .naming import safe_title, url_file_name

logger = logging.getLogger(__name__)


def ensure_non_empty(path: Path, message: str | None = None) -> None:
    """
    Checks that an acquired file exists, is a regular file and has content.

    Raises:
        EmptyArtifactError: If any of those does not hold.
    """
    if not path.is_file() or path.stat().st_size == 0:
        raise EmptyArtifactError(str(path), message)


class MediaAcquirer:
    """Produces an AudioSource from a video URL, an upload or a podcast episode."""

    def __init__(
        self,
        audio_dir: Path,
        fetcher: MediaFetcher,
        transcoder: AudioTranscoder,
        media_config: MediaConfig | None = None,
    ):
        self._audio_dir = audio_dir
        self._fetcher = fetcher
        self._transcoder = transcoder
        self._config = media_config or MediaConfig()

    def acquire_video_url(self, url: str) -> AudioSource:
        """
        Downloads the audio of a video-hosting URL into the audio directory.

        The file is named after the sanitized video title.

        Raises:
            AcquisitionFailedError: If the fetcher fails.
            EmptyArtifactError: If the fetcher produced no usable file.
        """
        metadata = self._fetcher.fetch_metadata(url)
        title = metadata.title or "audio"

        self._audio_dir.mkdir(parents=True, exist_ok=True)
        destination = self._audio_dir / f"{safe_title(title)}.{self._config.output_format}"

        logger.info(
            "Downloading media audio",
            extra={
                "url": url,
                "title": title,
                "duration": metadata.duration,
                "uploader": metadata.uploader,
                "audio_path": str(destination),
            },
        )
        audio_path = self._fetcher.download_audio(url, destination)
        ensure_non_empty(audio_path, "Downloaded audio file is missing or empty")

        return AudioSource.local(str(audio_path), title)

    def acquire_upload(self, file_name: str, data: BinaryIO) -> AudioSource:
        """
        Stages an uploaded file and, for video containers, extracts its audio.

        Args:
            file_name: The client-side file name, used for format checks and naming.
            data: A readable binary stream with the upload contents.

        Raises:
            UnsupportedFormatError: If the extension is not allowed.
            EmptyArtifactError: If the staged or converted file is empty.
            CodecUnavailableError: If conversion failed for lack of an encoder.
            ConversionFailedError: If every transcode profile failed.
            StorageError: If the upload cannot be written to staging.
        """
        file_name = Path(file_name).name
        extension = Path(file_name).suffix.lower().lstrip(".")
        if extension not in self._config.upload_extensions:
            raise UnsupportedFormatError(file_name)

        staged_path = self._stage(data, extension)

        if extension in self._config.video_extensions:
            return self._extract_audio(staged_path, file_name)

        logger.info(
            "Audio upload staged",
            extra={"file_name": file_name, "audio_path": str(staged_path)},
        )
        return AudioSource.local(str(staged_path), file_name)

    def from_feed_episode(self, episode: FeedEpisode) -> AudioSource:
        """Points at the episode's audio URL; the engine fetches it itself."""
        return AudioSource.remote(episode.audio_url, episode.title)

    def from_audio_url(self, url: str) -> AudioSource:
        """Points at a direct audio URL, named after its last path segment."""
        return AudioSource.remote(url, url_file_name(url))

    def _stage(self, data: BinaryIO, extension: str) -> Path:
        self._audio_dir.mkdir(parents=True, exist_ok=True)
        timestamp = int(time.time() * 1000)
        staged_path = self._audio_dir / f"temp_{timestamp}_{uuid.uuid4().hex[:8]}.{extension}"

        try:
            with open(staged_path, "wb") as f:
                shutil.copyfileobj(data, f)
        except OSError as e:
            staged_path.unlink(missing_ok=True)
            logger.exception(
                "Upload staging failed", extra={"staged_path": str(staged_path)}
            )
            raise StorageError(staged_path.name, e) from e

        try:
            ensure_non_empty(staged_path, "Uploaded file is empty")
        except EmptyArtifactError:
            staged_path.unlink(missing_ok=True)
            raise

        return staged_path

    def _extract_audio(self, staged_path: Path, file_name: str) -> AudioSource:
        """
        Transcodes a staged video, trying each configured profile in order.

        The staged video is removed whether or not conversion succeeds.
        """
        audio_name = f"{Path(file_name).stem}.{self._config.output_format}"
        audio_path = self._audio_dir / audio_name

        last_error: TranscodeError | None = None
        for profile in self._config.transcode_profiles:
            try:
                self._transcoder.transcode(staged_path, audio_path, profile)
            except TranscodeError as e:
                last_error = e
                audio_path.unlink(missing_ok=True)
                logger.warning(
                    "Transcode profile failed",
                    extra={
                        "file_name": file_name,
                        "profile": profile.name,
                        "diagnostic": e.diagnostic.value,
                    },
                )
                continue
            break
        else:
            staged_path.unlink(missing_ok=True)
            audio_path.unlink(missing_ok=True)
            raise self._conversion_error(file_name, last_error)

        staged_path.unlink(missing_ok=True)
        try:
            ensure_non_empty(audio_path, "Extracted audio file is missing or empty")
        except EmptyArtifactError:
            audio_path.unlink(missing_ok=True)
            raise

        logger.info(
            "Video upload converted",
            extra={"file_name": file_name, "audio_path": str(audio_path)},
        )
        return AudioSource.local(str(audio_path), audio_name)

    @staticmethod
    def _conversion_error(
        file_name: str, error: TranscodeError | None
    ) -> ConversionFailedError:
        if error is None:
            return ConversionFailedError(file_name, "no transcode profiles configured")
        if error.diagnostic == TranscodeDiagnostic.CODEC_UNAVAILABLE:
            return CodecUnavailableError(file_name, error.reason, error)
        return ConversionFailedError(file_name, error.reason, error)
