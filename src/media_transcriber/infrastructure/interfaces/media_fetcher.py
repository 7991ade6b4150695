"""Abstract interface for remote video/audio download."""

from abc import ABC, abstractmethod
from pathlib import Path

from media_transcriber.domain.models import MediaMetadata


class MediaFetcher(ABC):
    """Resolves and downloads media from video-hosting URLs."""

    @abstractmethod
    def fetch_metadata(self, url: str) -> MediaMetadata:
        """
        Resolves metadata of a remote media page without downloading it.

        Raises:
            AcquisitionFailedError: If the URL cannot be resolved.
        """
        pass

    @abstractmethod
    def download_audio(self, url: str, destination: Path) -> Path:
        """
        Downloads the media and extracts its audio track to the destination.

        Args:
            url: The media page URL.
            destination: Target audio file path including its extension.

        Returns:
            Path of the written audio file.

        Raises:
            AcquisitionFailedError: If download or extraction fails.
        """
        pass
