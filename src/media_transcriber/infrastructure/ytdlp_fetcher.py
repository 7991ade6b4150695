"""yt-dlp implementation of the MediaFetcher interface."""

import logging
from pathlib import Path

import yt_dlp

from media_transcriber.domain.models import MediaMetadata
from media_transcriber.exceptions import AcquisitionFailedError

from .interfaces.media_fetcher import MediaFetcher

logger = logging.getLogger(__name__)


class YtDlpFetcher(MediaFetcher):
    """Downloads audio from video-hosting sites using yt-dlp."""

    def __init__(self, audio_format: str = "mp3", extra_options: dict | None = None):
        self._audio_format = audio_format
        self._extra_options = extra_options or {}

    def fetch_metadata(self, url: str) -> MediaMetadata:
        options = {"quiet": True, "no_warnings": True, "skip_download": True}
        options.update(self._extra_options)
        try:
            with yt_dlp.YoutubeDL(options) as ydl:
                info = ydl.extract_info(url, download=False)
        except Exception as e:
            logger.exception("Media metadata lookup failed", extra={"url": url})
            raise AcquisitionFailedError(url, str(e), e) from e

        info = info or {}
        metadata = MediaMetadata(
            title=info.get("title"),
            duration=info.get("duration"),
            uploader=info.get("uploader"),
        )
        logger.info(
            "Media metadata resolved", extra={"url": url, "title": metadata.title}
        )
        return metadata

    def download_audio(self, url: str, destination: Path) -> Path:
        """
        Downloads the best audio stream and converts it to the configured format.

        yt-dlp picks the container extension itself, so the output template
        uses the destination stem and the extract-audio postprocessor renames
        the result to <stem>.<audio_format>.
        """
        options = {
            "format": "bestaudio/best",
            "outtmpl": str(destination.with_suffix("")) + ".%(ext)s",
            "postprocessors": [
                {
                    "key": "FFmpegExtractAudio",
                    "preferredcodec": self._audio_format,
                }
            ],
            "quiet": True,
            "no_warnings": True,
            "noplaylist": True,
        }
        options.update(self._extra_options)

        try:
            with yt_dlp.YoutubeDL(options) as ydl:
                ydl.download([url])
        except Exception as e:
            logger.exception("Media download failed", extra={"url": url})
            raise AcquisitionFailedError(url, str(e), e) from e

        output = destination.with_suffix(f".{self._audio_format}")
        logger.info(
            "Media audio downloaded", extra={"url": url, "audio_path": str(output)}
        )
        return output
