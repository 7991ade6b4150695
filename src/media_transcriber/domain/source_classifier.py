"""Classifies arbitrary URLs as feeds, direct audio, or neither."""

import logging

from media_transcriber.exceptions import (
    AccessDeniedError,
    SourceNotFoundError,
    UnreachableSourceError,
)
from media_transcriber.infrastructure.interfaces.source_probe import SourceProbe

from .models import ProbeResult, UrlKind
from .naming import has_audio_extension

logger = logging.getLogger(__name__)

FEED_CONTENT_TYPES = ("application/rss+xml", "text/xml", "application/xml")
AUDIO_EXTENSIONS = ("mp3", "m4a", "wav", "aac")


class SourceClassifier:
    """Decides how a URL should be handled from a metadata-only probe."""

    def __init__(
        self,
        probe: SourceProbe,
        audio_extensions: tuple[str, ...] = AUDIO_EXTENSIONS,
    ):
        self._probe = probe
        self._audio_extensions = audio_extensions

    def classify(self, url: str) -> UrlKind:
        """
        Probes a URL and classifies it.

        Args:
            url: The URL to classify.

        Returns:
            UrlKind.FEED, UrlKind.AUDIO or UrlKind.UNKNOWN.

        Raises:
            AccessDeniedError: If the server answers 403.
            SourceNotFoundError: If the server answers 404.
            UnreachableSourceError: For any other error status or transport failure.
        """
        result = self._probe.probe(url)
        self._raise_for_status(url, result)

        kind = self.classify_response(url, result.content_type)
        logger.info(
            "URL classified",
            extra={
                "url": url,
                "content_type": result.content_type,
                "url_kind": kind.value,
            },
        )
        return kind

    def classify_response(self, url: str, content_type: str) -> UrlKind:
        """
        Classifies a successful probe.

        Checks run in a fixed order: explicit feed type, explicit audio type,
        URL extension, any XML type. Servers that label audio as generic XML
        therefore end up as feeds and fail later as invalid feeds.
        """
        content_type = (content_type or "").lower()

        if any(feed_type in content_type for feed_type in FEED_CONTENT_TYPES):
            return UrlKind.FEED
        if "audio/" in content_type:
            return UrlKind.AUDIO
        if has_audio_extension(url, self._audio_extensions):
            return UrlKind.AUDIO
        if "xml" in content_type:
            return UrlKind.FEED
        return UrlKind.UNKNOWN

    @staticmethod
    def _raise_for_status(url: str, result: ProbeResult) -> None:
        if result.status_code == 403:
            raise AccessDeniedError(url)
        if result.status_code == 404:
            raise SourceNotFoundError(url)
        if result.status_code >= 400:
            raise UnreachableSourceError(url, result.status_code, result.reason)
