"""Abstract interface for syndication feed retrieval."""

from abc import ABC, abstractmethod

from media_transcriber.domain.models import FeedEntry


class FeedFetcher(ABC):
    """Downloads and parses syndication feeds."""

    @abstractmethod
    def fetch(self, url: str) -> list[FeedEntry]:
        """
        Fetches a feed and returns its raw entries in document order.

        Args:
            url: The feed URL.

        Returns:
            Parsed entries with optional enclosure, link and content fields.

        Raises:
            InvalidFeedFormatError: If the document is not a parseable feed.
            AccessDeniedError, SourceNotFoundError, UnreachableSourceError:
                If the feed cannot be downloaded.
        """
        pass
