"""Turns syndication feeds into playable episodes."""

import logging

from media_transcriber.exceptions import EmptyFeedError, NoAudioEpisodesError
from media_transcriber.infrastructure.interfaces.feed_fetcher import FeedFetcher

from .models import FeedEntry, FeedEpisode
from .naming import has_audio_extension
from .source_classifier import AUDIO_EXTENSIONS

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description available"


class FeedEpisodeExtractor:
    """Normalizes feed entries into episodes that carry an audio URL."""

    def __init__(
        self,
        fetcher: FeedFetcher,
        audio_extensions: tuple[str, ...] = AUDIO_EXTENSIONS,
    ):
        self._fetcher = fetcher
        self._audio_extensions = audio_extensions

    def extract(self, feed_url: str) -> list[FeedEpisode]:
        """
        Fetches a feed and returns its playable episodes in feed order.

        Args:
            feed_url: The feed URL.

        Returns:
            Episodes with every required field populated.

        Raises:
            InvalidFeedFormatError: If the feed cannot be parsed.
            EmptyFeedError: If the feed has no entries.
            NoAudioEpisodesError: If no entry has a resolvable audio URL.
        """
        entries = self._fetcher.fetch(feed_url)
        if not entries:
            raise EmptyFeedError(feed_url)

        episodes = []
        seen_guids = set()
        for index, entry in enumerate(entries):
            episode = self._to_episode(entry, index)
            if episode is None:
                logger.info(
                    "Feed entry skipped, no audio",
                    extra={"feed_url": feed_url, "entry_index": index},
                )
                continue
            # upstream feeds occasionally repeat guids
            if episode.guid in seen_guids:
                episode = episode.model_copy(
                    update={"guid": self._unique_guid(episode.guid, index, seen_guids)}
                )
            seen_guids.add(episode.guid)
            episodes.append(episode)

        if not episodes:
            raise NoAudioEpisodesError(feed_url, len(entries))

        logger.info(
            "Feed episodes extracted",
            extra={
                "feed_url": feed_url,
                "entry_count": len(entries),
                "episode_count": len(episodes),
            },
        )
        return episodes

    @staticmethod
    def _unique_guid(guid: str, index: int, seen: set[str]) -> str:
        candidate = f"{guid}-{index}"
        suffix = 1
        while candidate in seen:
            candidate = f"{guid}-{index}-{suffix}"
            suffix += 1
        return candidate

    def _to_episode(self, entry: FeedEntry, index: int) -> FeedEpisode | None:
        audio_url = self._audio_url(entry)
        if not audio_url:
            return None

        return FeedEpisode(
            title=entry.title or f"Episode {index + 1}",
            description=entry.content_snippet or entry.content or NO_DESCRIPTION,
            published_at=entry.published or "",
            audio_url=audio_url,
            duration=entry.duration or None,
            guid=entry.guid or f"episode-{index}",
        )

    def _audio_url(self, entry: FeedEntry) -> str | None:
        """Prefers the enclosure, then a link that points at an audio file."""
        if entry.enclosure_url:
            return entry.enclosure_url
        if entry.link and has_audio_extension(entry.link, self._audio_extensions):
            return entry.link
        return None
