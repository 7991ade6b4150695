"""requests + defusedxml implementation of the FeedFetcher interface."""

import html
import logging
import re
from urllib.parse import urljoin
from xml.etree.ElementTree import Element

import requests
from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, fromstring

from media_transcriber.domain.models import FeedEntry
from media_transcriber.exceptions import (
    AccessDeniedError,
    InvalidFeedFormatError,
    SourceNotFoundError,
    UnreachableSourceError,
)

from .interfaces.feed_fetcher import FeedFetcher

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 64 * 1024
MAX_FEED_BYTES = 20 * 1024 * 1024

_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


def _local_name(element: Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1].lower()


def _child(element: Element, name: str) -> Element | None:
    for child in element:
        if _local_name(child) == name:
            return child
    return None


def _child_text(element: Element, *names: str) -> str | None:
    for name in names:
        for child in element:
            if _local_name(child) == name and child.text and child.text.strip():
                return child.text.strip()
    return None


def _snippet(content: str | None) -> str | None:
    if not content:
        return None
    text = _WHITESPACE.sub(" ", html.unescape(_TAG.sub(" ", content))).strip()
    return text or None


def _resolve(base_url: str, url: str | None) -> str | None:
    if not url or not url.strip():
        return None
    return urljoin(base_url, url.strip())


def parse_feed(document: bytes, base_url: str) -> list[FeedEntry]:
    """
    Parses an RSS 2.0, RSS 1.0 or Atom document into raw entries.

    Raises:
        InvalidFeedFormatError: If the bytes are not well-formed XML or the
            root element is not a known feed type.
    """
    try:
        root = fromstring(document)
    except (ParseError, DefusedXmlException) as e:
        raise InvalidFeedFormatError(base_url, e) from e

    root_name = _local_name(root)
    if root_name in ("rss", "rdf"):
        items = [el for el in root.iter() if _local_name(el) == "item"]
        return [_parse_rss_item(item, base_url) for item in items]
    if root_name == "feed":
        entries = [el for el in root if _local_name(el) == "entry"]
        return [_parse_atom_entry(entry, base_url) for entry in entries]

    raise InvalidFeedFormatError(
        base_url, ValueError(f"Unexpected root element '{root_name}'")
    )


def _parse_rss_item(item: Element, base_url: str) -> FeedEntry:
    enclosure = _child(item, "enclosure")
    enclosure_url = None
    enclosure_type = None
    if enclosure is not None:
        enclosure_url = _resolve(base_url, enclosure.attrib.get("url"))
        enclosure_type = enclosure.attrib.get("type")

    content = _child_text(item, "encoded", "description")
    return FeedEntry(
        title=_child_text(item, "title"),
        link=_resolve(base_url, _child_text(item, "link")),
        enclosure_url=enclosure_url,
        enclosure_type=enclosure_type,
        content=content,
        content_snippet=_snippet(content),
        published=_child_text(item, "pubdate", "date"),
        duration=_child_text(item, "duration"),
        guid=_child_text(item, "guid"),
    )


def _parse_atom_entry(entry: Element, base_url: str) -> FeedEntry:
    link = None
    enclosure_url = None
    enclosure_type = None
    for child in entry:
        if _local_name(child) != "link":
            continue
        rel = child.attrib.get("rel", "alternate")
        if rel == "enclosure" and enclosure_url is None:
            enclosure_url = _resolve(base_url, child.attrib.get("href"))
            enclosure_type = child.attrib.get("type")
        elif rel == "alternate" and link is None:
            link = _resolve(base_url, child.attrib.get("href"))

    content = _child_text(entry, "content", "summary")
    return FeedEntry(
        title=_child_text(entry, "title"),
        link=link,
        enclosure_url=enclosure_url,
        enclosure_type=enclosure_type,
        content=content,
        content_snippet=_snippet(content),
        published=_child_text(entry, "published", "updated"),
        duration=_child_text(entry, "duration"),
        guid=_child_text(entry, "id"),
    )


class RequestsFeedFetcher(FeedFetcher):
    """Downloads feeds over HTTP and parses them with defusedxml."""

    def __init__(
        self,
        session: requests.Session,
        timeout: float,
        user_agent: str,
        max_bytes: int = MAX_FEED_BYTES,
    ):
        self._session = session
        self._timeout = timeout
        self._user_agent = user_agent
        self._max_bytes = max_bytes

    def fetch(self, url: str) -> list[FeedEntry]:
        document = self._download(url)
        entries = parse_feed(document, url)
        logger.info(
            "Feed parsed",
            extra={"url": url, "entry_count": len(entries), "size": len(document)},
        )
        return entries

    def _download(self, url: str) -> bytes:
        try:
            response = self._session.get(
                url,
                timeout=self._timeout,
                stream=True,
                headers={"User-Agent": self._user_agent},
            )
        except requests.RequestException as e:
            logger.exception("Feed download failed", extra={"url": url})
            raise UnreachableSourceError(url, cause=e) from e

        try:
            if response.status_code == 403:
                raise AccessDeniedError(url)
            if response.status_code == 404:
                raise SourceNotFoundError(url)
            if response.status_code >= 400:
                raise UnreachableSourceError(
                    url, response.status_code, response.reason
                )

            body = bytearray()
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                body.extend(chunk)
                if len(body) > self._max_bytes:
                    raise InvalidFeedFormatError(
                        url,
                        ValueError(f"Feed document exceeds {self._max_bytes} bytes"),
                    )
            return bytes(body)
        except requests.RequestException as e:
            logger.exception("Feed download interrupted", extra={"url": url})
            raise UnreachableSourceError(url, cause=e) from e
        finally:
            response.close()
