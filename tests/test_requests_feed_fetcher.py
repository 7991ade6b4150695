from unittest.mock import Mock

import pytest
import requests

from media_transcriber.exceptions import (
    AccessDeniedError,
    InvalidFeedFormatError,
    SourceNotFoundError,
    UnreachableSourceError,
)
from media_transcriber.infrastructure import RequestsFeedFetcher
from media_transcriber.infrastructure.requests_feed_fetcher import parse_feed

FEED_URL = "https://example.com/podcast/feed.xml"

RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
     xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd"
     xmlns:content="http://purl.org/rss/1.0/modules/content/"
     xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>Show</title>
    <item>
      <title>Pilot</title>
      <atom:link href="https://example.com/self" rel="self"/>
      <link>https://example.com/pilot</link>
      <description>&lt;p&gt;Our &lt;b&gt;first&lt;/b&gt; episode &amp;amp; more&lt;/p&gt;</description>
      <enclosure url="media/pilot.mp3" type="audio/mpeg" length="123"/>
      <pubDate>Mon, 01 Jan 2024 10:00:00 GMT</pubDate>
      <itunes:duration>00:42:00</itunes:duration>
      <guid isPermaLink="false">pilot-guid</guid>
    </item>
    <item>
      <title>Notes only</title>
      <link>https://example.com/notes</link>
    </item>
  </channel>
</rss>
"""

ATOM = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom show</title>
  <entry>
    <title>Entry one</title>
    <id>urn:uuid:1</id>
    <link rel="alternate" href="https://example.com/one"/>
    <link rel="enclosure" href="https://example.com/one.m4a" type="audio/mp4"/>
    <summary>Short summary</summary>
    <updated>2024-02-01T00:00:00Z</updated>
  </entry>
</feed>
"""


def make_response(status_code=200, body=b"", reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.iter_content.return_value = [body[i:i + 10] for i in range(0, len(body), 10)]
    return response


def test_parse_rss_items():
    pilot, notes = parse_feed(RSS, FEED_URL)

    assert pilot.title == "Pilot"
    assert pilot.link == "https://example.com/pilot"
    assert pilot.enclosure_url == "https://example.com/podcast/media/pilot.mp3"
    assert pilot.enclosure_type == "audio/mpeg"
    assert pilot.content_snippet == "Our first episode & more"
    assert pilot.published == "Mon, 01 Jan 2024 10:00:00 GMT"
    assert pilot.duration == "00:42:00"
    assert pilot.guid == "pilot-guid"

    assert notes.enclosure_url is None
    assert notes.content is None


def test_parse_atom_entries():
    [entry] = parse_feed(ATOM, FEED_URL)

    assert entry.title == "Entry one"
    assert entry.guid == "urn:uuid:1"
    assert entry.link == "https://example.com/one"
    assert entry.enclosure_url == "https://example.com/one.m4a"
    assert entry.content == "Short summary"
    assert entry.published == "2024-02-01T00:00:00Z"


def test_malformed_xml_is_invalid_feed():
    with pytest.raises(InvalidFeedFormatError):
        parse_feed(b"<rss><channel><item></rss>", FEED_URL)


def test_html_document_is_invalid_feed():
    with pytest.raises(InvalidFeedFormatError):
        parse_feed(b"<html><body>hello</body></html>", FEED_URL)


def test_entity_expansion_is_refused():
    bomb = b"""<?xml version="1.0"?>
<!DOCTYPE rss [<!ENTITY a "aaaaaaaaaa"><!ENTITY b "&a;&a;&a;&a;">]>
<rss><channel><item><title>&b;</title></item></channel></rss>
"""
    with pytest.raises(InvalidFeedFormatError):
        parse_feed(bomb, FEED_URL)


def test_fetch_downloads_and_parses():
    session = Mock()
    session.get.return_value = make_response(body=RSS)
    fetcher = RequestsFeedFetcher(session, timeout=5, user_agent="test-agent")

    entries = fetcher.fetch(FEED_URL)

    assert len(entries) == 2
    session.get.assert_called_once_with(
        FEED_URL, timeout=5, stream=True, headers={"User-Agent": "test-agent"}
    )
    session.get.return_value.close.assert_called_once()


@pytest.mark.parametrize(
    "status_code, error",
    [(403, AccessDeniedError), (404, SourceNotFoundError), (500, UnreachableSourceError)],
)
def test_fetch_maps_error_status(status_code, error):
    session = Mock()
    session.get.return_value = make_response(status_code=status_code, reason="Nope")
    fetcher = RequestsFeedFetcher(session, timeout=5, user_agent="test-agent")

    with pytest.raises(error):
        fetcher.fetch(FEED_URL)


def test_fetch_transport_failure_is_unreachable():
    session = Mock()
    session.get.side_effect = requests.ConnectionError("refused")
    fetcher = RequestsFeedFetcher(session, timeout=5, user_agent="test-agent")

    with pytest.raises(UnreachableSourceError) as exc_info:
        fetcher.fetch(FEED_URL)
    assert exc_info.value.message == "Unable to access the provided URL"


def test_fetch_refuses_oversized_documents():
    session = Mock()
    session.get.return_value = make_response(body=RSS)
    fetcher = RequestsFeedFetcher(session, timeout=5, user_agent="test-agent", max_bytes=50)

    with pytest.raises(InvalidFeedFormatError):
        fetcher.fetch(FEED_URL)
