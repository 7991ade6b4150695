import pytest

from fakes import FakeProbe
from media_transcriber.domain import SourceClassifier, UrlKind
from media_transcriber.exceptions import (
    AccessDeniedError,
    SourceNotFoundError,
    UnreachableSourceError,
)


def classify(url, content_type="", status_code=200, reason="OK"):
    probe = FakeProbe(status_code=status_code, content_type=content_type, reason=reason)
    return SourceClassifier(probe).classify(url)


@pytest.mark.parametrize(
    "content_type",
    ["application/rss+xml", "application/rss+xml; charset=utf-8", "text/xml", "application/xml"],
)
def test_feed_content_types_classify_as_feed(content_type):
    assert classify("https://example.com/feed", content_type) == UrlKind.FEED


def test_audio_content_type_wins_regardless_of_extension():
    assert classify("https://example.com/stream.php", "audio/mpeg") == UrlKind.AUDIO
    assert classify("https://example.com/feed.xml", "audio/x-m4a") == UrlKind.AUDIO


def test_audio_extension_fallback_ignores_query_string():
    kind = classify("https://cdn.example.com/ep1.MP3?token=abc", "application/octet-stream")
    assert kind == UrlKind.AUDIO


def test_feed_type_checked_before_extension():
    assert classify("https://example.com/ep1.mp3", "text/xml") == UrlKind.FEED


def test_generic_xml_type_is_feed():
    assert classify("https://example.com/podcast", "application/atom+xml") == UrlKind.FEED


def test_unrecognized_response_is_unknown():
    assert classify("https://example.com/page", "text/html") == UrlKind.UNKNOWN
    assert classify("https://example.com/page") == UrlKind.UNKNOWN


def test_extension_must_be_on_the_path():
    kind = classify("https://example.com/page?file=ep.mp3", "text/html")
    assert kind == UrlKind.UNKNOWN


def test_not_found_raises_source_not_found():
    with pytest.raises(SourceNotFoundError) as exc_info:
        classify("https://example.com/missing.mp3", "audio/mpeg", status_code=404)
    assert "File not found" in exc_info.value.message
    assert exc_info.value.detail == "https://example.com/missing.mp3"


def test_forbidden_raises_access_denied():
    with pytest.raises(AccessDeniedError) as exc_info:
        classify("https://example.com/private.mp3", status_code=403)
    assert "Access denied" in exc_info.value.message


def test_other_error_status_reports_code_and_reason():
    with pytest.raises(UnreachableSourceError) as exc_info:
        classify("https://example.com/feed", status_code=503, reason="Service Unavailable")
    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Unable to access URL: server returned 503 Service Unavailable"


def test_classification_is_repeatable():
    probe = FakeProbe(content_type="text/html")
    classifier = SourceClassifier(probe)
    url = "https://example.com/episode.m4a"

    assert classifier.classify(url) == classifier.classify(url) == UrlKind.AUDIO
    assert probe.calls == [url, url]


def test_custom_audio_extensions():
    classifier = SourceClassifier(FakeProbe(), audio_extensions=("ogg",))

    assert classifier.classify("https://example.com/a.ogg") == UrlKind.AUDIO
    assert classifier.classify("https://example.com/a.mp3") == UrlKind.UNKNOWN
