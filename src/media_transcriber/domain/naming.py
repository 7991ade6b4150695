"""File name derivation shared by acquisition and transcript storage."""

import os
import re
from urllib.parse import urlparse

_UNSAFE_TITLE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def safe_title(title: str) -> str:
    """Maps a display title onto a lowercase name safe for any filesystem."""
    return _UNSAFE_TITLE.sub("_", title).lower()


def derive_base_name(file_name: str) -> str:
    """
    Strips the extension from a caller-provided file name or title.

    Path separators are replaced so the result is a single path segment,
    e.g. "My Episode.m4a" -> "My Episode".
    """
    base = os.path.splitext(file_name.strip())[0]
    base = base.replace("/", "_").replace("\\", "_").strip()
    return base or "transcript"


def url_file_name(url: str, default: str = "podcast-episode") -> str:
    """Returns the last path segment of a URL with its query dropped."""
    segment = url.split("/")[-1].split("?")[0]
    return segment or default


def has_audio_extension(url: str, extensions: tuple[str, ...]) -> bool:
    """Checks whether the path of a URL ends in one of the given extensions."""
    path = urlparse(url).path.lower()
    return any(path.endswith(f".{ext.lower()}") for ext in extensions)
