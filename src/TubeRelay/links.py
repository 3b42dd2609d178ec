"""Video link recognition.

Accepted forms (``<id>`` is exactly 11 characters of ``[A-Za-z0-9_-]``)::

    youtu.be/<id>
    (www.|m.)youtube.com/watch?v=<id>
    youtube.com/v/<id>
    youtube.com/embed/<id>
    youtube.com/shorts/<id>
    youtube.com/playlist?list=<id>
"""

from __future__ import annotations

import re
from typing import Optional

DIRECT_LINK_PREFIXES = ("http://", "https://")

VIDEO_LINK_RE = re.compile(
    r"(?:https?://)?"
    r"(?:youtu\.be/|(?:www\.|m\.)?youtube\.com/(?:watch\?v=|v/|embed/|shorts/|playlist\?list=)?)"
    r"([a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)

THUMBNAIL_URL_TEMPLATE = "https://i.ytimg.com/vi/{video_id}/sddefault.jpg"


def is_direct_link(text: str) -> bool:
    """True when the trimmed text starts with an http(s) scheme."""
    return text.strip().startswith(DIRECT_LINK_PREFIXES)


def extract_video_id(url: str) -> Optional[str]:
    """Return the 11-character video id, or None if no accepted form matches."""
    match = VIDEO_LINK_RE.search(url or "")
    return match.group(1) if match else None


def thumbnail_url(video_id: str) -> str:
    return THUMBNAIL_URL_TEMPLATE.format(video_id=video_id)


__all__ = [
    "DIRECT_LINK_PREFIXES",
    "THUMBNAIL_URL_TEMPLATE",
    "VIDEO_LINK_RE",
    "extract_video_id",
    "is_direct_link",
    "thumbnail_url",
]
