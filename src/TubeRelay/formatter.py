"""Response formatting and error classification.

Responsibilities
----------------
- Build the outbound payloads: early preview image, final video, error text.
- Sanitise titles into filenames.
- Map any pipeline failure onto exactly one user-facing message. This is the
  only place failures become user text.

Error markers are checked in priority order: legal/regional block, HTTP 451,
the aggregate "all sources failed" marker, then the raw message.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

import httpx

from TubeRelay.errors import (
    ALL_SOURCES_FAILED_MARKER,
    AllProvidersFailedError,
    EmptyQueryError,
    InvalidLinkError,
    NoSearchResultsError,
)
from TubeRelay.links import thumbnail_url
from TubeRelay.types import ImageMessage, ProviderResult, VideoIdentity, VideoMessage

MSG_EMPTY_QUERY = "What video do you want to download?"
MSG_NO_RESULTS = "No videos found!"
MSG_INVALID_LINK = "This is not a valid YouTube link!"
MSG_BLOCKED = (
    "❌ Download blocked. The content may be unavailable in your region "
    "or due to legal restrictions."
)
MSG_UNAVAILABLE_451 = (
    "❌ Content unavailable (451). This may be due to legal restrictions or regional blocking."
)
MSG_ALL_FAILED = "❌ All download sources failed. The content may be unavailable or blocked."
MSG_FAILED_PREFIX = "❌ Download failed: "
MSG_GENERIC = "❌ Failed to download video."

BLOCKED_MARKER = "blocked"
LEGAL_STATUS = 451

MEDIA_EXTENSION = ".mp4"
MEDIA_MIMETYPE = "video/mp4"
DEFAULT_FILENAME_STEM = "video"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\s-]", re.ASCII)

# ============================================================================
# Payloads
# ============================================================================


def sanitize_filename(title: str, extension: str = MEDIA_EXTENSION) -> str:
    """Drop everything but ASCII word characters, whitespace and hyphens."""
    stem = _UNSAFE_FILENAME_CHARS.sub("", title or "")
    if not stem.strip():
        stem = DEFAULT_FILENAME_STEM
    return f"{stem}{extension}"


def display_title(result: Optional[ProviderResult], identity: Optional[VideoIdentity], query: str) -> str:
    """Provider title, else the resolved title, else the raw query."""
    if result is not None and result.title:
        return result.title
    if identity is not None and identity.title:
        return identity.title
    return query.strip()


def build_video_message(
    result: ProviderResult,
    identity: Optional[VideoIdentity],
    query: str,
    footer: str = "",
) -> VideoMessage:
    title = display_title(result, identity, query)
    caption = f"*{title}*"
    if footer:
        caption = f"{caption}\n\n{footer}"
    return VideoMessage(
        url=result.download_url,
        caption=caption,
        filename=sanitize_filename(title),
        mimetype=MEDIA_MIMETYPE,
    )


def build_preview_message(identity: VideoIdentity, query: str) -> Optional[ImageMessage]:
    """Thumbnail preview sent before providers are queried, if one is known."""
    thumb = identity.thumbnail
    if not thumb and identity.video_id:
        thumb = thumbnail_url(identity.video_id)
    if not thumb:
        return None
    title = identity.title or query.strip()
    return ImageMessage(url=thumb, caption=f"*{title}*\nDownloading...")


# ============================================================================
# Error classification
# ============================================================================


def _error_status(error: BaseException) -> Optional[int]:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    status = getattr(error, "status", None)
    return status if isinstance(status, int) else None


def _reasons(error: BaseException) -> List[str]:
    # HTTP status errors only carry the request URL; their status is checked separately
    reasons = [] if isinstance(error, httpx.HTTPStatusError) else [str(error)]
    if isinstance(error, AllProvidersFailedError):
        reasons.extend(failure.reason for failure in error.failures)
    return reasons


def _statuses(error: BaseException) -> Iterable[int]:
    status = _error_status(error)
    if status is not None:
        yield status
    if isinstance(error, AllProvidersFailedError):
        yield from error.statuses


def classify_error(error: BaseException) -> str:
    """Return the user-facing message for any pipeline failure."""
    if isinstance(error, EmptyQueryError):
        return MSG_EMPTY_QUERY
    if isinstance(error, NoSearchResultsError):
        return MSG_NO_RESULTS
    if isinstance(error, InvalidLinkError):
        return MSG_INVALID_LINK

    if any(BLOCKED_MARKER in reason.lower() for reason in _reasons(error)):
        return MSG_BLOCKED
    if LEGAL_STATUS in _statuses(error):
        return MSG_UNAVAILABLE_451

    message = str(error)
    if ALL_SOURCES_FAILED_MARKER in message:
        return MSG_ALL_FAILED
    if message:
        return MSG_FAILED_PREFIX + message
    return MSG_GENERIC


__all__ = [
    "MSG_ALL_FAILED",
    "MSG_BLOCKED",
    "MSG_EMPTY_QUERY",
    "MSG_FAILED_PREFIX",
    "MSG_GENERIC",
    "MSG_INVALID_LINK",
    "MSG_NO_RESULTS",
    "MSG_UNAVAILABLE_451",
    "build_preview_message",
    "build_video_message",
    "classify_error",
    "display_title",
    "sanitize_filename",
]
