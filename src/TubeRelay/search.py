"""Search backends resolving free text to ranked video hits.

The pipeline depends only on :class:`SearchBackend`. :class:`YtDlpSearch` is
the default implementation: it runs yt-dlp's ``ytsearchN:`` flat extraction in
a worker thread so the event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Mapping, Optional, Protocol, Sequence

import yt_dlp

from TubeRelay.types import SearchHit

LOGGER = logging.getLogger(__name__)

WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"


class SearchBackend(Protocol):
    """Full-text video search collaborator."""

    async def search(self, text: str) -> Sequence[SearchHit]:
        """Return hits ordered by relevance (may be empty)."""
        ...


def _entry_thumbnail(entry: Mapping[str, Any]) -> Optional[str]:
    if entry.get("thumbnail"):
        return entry["thumbnail"]
    thumbnails = entry.get("thumbnails") or []
    # yt-dlp orders thumbnails by preference, best last
    for thumb in reversed(thumbnails):
        if isinstance(thumb, Mapping) and thumb.get("url"):
            return thumb["url"]
    return None


def _entry_to_hit(entry: Mapping[str, Any]) -> Optional[SearchHit]:
    url = entry.get("webpage_url") or entry.get("url")
    if not url and entry.get("id"):
        url = WATCH_URL_TEMPLATE.format(video_id=entry["id"])
    if not url:
        return None
    return SearchHit(url=url, title=entry.get("title"), thumbnail=_entry_thumbnail(entry))


class YtDlpSearch:
    """YouTube search through yt-dlp flat playlist extraction."""

    def __init__(self, max_results: int = 5, ydl_opts: Optional[Mapping[str, Any]] = None) -> None:
        self._max_results = max_results
        self._ydl_opts = {
            "quiet": True,
            "no_warnings": True,
            "skip_download": True,
            "extract_flat": True,
            **(ydl_opts or {}),
        }

    def _search_sync(self, text: str) -> List[SearchHit]:
        with yt_dlp.YoutubeDL(self._ydl_opts) as ydl:
            info = ydl.extract_info(f"ytsearch{self._max_results}:{text}", download=False)

        hits: List[SearchHit] = []
        for entry in (info or {}).get("entries") or []:
            if not isinstance(entry, Mapping):
                continue
            hit = _entry_to_hit(entry)
            if hit is not None:
                hits.append(hit)
        return hits

    async def search(self, text: str) -> Sequence[SearchHit]:
        LOGGER.debug(f"search.query text={text!r} max_results={self._max_results}")
        hits = await asyncio.to_thread(self._search_sync, text)
        LOGGER.info(f"search.done hits={len(hits)}")
        return hits


__all__ = ["SearchBackend", "YtDlpSearch"]
