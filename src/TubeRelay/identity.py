"""Link/identity resolution.

Turns a raw query into a :class:`VideoIdentity`:

- Input starting with ``http://`` or ``https://`` is used verbatim; the search
  backend is not consulted.
- Any other input is searched as a whole and the first ranked hit wins.
- Either way the canonical URL must match an accepted link form, otherwise
  :class:`InvalidLinkError` is raised before any provider is contacted.
"""

from __future__ import annotations

import logging

from TubeRelay.errors import EmptyQueryError, InvalidLinkError, NoSearchResultsError
from TubeRelay.links import extract_video_id, is_direct_link
from TubeRelay.search import SearchBackend
from TubeRelay.types import VideoIdentity

LOGGER = logging.getLogger(__name__)


class IdentityResolver:
    """Resolve a query to the canonical video identity."""

    def __init__(self, search: SearchBackend) -> None:
        self._search = search

    async def resolve(self, query: str) -> VideoIdentity:
        text = (query or "").strip()
        if not text:
            raise EmptyQueryError()

        if is_direct_link(text):
            LOGGER.debug(f"identity.direct url={text}")
            canonical_url, title, thumbnail = text, None, None
        else:
            hits = await self._search.search(text)
            if not hits:
                raise NoSearchResultsError(text)
            top = hits[0]
            LOGGER.debug(f"identity.search url={top.url} title={top.title!r}")
            canonical_url, title, thumbnail = top.url, top.title, top.thumbnail

        video_id = extract_video_id(canonical_url)
        if video_id is None:
            raise InvalidLinkError(canonical_url)

        return VideoIdentity(
            canonical_url=canonical_url,
            title=title,
            thumbnail=thumbnail,
            video_id=video_id,
        )


__all__ = ["IdentityResolver"]
