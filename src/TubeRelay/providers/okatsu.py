"""Okatsu ytmp4 adapter (last resort).

Response shape::

    {"status": ..., "creator": "...", "url": "...",
     "result": {"status": ..., "title": "...", "mp4": "https://..."}}

Success is signalled by the nested ``result`` object carrying ``mp4``; an
explicit ``result.status`` of ``false`` is treated as a failure.
"""

from __future__ import annotations

from typing import Any

from TubeRelay.providers.base import BaseProviderAdapter, as_mapping, non_empty_str
from TubeRelay.types import ProviderResult


class OkatsuAdapter(BaseProviderAdapter):
    name = "Okatsu"

    def parse(self, payload: Any) -> ProviderResult:
        body = as_mapping(payload)
        result = as_mapping(body.get("result")) if body else None
        if result is None or result.get("status") is False:
            raise self.no_result("ytmp4 returned no mp4")

        mp4 = non_empty_str(result.get("mp4"))
        if mp4 is None:
            raise self.no_result("ytmp4 returned no mp4")

        return ProviderResult(download_url=mp4, title=non_empty_str(result.get("title")))
