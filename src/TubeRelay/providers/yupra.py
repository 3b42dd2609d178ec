"""Yupra ytmp4 adapter.

Response shape::

    {"success": true, "data": {"download_url": "...", "title": "...", "thumbnail": "..."}}
"""

from __future__ import annotations

from typing import Any

from TubeRelay.providers.base import BaseProviderAdapter, as_mapping, non_empty_str
from TubeRelay.types import ProviderResult


class YupraAdapter(BaseProviderAdapter):
    name = "Yupra"

    def parse(self, payload: Any) -> ProviderResult:
        body = as_mapping(payload)
        data = as_mapping(body.get("data")) if body and body.get("success") else None
        download_url = non_empty_str(data.get("download_url")) if data else None
        if data is None or download_url is None:
            raise self.no_result()

        return ProviderResult(
            download_url=download_url,
            title=non_empty_str(data.get("title")),
            thumbnail=non_empty_str(data.get("thumbnail")),
        )
