"""EliteProTech ytdown adapter (primary provider).

Response shape::

    {"success": true, "downloadURL": "https://...", "title": "..."}
"""

from __future__ import annotations

from typing import Any, Dict

from TubeRelay.providers.base import BaseProviderAdapter, as_mapping, non_empty_str
from TubeRelay.types import ProviderResult


class EliteProTechAdapter(BaseProviderAdapter):
    name = "EliteProTech"

    def query_params(self, canonical_url: str) -> Dict[str, str]:
        return {"url": canonical_url, "format": "mp4"}

    def parse(self, payload: Any) -> ProviderResult:
        data = as_mapping(payload)
        if data is None or not data.get("success"):
            raise self.no_result("ytdown returned no download")

        download_url = non_empty_str(data.get("downloadURL"))
        if download_url is None:
            raise self.no_result("ytdown returned no download")

        return ProviderResult(download_url=download_url, title=non_empty_str(data.get("title")))
