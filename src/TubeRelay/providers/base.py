"""
Base interface for download provider adapters.

Each adapter knows one external API: how to build its request URL and how to
recognise its own success shape. Adapters share nothing but the HTTP client,
so adding or removing a provider never touches another adapter or the
orchestrator.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx

from TubeRelay.config import RetryConfig
from TubeRelay.errors import ProviderNoResultError
from TubeRelay.tenacity_retry import SleepFn, execute_with_retry
from TubeRelay.types import ProviderDescriptor, ProviderResult

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched besides the RFC 3986 unreserved set.
_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    """Percent-encode a query value the way browsers encode URI components."""
    return quote(value, safe=_COMPONENT_SAFE)


def as_mapping(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


def non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


class BaseProviderAdapter(abc.ABC):
    """Abstract adapter resolving a canonical video URL through one provider API."""

    name: str

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: str,
        retry: Optional[RetryConfig] = None,
        sleep: Optional[SleepFn] = None,
    ) -> None:
        self._client = client
        self._endpoint = endpoint
        self._retry = retry or RetryConfig()
        self._sleep = sleep

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def query_params(self, canonical_url: str) -> Dict[str, str]:
        """Query parameters sent with the request; subclasses may extend."""
        return {"url": canonical_url}

    def request_url(self, canonical_url: str) -> str:
        query = "&".join(
            f"{key}={encode_component(value)}"
            for key, value in self.query_params(canonical_url).items()
        )
        return f"{self._endpoint}?{query}"

    @abc.abstractmethod
    def parse(self, payload: Any) -> ProviderResult:
        """Extract a result from the decoded JSON body.

        Raises:
            ProviderNoResultError: When the provider's success fields are absent
        """

    async def fetch(self, canonical_url: str) -> Any:
        """GET the provider endpoint and decode JSON, retrying any failure."""
        url = self.request_url(canonical_url)

        async def _request() -> Any:
            response = await self._client.get(url)
            response.raise_for_status()
            return response.json()

        return await execute_with_retry(
            _request,
            self._retry.max_attempts,
            backoff_step_s=self._retry.backoff_step_s,
            sleep=self._sleep,
        )

    async def resolve(self, canonical_url: str) -> ProviderResult:
        logger.debug(f"provider={self.name} resolving url={canonical_url}")
        payload = await self.fetch(canonical_url)
        return self.parse(payload)

    def no_result(self, detail: str = "returned no download") -> ProviderNoResultError:
        return ProviderNoResultError(self.name, detail)

    def descriptor(self) -> ProviderDescriptor:
        return ProviderDescriptor(name=self.name, invoke=self.resolve)
