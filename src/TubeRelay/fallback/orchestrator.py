# === NAVMAP v1 ===
# {
#   "module": "TubeRelay.fallback.orchestrator",
#   "purpose": "Sequential provider fallback orchestrator.",
#   "sections": [
#     {
#       "id": "failure-from-exception",
#       "name": "failure_from_exception",
#       "anchor": "function-failure-from-exception",
#       "kind": "function"
#     },
#     {
#       "id": "fallbackorchestrator",
#       "name": "FallbackOrchestrator",
#       "anchor": "class-fallbackorchestrator",
#       "kind": "class"
#     }
#   ]
# }
# === /NAVMAP ===

"""
Fallback Orchestrator

Tries each provider of the fixed chain in priority order:
- One provider at a time (no fan-out); lower-priority providers are only
  contacted after every higher-priority one has failed
- Each provider call is already guarded by its own retry executor
- Every attempt yields a tagged value (ProviderResult or ProviderFailure)
- The first usable result stops the loop
- If the chain is exhausted, all failures are returned for diagnostics
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence, Union

import httpx

from TubeRelay.types import (
    AllProvidersFailed,
    ProviderDescriptor,
    ProviderFailure,
    ProviderResult,
    ResolutionOutcome,
    ResolutionSuccess,
    VideoIdentity,
)

LOGGER = logging.getLogger(__name__)

AttemptValue = Union[ProviderResult, ProviderFailure]


def failure_from_exception(provider: str, exc: BaseException) -> ProviderFailure:
    """Capture an adapter error as a ProviderFailure value."""
    status: Optional[int] = None
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        # str(exc) embeds the request URL, which carries the user's link
        reason = f"HTTP {status} {exc.response.reason_phrase}".strip()
    else:
        status = getattr(exc, "status", None)
        if not isinstance(status, int):
            status = None
        reason = str(exc) or type(exc).__name__

    return ProviderFailure(
        provider=provider,
        reason=reason,
        status=status,
        error_type=type(exc).__name__,
    )


def has_download_url(result: object) -> bool:
    download_url = getattr(result, "download_url", None)
    return isinstance(download_url, str) and bool(download_url.strip())


class FallbackOrchestrator:
    """
    Resolves a download URL by walking the provider chain sequentially.

    Attributes:
        providers: Ordered provider descriptors (order = priority)
        logger: Logger instance
    """

    def __init__(
        self,
        providers: Sequence[ProviderDescriptor],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.providers = tuple(providers)
        self.logger = logger or LOGGER

    async def _attempt(self, provider: ProviderDescriptor, url: str) -> AttemptValue:
        t0 = time.perf_counter()
        try:
            result = await provider.invoke(url)
        except Exception as exc:  # pylint: disable=broad-except
            value: AttemptValue = failure_from_exception(provider.name, exc)
        else:
            if has_download_url(result):
                value = result
            else:
                value = ProviderFailure(
                    provider=provider.name,
                    reason=f"{provider.name} returned no download URL",
                    error_type="EmptyDownloadUrl",
                )

        elapsed_ms = int((time.perf_counter() - t0) * 1000)
        if isinstance(value, ProviderFailure):
            self.logger.info(
                f"provider={provider.name} outcome=failed elapsed_ms={elapsed_ms} "
                f"status={value.status} reason={value.reason}"
            )
        else:
            self.logger.info(f"provider={provider.name} outcome=success elapsed_ms={elapsed_ms}")
        return value

    async def resolve_download(self, identity: VideoIdentity) -> ResolutionOutcome:
        """Return the first usable provider result, or every captured failure."""
        failures: List[ProviderFailure] = []

        for provider in self.providers:
            value = await self._attempt(provider, identity.canonical_url)
            if isinstance(value, ProviderFailure):
                failures.append(value)
                continue
            return ResolutionSuccess(result=value, provider=provider.name)

        self.logger.warning(
            f"All providers exhausted url={identity.canonical_url} attempts={len(failures)}"
        )
        return AllProvidersFailed(failures=tuple(failures))


__all__ = ["FallbackOrchestrator", "failure_from_exception", "has_download_url"]
