"""Error taxonomy for the TubeRelay resolution pipeline.

Responsibilities
----------------
- Define the exception types raised by each pipeline stage so the formatter can
  map them onto user-facing replies without inspecting stage internals.
- Carry enough metadata (query, url, provider, captured failures) for logging
  and diagnostics.

Design Notes
------------
- Network failures are not wrapped: ``httpx`` exceptions surface from the retry
  executor unchanged and are folded into :class:`ProviderFailure` values by the
  orchestrator.
- :class:`AllProvidersFailedError` keeps every per-provider failure so legal
  block markers and 451 statuses can be detected after the fact.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from TubeRelay.types import ProviderFailure

__all__ = (
    "TubeRelayError",
    "EmptyQueryError",
    "NoSearchResultsError",
    "InvalidLinkError",
    "ProviderNoResultError",
    "AllProvidersFailedError",
    "PreviewSendError",
    "ALL_SOURCES_FAILED_MARKER",
)

ALL_SOURCES_FAILED_MARKER = "All download sources failed"


class TubeRelayError(Exception):
    """Base class for every error raised by TubeRelay."""


class EmptyQueryError(TubeRelayError):
    """Raised when the query is empty after trimming."""

    def __init__(self) -> None:
        super().__init__("Query is empty")


class NoSearchResultsError(TubeRelayError):
    """Raised when a free-text search yields no hits."""

    def __init__(self, query: str) -> None:
        super().__init__(f"No search results for {query!r}")
        self.query = query


class InvalidLinkError(TubeRelayError):
    """Raised when the canonical URL matches none of the accepted link forms."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Not a recognised video link: {url}")
        self.url = url


class ProviderNoResultError(TubeRelayError):
    """Raised by an adapter whose response lacks its success fields."""

    def __init__(self, provider: str, detail: str = "returned no download") -> None:
        super().__init__(f"{provider} {detail}")
        self.provider = provider


class AllProvidersFailedError(TubeRelayError):
    """Raised once every provider in the chain has failed."""

    def __init__(self, failures: Iterable[ProviderFailure] = ()) -> None:
        self.failures: Tuple[ProviderFailure, ...] = tuple(failures)
        names = ", ".join(failure.provider for failure in self.failures) or "none"
        super().__init__(f"{ALL_SOURCES_FAILED_MARKER} (tried: {names})")

    @property
    def statuses(self) -> Tuple[int, ...]:
        return tuple(f.status for f in self.failures if f.status is not None)


class PreviewSendError(TubeRelayError):
    """Raised when the preview message cannot be delivered (non-fatal)."""
