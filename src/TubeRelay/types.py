# === NAVMAP v1 ===
# {
#   "module": "TubeRelay.types",
#   "purpose": "Core data types shared by the resolution pipeline.",
#   "sections": [
#     {
#       "id": "videoidentity",
#       "name": "VideoIdentity",
#       "anchor": "class-videoidentity",
#       "kind": "class"
#     },
#     {
#       "id": "providerresult",
#       "name": "ProviderResult",
#       "anchor": "class-providerresult",
#       "kind": "class"
#     },
#     {
#       "id": "resolutionsuccess",
#       "name": "ResolutionSuccess",
#       "anchor": "class-resolutionsuccess",
#       "kind": "class"
#     },
#     {
#       "id": "allprovidersfailed",
#       "name": "AllProvidersFailed",
#       "anchor": "class-allprovidersfailed",
#       "kind": "class"
#     }
#   ]
# }
# === /NAVMAP ===

"""Core data types for the TubeRelay resolution pipeline.

This module defines the dataclasses passed between pipeline stages:

- VideoIdentity: Canonical video link plus optional search metadata
- SearchHit: One ranked hit returned by a search backend
- ProviderDescriptor: Named provider entry in the fallback chain
- ProviderResult: Normalised provider response (download URL + metadata)
- ProviderFailure: Captured failure of one provider
- ResolutionOutcome: ResolutionSuccess | AllProvidersFailed
- TextMessage / ImageMessage / VideoMessage: Outbound sink payloads

All value types are frozen dataclasses. None of them outlives a single request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, Tuple, Union

# ============================================================================
# Identity
# ============================================================================


@dataclass(frozen=True)
class SearchHit:
    """One ranked result returned by a search backend."""

    url: str
    title: Optional[str] = None
    thumbnail: Optional[str] = None


@dataclass(frozen=True)
class VideoIdentity:
    """Canonical identity of the requested video.

    Attributes:
        canonical_url: Link handed verbatim to every provider
        title: Title reported by search (unset for direct links)
        thumbnail: Thumbnail reported by search (unset for direct links)
        video_id: 11-character identifier extracted during link validation

    Example:
        ```python
        identity = VideoIdentity(
            canonical_url="https://youtu.be/abcdefghijk",
            title="Lofi Radio",
            video_id="abcdefghijk",
        )
        ```
    """

    canonical_url: str = field()
    title: Optional[str] = field(default=None)
    thumbnail: Optional[str] = field(default=None)
    video_id: Optional[str] = field(default=None)

    def __post_init__(self) -> None:
        if not self.canonical_url or not self.canonical_url.strip():
            raise ValueError("canonical_url must be a non-empty string")


# ============================================================================
# Providers
# ============================================================================


@dataclass(frozen=True)
class ProviderResult:
    """Normalised result of a provider lookup.

    Adapters only build a result once their own success indicator is present;
    the orchestrator still re-checks ``download_url`` before accepting it.
    """

    download_url: str
    title: Optional[str] = None
    thumbnail: Optional[str] = None


ProviderInvoke = Callable[[str], Awaitable[ProviderResult]]


@dataclass(frozen=True)
class ProviderDescriptor:
    """Named entry in the fallback chain.

    Attributes:
        name: Provider identifier used in logs and diagnostics
        invoke: Coroutine function mapping a canonical URL to a ProviderResult
    """

    name: str
    invoke: ProviderInvoke


@dataclass(frozen=True)
class ProviderFailure:
    """Failure captured for one provider during fallback.

    Attributes:
        provider: Provider name
        reason: Human readable failure message
        status: HTTP status code when the failure came from an HTTP response
        error_type: Class name of the underlying exception
    """

    provider: str
    reason: str
    status: Optional[int] = None
    error_type: Optional[str] = None


# ============================================================================
# Resolution outcomes
# ============================================================================


@dataclass(frozen=True)
class ResolutionSuccess:
    """First usable provider result."""

    result: ProviderResult
    provider: str

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class AllProvidersFailed:
    """Every provider in the chain failed; failures are kept in chain order."""

    failures: Tuple[ProviderFailure, ...] = ()

    @property
    def is_success(self) -> bool:
        return False

    @property
    def providers(self) -> Tuple[str, ...]:
        return tuple(failure.provider for failure in self.failures)


ResolutionOutcome = Union[ResolutionSuccess, AllProvidersFailed]

# ============================================================================
# Outbound payloads
# ============================================================================


@dataclass(frozen=True)
class TextMessage:
    """Plain text reply."""

    text: str


@dataclass(frozen=True)
class ImageMessage:
    """Image referenced by URL, with a caption."""

    url: str
    caption: str


@dataclass(frozen=True)
class VideoMessage:
    """Video referenced by URL, with caption and suggested filename."""

    url: str
    caption: str
    filename: str
    mimetype: str = "video/mp4"


OutboundMessage = Union[TextMessage, ImageMessage, VideoMessage]


__all__ = [
    "AllProvidersFailed",
    "ImageMessage",
    "OutboundMessage",
    "ProviderDescriptor",
    "ProviderFailure",
    "ProviderInvoke",
    "ProviderResult",
    "ResolutionOutcome",
    "ResolutionSuccess",
    "SearchHit",
    "TextMessage",
    "VideoIdentity",
    "VideoMessage",
]
