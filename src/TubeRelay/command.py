"""
Video command pipeline.

Wires the stages together for one request:

1. Identity resolution (empty query / no hits / invalid link fail here)
2. Best-effort thumbnail preview (failures are logged and ignored). It is
   sent only once the link is validated, so a search hit with a thumbnail
   but an unrecognised URL gets the invalid-link reply and no preview.
3. Provider fallback
4. Final payload: the video, or the classified error text

Every request ends with exactly one terminal message sent to the sink.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from TubeRelay.config import TubeRelayConfig
from TubeRelay.errors import AllProvidersFailedError, PreviewSendError
from TubeRelay.fallback import FallbackOrchestrator
from TubeRelay.formatter import build_preview_message, build_video_message, classify_error
from TubeRelay.identity import IdentityResolver
from TubeRelay.net import build_http_client
from TubeRelay.providers import build_provider_chain
from TubeRelay.search import SearchBackend, YtDlpSearch
from TubeRelay.tenacity_retry import SleepFn
from TubeRelay.types import (
    AllProvidersFailed,
    OutboundMessage,
    TextMessage,
    VideoIdentity,
)

LOGGER = logging.getLogger(__name__)


class MessageSink(Protocol):
    """Messaging transport delivering payloads to the end user."""

    async def send(self, message: OutboundMessage) -> None:
        ...


def extract_query(text: str) -> str:
    """Drop the leading command word: ``".video lofi radio"`` → ``"lofi radio"``."""
    return " ".join((text or "").split(" ")[1:]).strip()


class VideoCommand:
    """Resolve a query and reply through a sink."""

    def __init__(
        self,
        resolver: IdentityResolver,
        orchestrator: FallbackOrchestrator,
        caption_footer: str = "",
    ) -> None:
        self.resolver = resolver
        self.orchestrator = orchestrator
        self.caption_footer = caption_footer

    @classmethod
    def from_config(
        cls,
        config: TubeRelayConfig,
        client: httpx.AsyncClient,
        search: Optional[SearchBackend] = None,
        sleep: Optional[SleepFn] = None,
    ) -> "VideoCommand":
        search = search or YtDlpSearch(max_results=config.search.max_results)
        providers = build_provider_chain(config, client, sleep=sleep)
        return cls(
            resolver=IdentityResolver(search),
            orchestrator=FallbackOrchestrator(providers),
            caption_footer=config.messages.caption_footer,
        )

    async def _send_preview(self, identity: VideoIdentity, query: str, sink: MessageSink) -> None:
        preview = build_preview_message(identity, query)
        if preview is None:
            return
        try:
            await sink.send(preview)
        except Exception as exc:  # pylint: disable=broad-except
            raise PreviewSendError(f"preview send failed: {exc}") from exc

    async def _resolve_message(self, query: str, sink: MessageSink) -> OutboundMessage:
        identity = await self.resolver.resolve(query)

        try:
            await self._send_preview(identity, query, sink)
        except PreviewSendError as exc:
            LOGGER.warning(f"[video] {exc}")

        outcome = await self.orchestrator.resolve_download(identity)
        if isinstance(outcome, AllProvidersFailed):
            raise AllProvidersFailedError(outcome.failures)

        LOGGER.info(f"[video] resolved provider={outcome.provider} url={identity.canonical_url}")
        return build_video_message(outcome.result, identity, query, self.caption_footer)

    async def handle(self, query: str, sink: MessageSink) -> OutboundMessage:
        """Run the pipeline and send the terminal message; returns what was sent."""
        try:
            message = await self._resolve_message(query, sink)
            await sink.send(message)
            return message
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.error(f"[video] command error: {exc}")
            reply = TextMessage(text=classify_error(exc))
            await sink.send(reply)
            return reply


async def run_video_command(
    query: str,
    sink: MessageSink,
    config: Optional[TubeRelayConfig] = None,
    search: Optional[SearchBackend] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: Optional[SleepFn] = None,
) -> OutboundMessage:
    """One-shot helper owning the HTTP client for a single request."""
    config = config or TubeRelayConfig()
    async with build_http_client(config.http, transport=transport) as client:
        command = VideoCommand.from_config(config, client, search=search, sleep=sleep)
        return await command.handle(query, sink)


__all__ = ["MessageSink", "VideoCommand", "extract_query", "run_video_command"]
