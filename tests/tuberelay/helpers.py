"""In-memory collaborators for TubeRelay tests.

Provider HTTP traffic is served by ``httpx.MockTransport`` routed on host, retry
sleeps are recorded instead of slept, and the sink/search collaborators are
in-memory fakes.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx

from TubeRelay.types import OutboundMessage, SearchHit

ELITE_HOST = "eliteprotech-apis.zone.id"
YUPRA_HOST = "api.yupra.my.id"
OKATSU_HOST = "okatsu-rolezapiiz.vercel.app"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingSleep:
    """Awaitable stand-in for asyncio.sleep that only records delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class RecordingSink:
    """Message sink keeping every payload; optionally fails on given types."""

    def __init__(self, fail_on: tuple = ()) -> None:
        self.messages: List[OutboundMessage] = []
        self._fail_on = fail_on

    async def send(self, message: OutboundMessage) -> None:
        if isinstance(message, self._fail_on):
            raise ConnectionError("sink unavailable")
        self.messages.append(message)

    @property
    def last(self) -> OutboundMessage:
        return self.messages[-1]


class FakeSearch:
    """Search backend returning canned hits and recording queries."""

    def __init__(self, hits: Sequence[SearchHit] = ()) -> None:
        self.hits = list(hits)
        self.queries: List[str] = []

    async def search(self, text: str) -> Sequence[SearchHit]:
        self.queries.append(text)
        return self.hits


class ProviderRouter:
    """MockTransport handler dispatching on request host."""

    def __init__(self, routes: Optional[Dict[str, Handler]] = None) -> None:
        self.routes: Dict[str, Handler] = dict(routes or {})
        self.calls: Dict[str, List[httpx.Request]] = defaultdict(list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.calls[host].append(request)
        handler = self.routes.get(host)
        if handler is None:
            return httpx.Response(404, json={"error": "no route"})
        return handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def json_response(payload: Any, status: int = 200) -> Handler:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=payload)

    return _handler
