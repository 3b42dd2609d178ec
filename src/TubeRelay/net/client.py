"""
HTTPX AsyncClient Factory.

Builds the single client shared by every provider adapter of a request batch:
- Fixed per-request timeout (60 s by default)
- Browser-like User-Agent and JSON-accepting Accept headers
- Event hooks logging each request with its elapsed time

The caller owns the client and closes it (``async with``).
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from TubeRelay.config import HttpConfig

logger = logging.getLogger(__name__)


def build_http_client(
    config: Optional[HttpConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Build an AsyncClient configured for provider APIs.

    Args:
        config: HTTP settings (defaults apply when omitted)
        transport: Optional transport override (tests pass httpx.MockTransport)

    Returns:
        New httpx.AsyncClient
    """
    cfg = config or HttpConfig()
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(cfg.timeout_s),
        headers=cfg.headers(),
        follow_redirects=True,
        transport=transport,
    )
    client.event_hooks["request"] = [_on_request]
    client.event_hooks["response"] = [_on_response]

    logger.debug(f"HTTPX client created: timeout={cfg.timeout_s}s")
    return client


async def _on_request(request: httpx.Request) -> None:
    request.extensions["t0_perf"] = time.perf_counter()


async def _on_response(response: httpx.Response) -> None:
    req = response.request
    t0 = req.extensions.get("t0_perf", time.perf_counter())
    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    logger.debug(
        f"net.request method={req.method} host={req.url.host} "
        f"status={response.status_code} elapsed_ms={elapsed_ms:.1f}"
    )


__all__ = ["build_http_client"]
