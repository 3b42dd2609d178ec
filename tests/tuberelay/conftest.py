"""Shared fixtures for TubeRelay tests."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from TubeRelay.config import TubeRelayConfig
from TubeRelay.net import build_http_client
from tests.tuberelay.helpers import Handler, ProviderRouter, RecordingSink, RecordingSleep


@pytest.fixture
def config() -> TubeRelayConfig:
    return TubeRelayConfig()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def router() -> ProviderRouter:
    return ProviderRouter()


@pytest.fixture
def make_client(config: TubeRelayConfig) -> Callable[[Handler], httpx.AsyncClient]:
    def _make(handler: Handler) -> httpx.AsyncClient:
        return build_http_client(config.http, transport=httpx.MockTransport(handler))

    return _make
