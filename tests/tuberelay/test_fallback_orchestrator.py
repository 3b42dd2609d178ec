"""Tests for the sequential provider fallback orchestrator."""

from __future__ import annotations

import asyncio
import logging

import httpx
import pytest

from TubeRelay.errors import ProviderNoResultError
from TubeRelay.fallback import FallbackOrchestrator, failure_from_exception, has_download_url
from TubeRelay.types import (
    AllProvidersFailed,
    ProviderDescriptor,
    ProviderResult,
    ResolutionSuccess,
    VideoIdentity,
)

IDENTITY = VideoIdentity(canonical_url="https://youtu.be/abcdefghijk", video_id="abcdefghijk")


class ScriptedProvider:
    """Provider stub returning a fixed result or raising a fixed error."""

    def __init__(self, name, result=None, error=None):
        self.name = name
        self.result = result
        self.error = error
        self.calls = []

    async def __call__(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.result

    def descriptor(self):
        return ProviderDescriptor(name=self.name, invoke=self)


def _http_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://provider.test/api")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"status {status}", request=request, response=response)


def _run(*providers):
    orchestrator = FallbackOrchestrator([p.descriptor() for p in providers])
    return asyncio.run(orchestrator.resolve_download(IDENTITY))


def test_first_success_short_circuits():
    a = ScriptedProvider("A", result=ProviderResult(download_url="https://cdn/a.mp4"))
    b = ScriptedProvider("B", result=ProviderResult(download_url="https://cdn/b.mp4"))
    c = ScriptedProvider("C", result=ProviderResult(download_url="https://cdn/c.mp4"))

    outcome = _run(a, b, c)

    assert isinstance(outcome, ResolutionSuccess)
    assert outcome.is_success
    assert outcome.provider == "A"
    assert outcome.result.download_url == "https://cdn/a.mp4"
    assert a.calls == ["https://youtu.be/abcdefghijk"]
    assert b.calls == [] and c.calls == []


def test_falls_through_to_last_provider():
    a = ScriptedProvider("A", error=_http_error(500))
    b = ScriptedProvider("B", error=ProviderNoResultError("B"))
    c = ScriptedProvider("C", result=ProviderResult(download_url="https://cdn/c.mp4", title="C"))

    outcome = _run(a, b, c)

    assert isinstance(outcome, ResolutionSuccess)
    assert outcome.provider == "C"
    assert len(a.calls) == len(b.calls) == len(c.calls) == 1


def test_empty_download_url_is_rechecked():
    a = ScriptedProvider("A", result=ProviderResult(download_url="   "))
    b = ScriptedProvider("B", result=ProviderResult(download_url="https://cdn/b.mp4"))

    outcome = _run(a, b)

    assert isinstance(outcome, ResolutionSuccess)
    assert outcome.provider == "B"


def test_all_failed_keeps_every_failure_in_order():
    a = ScriptedProvider("A", error=_http_error(451))
    b = ScriptedProvider("B", error=ProviderNoResultError("B", "returned no download"))
    c = ScriptedProvider("C", result=ProviderResult(download_url=""))

    outcome = _run(a, b, c)

    assert isinstance(outcome, AllProvidersFailed)
    assert not outcome.is_success
    assert outcome.providers == ("A", "B", "C")
    first, second, third = outcome.failures
    assert first.status == 451
    assert first.error_type == "HTTPStatusError"
    assert second.reason == "B returned no download"
    assert second.status is None
    assert third.reason == "C returned no download URL"
    assert third.error_type == "EmptyDownloadUrl"


def test_empty_chain_fails_without_attempts():
    outcome = _run()
    assert isinstance(outcome, AllProvidersFailed)
    assert outcome.failures == ()


def test_attempts_are_logged(caplog):
    a = ScriptedProvider("A", error=RuntimeError("down"))
    b = ScriptedProvider("B", result=ProviderResult(download_url="https://cdn/b.mp4"))

    with caplog.at_level(logging.INFO, logger="TubeRelay.fallback.orchestrator"):
        _run(a, b)

    messages = [record.getMessage() for record in caplog.records]
    assert any("provider=A outcome=failed" in m for m in messages)
    assert any("provider=B outcome=success" in m for m in messages)


class TestFailureFromException:
    def test_http_status_captured(self):
        failure = failure_from_exception("A", _http_error(404))
        assert failure.status == 404
        assert failure.provider == "A"

    def test_status_attribute_captured(self):
        class StatusError(Exception):
            status = 451

        assert failure_from_exception("A", StatusError("gone")).status == 451

    def test_reason_falls_back_to_type_name(self):
        failure = failure_from_exception("A", TimeoutError())
        assert failure.reason == "TimeoutError"
        assert failure.status is None


@pytest.mark.parametrize(
    "result,expected",
    [
        (ProviderResult(download_url="https://cdn/x.mp4"), True),
        (ProviderResult(download_url=""), False),
        (ProviderResult(download_url="  "), False),
        (None, False),
    ],
)
def test_has_download_url(result, expected):
    assert has_download_url(result) is expected


def test_http_failure_reason_omits_request_url():
    request = httpx.Request("GET", "https://provider.test/api?url=https%3A%2F%2Fyoutu.be%2Fblocked_abc")
    response = httpx.Response(404, request=request)
    error = httpx.HTTPStatusError(f"404 for {request.url}", request=request, response=response)

    failure = failure_from_exception("A", error)

    assert failure.reason == "HTTP 404 Not Found"
    assert "blocked" not in failure.reason
