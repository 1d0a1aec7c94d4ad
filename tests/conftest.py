"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator

import httpx
import pytest

from statscache.config import get_settings
from statscache.http.client import UpstreamClient
from statscache.proxy.service import StatsProxy

TEST_URL = "https://stats.example.test/api/stats/custom-prop-values/name/?period=all"
TEST_TOKEN = "test-token"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingUpstream:
    """
    httpx MockTransport handler that serves queued bodies and counts calls.

    Each queued item is either a body string or an exception instance,
    which is raised instead of responding.
    """

    def __init__(self, *responses: str | Exception, content_type: str = "application/json") -> None:
        self._responses = list(responses)
        self.content_type = content_type
        self.calls = 0
        self.requests: list[httpx.Request] = []

    def queue(self, *responses: str | Exception) -> None:
        self._responses.extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        self.requests.append(request)
        item = self._responses.pop(0) if self._responses else "{}"
        if isinstance(item, Exception):
            raise item
        return httpx.Response(
            200,
            text=item,
            headers={"content-type": self.content_type},
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Keep cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def upstream() -> RecordingUpstream:
    return RecordingUpstream()


@pytest.fixture
def make_client() -> Callable[..., UpstreamClient]:
    """Factory for UpstreamClient instances backed by a mock transport."""

    def _make(handler, timeout: float = 5.0) -> UpstreamClient:
        return UpstreamClient(
            url=TEST_URL,
            bearer_token=TEST_TOKEN,
            timeout=timeout,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def proxy(upstream: RecordingUpstream, clock: FakeClock) -> StatsProxy:
    """StatsProxy with a 600s TTL, fake clock and recording upstream."""
    client = UpstreamClient(
        url=TEST_URL,
        bearer_token=TEST_TOKEN,
        transport=upstream.transport(),
    )
    return StatsProxy(upstream=client, ttl_seconds=600, clock=clock)
