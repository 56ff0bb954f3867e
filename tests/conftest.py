"""Shared pytest configuration and fixtures for the infodetect test suite."""

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from infodetect.normalizer import (  # noqa: E402
    ProviderEntry,
    normalize_ipify,
    normalize_ipinfo,
    normalize_ipwhois,
)


# =============================================================================
# Fakes
# =============================================================================

class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


# A provider answer is a JSON payload, an httpx.Response, an exception to
# raise, or an async callable producing one of those.
Answer = Union[Dict[str, Any], httpx.Response, Exception, Callable]


class FakeProviders:
    """
    httpx transport answering per host and recording the order of calls.

    Usage:
        fake = FakeProviders({"a.test": httpx.ReadTimeout("slow"), "b.test": {"ip": "1.2.3.4"}})
        client = httpx.AsyncClient(transport=fake.transport)
    """

    def __init__(self, answers: Dict[str, Answer]):
        self.answers = answers
        self.calls: List[str] = []
        self.transport = httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.calls.append(host)
        answer = self.answers.get(host)
        if callable(answer) and not isinstance(answer, Exception):
            answer = await answer(request)
        if answer is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)


def chain_providers() -> List[ProviderEntry]:
    """A (ipinfo-shaped) -> B (ipwhois-shaped) -> C (ipify-shaped)."""
    return [
        ProviderEntry(name="a", url="https://a.test/json", normalize=normalize_ipinfo),
        ProviderEntry(name="b", url="https://b.test/json/", normalize=normalize_ipwhois),
        ProviderEntry(name="c", url="https://c.test/?format=json", normalize=normalize_ipify),
    ]


async def never_answers(request: httpx.Request) -> httpx.Response:
    await asyncio.Event().wait()
    raise AssertionError("unreachable")


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def providers() -> List[ProviderEntry]:
    return chain_providers()


WINDOWS_7_CHROME_UA = (
    "Mozilla/5.0 (Windows NT 6.1; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/109.0.0.0 Safari/537.36"
)

MAC_CHROME_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

IPHONE_SAFARI_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)

SAMSUNG_UA = (
    "Mozilla/5.0 (Linux; Android 13; SAMSUNG SM-G998B) AppleWebKit/537.36 "
    "(KHTML, like Gecko) SamsungBrowser/15.0 Chrome/92.0.4515.159 Mobile Safari/537.36"
)
