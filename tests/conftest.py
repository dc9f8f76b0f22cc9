"""
Pytest configuration and fixtures
"""

import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest
import pytest_asyncio

from core.config import Settings
from pipeline.client import RequestExecutor

TEST_BASE_URL = "http://remote.test"


class FakeRemote:
    """
    In-memory stand-in for the remote service behind ``httpx.MockTransport``.

    Each route holds a queue of responses; the last one repeats. A response
    is an int status, a ``(status, body)`` tuple, a JSON body (status 200)
    or an exception instance to raise from the transport.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], List[Any]] = {}
        self.calls: List[Tuple[str, str]] = []
        self.payloads: List[Any] = []

    def add(self, method: str, path: str, *responses: Any) -> "FakeRemote":
        self.routes[(method.upper(), path)] = list(responses)
        return self

    def count(self, method: str, path: str) -> int:
        return self.calls.count((method.upper(), path))

    def paths(self) -> List[str]:
        return [path for _, path in self.calls]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.raw_path.decode("ascii")
        key = (request.method, path)
        self.calls.append(key)
        self.payloads.append(json.loads(request.content) if request.content else None)

        queue = self.routes.get(key)
        if not queue:
            return httpx.Response(404, json={"error": f"no route for {path}"})

        response = queue.pop(0) if len(queue) > 1 else queue[0]

        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            return httpx.Response(response, json={"status": "NOT OK"})
        if isinstance(response, tuple):
            status, body = response
            return httpx.Response(status, json=body)
        return httpx.Response(200, json=response)


@pytest.fixture
def remote():
    """Fake remote service"""
    return FakeRemote()


@pytest.fixture
def sleeps():
    """Backoff delays (seconds) requested by executors under test"""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(seconds: float):
        sleeps.append(seconds)
    return _sleep


@pytest_asyncio.fixture
async def http_client(remote):
    """HTTP client wired to the fake remote"""
    async with httpx.AsyncClient(
        base_url=TEST_BASE_URL,
        transport=httpx.MockTransport(remote.handler)
    ) as client:
        yield client


@pytest.fixture
def executor(http_client, fake_sleep):
    """Executor with default retry policy and recorded sleeps"""
    return RequestExecutor(http_client, max_attempts=3, backoff_base_ms=1000, sleep=fake_sleep)


@pytest.fixture
def test_settings():
    """Settings with defaults only, ignoring any local .env"""
    return Settings(_env_file=None)


@pytest.fixture
def healthy_remote(remote):
    """Remote where every call succeeds: season 5, periods 10 and 11"""
    remote.add("GET", "/wow/advanced/seasons", [{"season_id": 5, "season_name": "Season 5"}])
    remote.add("GET", "/wow/advanced/season-info/5", {"periods": [{"period_id": 10}, {"period_id": 11}]})
    for region in ("us", "eu", "kr", "tw"):
        remote.add(
            "GET",
            f"/wow/advanced/mythic-leaderboard/5/11?region={region}",
            {"region": region, "runs": 1000}
        )
    remote.add("POST", "/admin/import-all-leaderboard-json", {"status": "OK", "imported": 4})
    remote.add("POST", "/admin/clear-output", {"status": "OK", "deleted": []})
    remote.add("POST", "/admin/cleanup-leaderboard", {"status": "OK", "rows_deleted": 12})
    remote.add("POST", "/admin/vacuum-full", {"status": "OK"})
    remote.add("POST", "/admin/refresh-views", {"status": "OK"})
    return remote
