import asyncio
import os
import sys

import pytest

# Ensure repo root is on sys.path for imports like 'data_acquisition.*'
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else str(payload))

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeClock:
    """Manually advanced clock with a matching sleep coroutine."""

    def __init__(self):
        self.now = 0.0
        self._sleepers = []

    def time(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        future = asyncio.get_running_loop().create_future()
        self._sleepers.append((self.now + delay, future))
        await future

    async def _settle(self) -> None:
        for _ in range(10):
            await asyncio.sleep(0)

    async def advance(self, seconds: float) -> None:
        # pending tasks register their sleepers before time moves
        await self._settle()
        self.now += seconds
        remaining = []
        for wake_at, future in self._sleepers:
            if future.done():
                continue
            if wake_at <= self.now:
                future.set_result(None)
            else:
                remaining.append((wake_at, future))
        self._sleepers = remaining
        await self._settle()


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def record_requests(monkeypatch):
    """
    Patch requests.request used by utils.http_utils.
    Returns (calls, set_responses): queued responses are served in order;
    an Exception instance in the queue is raised instead.
    """
    import utils.http_utils as http_utils

    calls = []
    queue = []

    def fake_request(method, url, params=None, json=None, headers=None, timeout=None):
        calls.append({"method": method, "url": url, "params": params, "json": json, "headers": headers, "timeout": timeout})
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(http_utils.requests, "request", fake_request)

    def set_responses(*items):
        queue.extend(items)

    return calls, set_responses
