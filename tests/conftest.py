from __future__ import annotations

from typing import Callable

import httpx
import pytest

from dify_client import DifyClient

BASE_URL = "http://dify.test/v1"
API_KEY = "app-test-key"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served, in order."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def anyio_backend() -> str:
    """Configure anyio to use the asyncio backend for all async tests."""
    return "asyncio"


@pytest.fixture
def make_client() -> Callable[[Handler], tuple[DifyClient, RecordingTransport]]:
    """Build a ``DifyClient`` whose requests are answered by ``handler``.

    Returns the client together with the transport so tests can inspect the
    requests that were sent.
    """

    def factory(handler: Handler) -> tuple[DifyClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        return DifyClient(BASE_URL, API_KEY, transport=transport), transport

    return factory
