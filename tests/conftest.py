"""Shared test fixtures for restclient.

Provides a recording mock transport, a client factory wired to it, and
environment isolation for configuration tests.  These fixtures are
automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from restclient.client import Client


BASE_URL = "https://api.example.com"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to send."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def called(self) -> bool:
        return bool(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def json_handler(data: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Handler that always answers with *data* as JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=data)

    return handler


# ---------------------------------------------------------------------------
# Transport / client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_client() -> Callable[..., tuple[Client, RecordingTransport]]:
    """Factory building a :class:`Client` over a fresh recording transport.

    Usage::

        client, transport = make_client(handler, base_url="http://host/api/")
    """
    clients: list[Client] = []

    def _make(
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        base_url: str = BASE_URL,
        **kwargs: Any,
    ) -> tuple[Client, RecordingTransport]:
        transport = RecordingTransport(handler or json_handler({"code": 0, "msg": "ok"}))
        client = Client(base_url, transport=transport, **kwargs)
        clients.append(client)
        return client, transport

    yield _make

    for client in clients:
        client.close()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Clear all RESTCLIENT_* variables and run inside *tmp_path*."""
    for var in [
        "RESTCLIENT_CONFIG",
        "RESTCLIENT_BASE_URL",
        "RESTCLIENT_TIMEOUT",
        "RESTCLIENT_VERIFY_SSL",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
