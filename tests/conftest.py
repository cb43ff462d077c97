"""Pytest configuration and fixtures."""

import json
import os
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest

from binelek_mcp.config import GatewayConfig
from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.observability import configure_logging

# Install the stderr handler before pytest attaches its capture handlers.
configure_logging()

Route = Union[Callable[[httpx.Request], Any], Exception]


def respond(status: int = 200, json_body: Any = None, text: Optional[str] = None, **kwargs):
    """Build a route that answers every matching request with a fresh response."""

    def _handler(request: httpx.Request) -> httpx.Response:
        if text is not None:
            return httpx.Response(status, text=text, **kwargs)
        if json_body is None:
            return httpx.Response(status, **kwargs)
        return httpx.Response(status, json=json_body, **kwargs)

    return _handler


class FakeGateway:
    """Records outbound requests and answers them from a route table.

    Routes are keyed by (method, path). A route is either a callable taking the
    request (sync or async) or an exception instance to raise.
    """

    def __init__(self, routes: Optional[Dict[Tuple[str, str], Route]] = None):
        self.routes: Dict[Tuple[str, str], Route] = dict(routes or {})
        self.requests: List[httpx.Request] = []
        self.default: Optional[Route] = None

    def route(self, method: str, path: str, handler: Route) -> None:
        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path), self.default)
        if handler is None:
            return httpx.Response(200, json={"ok": True})
        if isinstance(handler, Exception):
            raise handler
        return handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def gateway_config():
    """Gateway settings with a bearer token."""
    return GatewayConfig(
        base_url="http://gateway.test",
        tenant_id="acme",
        auth_token="test-jwt-token",
    )


@pytest.fixture
def fake_gateway():
    """Route table standing in for the Binelek API gateway."""
    return FakeGateway()


@pytest.fixture
def gateway(gateway_config, fake_gateway):
    """Gateway client wired to the fake gateway."""
    return BinelekGatewayClient(gateway_config, transport=httpx.MockTransport(fake_gateway))


@pytest.fixture
def make_gateway(fake_gateway):
    """Factory for gateway clients with custom settings."""

    def _make(**overrides: Any) -> BinelekGatewayClient:
        settings = {"base_url": "http://gateway.test", "tenant_id": "acme"}
        settings.update(overrides)
        return BinelekGatewayClient(
            GatewayConfig(**settings), transport=httpx.MockTransport(fake_gateway)
        )

    return _make


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no BINELEK_* variables set."""
    for key in list(os.environ):
        if key.startswith("BINELEK_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
