# tests/conftest.py
"""
Pytest configuration and fixtures.

Outbound calls never leave the process: the forwarder runs on an
httpx.MockTransport that records each request and answers from a
configurable handler.
"""

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from forwardhook.config import parse_config
from forwardhook.main import create_app

UPSTREAM_URL = "https://upstream.example.com/hooks/todo"


def make_config_data(**overrides) -> Dict[str, Any]:
    """Config dict with a single `todo` webhook."""
    data: Dict[str, Any] = {
        "port": 8080,
        "webhooks": {
            "todo": {
                "forwardUrl": UPSTREAM_URL,
                "fields": [
                    {"from": ["todos", 0, "description"], "to": ["description"]},
                ],
            },
        },
    }
    data.update(overrides)
    return data


class Upstream:
    """Records forwarded requests and answers them."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"received": True})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def config_data() -> Dict[str, Any]:
    return make_config_data()


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def make_client(upstream):
    """Factory building a TestClient for a raw config dict."""
    clients = []

    def _make(data: Dict[str, Any]) -> TestClient:
        app = create_app(parse_config(data), transport=upstream.transport())
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, config_data) -> TestClient:
    return make_client(config_data)
