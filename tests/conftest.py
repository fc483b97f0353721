"""
Shared fixtures: a fake Clockodo API behind httpx.MockTransport.
"""

import json
import time
from datetime import timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from clockodo_mcp.api.client import ClockodoClient
from clockodo_mcp.settings import Settings


BASE_URL = "https://clockodo.test/api"

# Fixed UTC+1 zone so conversions do not depend on the machine
CET = timezone(timedelta(hours=1))


class FakeClockodo:
    """Answers requests from a route table and records every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], httpx.Response] = {}

    def add(self, method: str, path: str, payload=None, status: int = 200, text=None):
        if text is not None:
            response = httpx.Response(status, text=text)
        else:
            response = httpx.Response(status, json=payload if payload is not None else {})
        self.routes[(method, "/api" + path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, text=f"no route for {request.method} {request.url.path}")
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, request: httpx.Request = None) -> dict:
        return json.loads((request or self.last).content)


def make_entry(**overrides) -> dict:
    entry = {
        "id": 42,
        "customers_id": 1,
        "projects_id": None,
        "services_id": 7,
        "users_id": 3,
        "billable": 1,
        "text": "Code review",
        "time_since": "2024-03-15T08:00:00Z",
        "time_until": "2024-03-15T09:30:00Z",
        "duration": 5400,
        "clocked": False,
        "customers_name": "ACME GmbH",
        "services_name": "Development",
        "users_name": "Jo Doe",
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def fake_api():
    return FakeClockodo()


@pytest.fixture
def client(fake_api):
    with ClockodoClient(
        api_user="user@example.com",
        api_key="secret-key",
        base_url=BASE_URL,
        transport=httpx.MockTransport(fake_api.handler),
    ) as c:
        yield c


@pytest.fixture
def config():
    return Settings(
        _env_file=None,
        api_user="user@example.com",
        api_key="secret-key",
        base_url=BASE_URL,
    )


@pytest.fixture
def server(client, config):
    from clockodo_mcp.server import create_server

    with patch.object(Settings, "get_tzinfo", return_value=CET):
        yield create_server(client=client, config=config)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def berlin_system_zone(monkeypatch):
    """Run with the process-wide local zone set to Europe/Berlin."""
    if not hasattr(time, "tzset") or not Path("/usr/share/zoneinfo/Europe/Berlin").exists():
        pytest.skip("system zone database not available")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
