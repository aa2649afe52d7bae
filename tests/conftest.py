"""Shared test fixtures."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import httpx
import pytest

from wunderlist_status.http.client import ApiConfig

TEST_HOST = "api.test.invalid"


@dataclass
class FakeWunderlist:
    """In-memory stand-in for the four read endpoints."""

    lists: list[dict[str, object]] = field(default_factory=list)
    list_positions: list[int] = field(default_factory=list)
    tasks: dict[int, list[dict[str, object]]] = field(default_factory=dict)
    task_positions: dict[int, list[int]] = field(default_factory=dict)
    overrides: dict[str, httpx.Response | Exception] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        override = self.overrides.get(path)
        if isinstance(override, Exception):
            raise override
        if override is not None:
            return override

        list_id = request.url.params.get("list_id")
        if path == "/api/v1/lists":
            return _json(self.lists)
        if path == "/api/v1/list_positions":
            return _json([{"id": 1, "values": self.list_positions}])
        if path == "/api/v1/tasks" and list_id is not None:
            return _json(self.tasks.get(int(list_id), []))
        if path == "/api/v1/task_positions" and list_id is not None:
            values = self.task_positions.get(int(list_id), [])
            return _json([{"id": int(list_id), "values": values}])
        return httpx.Response(404, json={"error": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


def _json(payload: object) -> httpx.Response:
    return httpx.Response(
        200,
        content=json.dumps(payload),
        headers={"content-type": "application/json"},
    )


@pytest.fixture()
def service() -> FakeWunderlist:
    return FakeWunderlist()


@pytest.fixture()
def api_config() -> ApiConfig:
    return ApiConfig(host=TEST_HOST, access_token="token-1", client_id="client-1")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in (
        "WUNDERLIST_ACCESS_TOKEN",
        "WUNDERLIST_CLIENT_ID",
        "WUNDERLIST_API_HOST",
        "WUNDERLIST_STATUS_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WUNDERLIST_STATUS_CACHE_PATH", str(tmp_path / "render-cache.json"))
