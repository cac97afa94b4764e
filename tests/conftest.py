"""Shared fixtures: a MemosApi wired to an in-process fake MemOS."""

import json

import httpx
import logfire
import pytest

from memos_memory.api import MemosApi
from memos_memory.config import MemosConfig


@pytest.fixture(scope="session", autouse=True)
def quiet_logfire():
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def config():
    return MemosConfig(api_url="http://memos.test/", user_id="tester", top_k=5)


class FakeMemos:
    """Records requests and answers each path with a canned response."""

    def __init__(self):
        self.requests: list[tuple[str, dict, httpx.Headers]] = []
        self.routes: dict[str, httpx.Response | Exception] = {}

    def respond(self, path: str, body=None, status_code: int = 200) -> None:
        self.routes[path] = httpx.Response(status_code, json=body if body is not None else {"code": 200})

    def fail(self, path: str, exc: Exception) -> None:
        self.routes[path] = exc

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else {}
        self.requests.append((request.url.path, body, request.headers))
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        return route

    def bodies(self, path: str) -> list[dict]:
        return [body for p, body, _ in self.requests if p == path]


@pytest.fixture
def memos():
    return FakeMemos()


@pytest.fixture
def api(config, memos):
    return MemosApi(config, transport=httpx.MockTransport(memos))


def search_payload(text=(), preference=(), action=(), cube_id="cube-1"):
    """Build a /product/search response with one cube per category."""
    data = {}
    if text:
        data["text_mem"] = [{"cube_id": cube_id, "memories": list(text)}]
    if preference:
        data["pref_mem"] = [{"cube_id": cube_id, "memories": list(preference)}]
    if action:
        data["act_mem"] = [{"cube_id": cube_id, "memories": list(action)}]
    return {"code": 200, "message": "ok", "data": data}
