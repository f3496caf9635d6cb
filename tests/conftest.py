# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for remotion-media MCP server tests."""

import json
import pathlib
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from remotion_media.config import Settings

KIE_BASE = "https://api.kie.ai"
AIRTABLE_TABLE_URL = "https://api.airtable.com/v0/appTEST/Assets"


class FakeUpstream:
    """Route-table handler for ``httpx.MockTransport``.

    Each route holds a queue of canned responses; the last one repeats once
    the queue is down to it. Every request is recorded.

    Canned responses are ``dict`` (JSON, status 200), ``bytes`` (raw body,
    status 200), ``(status, dict | bytes)``, or a callable taking the request.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url: str, *responses: Any) -> "FakeUpstream":
        self.routes.setdefault((method.upper(), url), []).extend(responses)
        return self

    def calls(self, method: str, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and _route_url(r) == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, _route_url(request)))
        if not queue:
            return httpx.Response(404, json={"error": f"no route for {request.method} {request.url}"})
        entry = queue.pop(0) if len(queue) > 1 else queue[0]
        return _build(entry, request)


def _route_url(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


def _build(entry: Any, request: httpx.Request) -> httpx.Response:
    if callable(entry):
        return entry(request)
    status = 200
    if isinstance(entry, tuple):
        status, entry = entry
    if isinstance(entry, bytes):
        return httpx.Response(status, content=entry)
    return httpx.Response(status, json=entry)


def request_json(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content)


@pytest.fixture
def project_root(tmp_path: pathlib.Path) -> pathlib.Path:
    """Temporary Remotion project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def make_settings(project_root: pathlib.Path, tmp_path: pathlib.Path, upstream: FakeUpstream) -> Callable[..., Settings]:
    """Build Settings wired to the fake upstream with zero poll delay."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "kie_api_key": "test-key",
            "kie_api_base": KIE_BASE,
            "project_root": project_root,
            "whisper_models_dir": tmp_path / "models",
            "poll_interval_seconds": 0,
            "transport": httpx.MockTransport(upstream),
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    """Settings with kie.ai configured and no catalog."""
    return make_settings()


@pytest.fixture
def catalog_settings(make_settings) -> Settings:
    """Settings with both kie.ai and the Airtable catalog configured."""
    return make_settings(airtable_api_key="pat-test", airtable_base_id="appTEST")


# ==================== Canned kie.ai envelopes ====================


def submitted(task_id: str = "task-123") -> dict[str, Any]:
    return {"code": 200, "msg": "success", "data": {"taskId": task_id}}


def jobs_status(state: str, result_urls: list[str] | None = None, fail_msg: str | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"taskId": "task-123", "state": state}
    if result_urls is not None:
        data["resultJson"] = json.dumps({"resultUrls": result_urls})
    if fail_msg is not None:
        data["failMsg"] = fail_msg
    return {"code": 200, "msg": "success", "data": data}


def veo_status(success_flag: int, result_urls: list[str] | None = None, **extra: Any) -> dict[str, Any]:
    data: dict[str, Any] = {"taskId": "task-123", "successFlag": success_flag, **extra}
    if result_urls is not None:
        data["response"] = {"resultUrls": result_urls}
    return {"code": 200, "msg": "success", "data": data}


def suno_status(status: str, tracks: list[dict[str, Any]] | None = None, **extra: Any) -> dict[str, Any]:
    data: dict[str, Any] = {"taskId": "task-123", "status": status, **extra}
    if tracks is not None:
        data["sunoData"] = tracks
    return {"code": 200, "msg": "success", "data": data}
