from __future__ import annotations

import subprocess
from types import SimpleNamespace
from typing import Callable

import httpx
import pytest

from adapters.weblate.gateway import WeblateGateway
from core import git_identity
from core.config import AppSettings
from core.services.actions import ActionHooks

HOST = "https://hosted.weblate.org"
TOKEN = "test_token_123"


def _no_git(*args, **kwargs):
    raise FileNotFoundError("git")


@pytest.fixture(autouse=True)
def no_git_identity(monkeypatch):
    """Uploads must not pick up the developer's git identity."""

    monkeypatch.setattr(
        git_identity,
        "subprocess",
        SimpleNamespace(run=_no_git, SubprocessError=subprocess.SubprocessError),
    )


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, user_agent="weblate-gateway-tests/1.0", http_timeout_seconds=5)


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_handler():
    def _make(responder: Callable[[httpx.Request], httpx.Response]) -> RecordingHandler:
        return RecordingHandler(responder)

    return _make


@pytest.fixture
def gateway_factory(settings):
    """Builds a factory compatible with `core.services.actions` for a handler."""

    def _factory_for(handler: RecordingHandler):
        def _factory(params, _settings):
            return WeblateGateway(
                params.host,
                params.token,
                settings=settings,
                transport=httpx.MockTransport(handler),
            )

        return _factory

    return _factory_for


@pytest.fixture
def recorded_hooks():
    messages: dict[str, list[str]] = {"info": [], "success": [], "error": []}
    hooks = ActionHooks(
        message=messages["info"].append,
        success=messages["success"].append,
        error=messages["error"].append,
    )
    return hooks, messages
