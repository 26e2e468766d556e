from __future__ import annotations

import json
from typing import Callable, Dict, List

import httpx
import pytest

from reelmaker.config import config


async def no_sleep(_seconds: float) -> None:
    return None


class FakeProvider:
    """Routes requests to canned responses and records what was sent."""

    def __init__(self, routes: Dict[str, Callable[[httpx.Request], httpx.Response]]) -> None:
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key not in self.routes:
            return httpx.Response(404, json={"error": f"no route for {key}"})
        return self.routes[key](request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def sent_json(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


def sequence(*responses: httpx.Response) -> Callable[[httpx.Request], httpx.Response]:
    """Return responses in order, repeating the last one."""
    calls = {"n": 0}

    def handler(_request: httpx.Request) -> httpx.Response:
        index = min(calls["n"], len(responses) - 1)
        calls["n"] += 1
        return responses[index]

    return handler


@pytest.fixture(autouse=True)
def fast_config(monkeypatch):
    monkeypatch.setattr(config, "poll_interval_ms", 0)
    monkeypatch.setattr(config, "poll_max_attempts", 5)
    monkeypatch.setattr(config, "caption_style", "bold-caption")
