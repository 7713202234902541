"""Shared helpers for MockTransport-based tests."""

import json
from typing import Any, Callable

import httpx

BASE_URL = "https://palytt.test"


class RecordingHandler:
    """MockTransport handler that remembers every request it served."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def trpc_data(data: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Responder returning ``{"result": {"data": data}}``."""
    return lambda request: httpx.Response(status_code, json={"result": {"data": data}})


def request_input(request: httpx.Request) -> Any:
    """Decoded JSON input of a GET (query param) or POST (body) request."""
    if request.method == "GET":
        return json.loads(request.url.params["input"])
    return json.loads(request.content)
