r"""Shared test helpers for building requests, responses and mock
transports."""

from __future__ import annotations

__all__ = [
    "TABLE_URL",
    "RecordingHandler",
    "make_descriptor",
    "make_response",
]

import json
from typing import Any

import httpx

from airtablex.request import RequestDescriptor

TABLE_URL = "https://api.airtable.test/v0/app1/Tasks"


def make_descriptor(method: str = "GET", url: str = f"{TABLE_URL}/rec1") -> RequestDescriptor:
    """Create a request descriptor with an authorization header."""
    return RequestDescriptor(method, url, headers={"Authorization": "Bearer key123"})


def make_response(
    status_code: int,
    json_body: Any = None,
    *,
    text: str | None = None,
    headers: dict[str, str] | None = None,
    method: str = "GET",
    url: str = f"{TABLE_URL}/rec1",
) -> httpx.Response:
    """Create a real ``httpx.Response`` attached to a request."""
    content = text.encode() if text is not None else b""
    if json_body is not None:
        content = json.dumps(json_body).encode()
    return httpx.Response(
        status_code,
        content=content,
        headers=headers,
        request=httpx.Request(method, url),
    )


class RecordingHandler:
    """Mock transport handler replaying responses and recording the
    requests it receives.

    Each item of ``results`` is returned (a ``(status, json)`` tuple or
    an ``httpx.Response``) or raised (an exception) for one request. The
    last item is repeated once the others are consumed.
    """

    def __init__(self, *results: Any) -> None:
        self.results = list(results)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.results)) - 1
        result = self.results[index]
        if isinstance(result, Exception):
            raise result
        if isinstance(result, httpx.Response):
            return result
        status_code, body = result
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    @property
    def bodies(self) -> list[Any]:
        return [json.loads(request.content) if request.content else None for request in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport())
