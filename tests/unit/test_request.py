r"""Unit tests for RequestDescriptor."""

from __future__ import annotations

import dataclasses

import httpx
import pytest

from airtablex.request import RequestDescriptor

URL = "https://api.airtable.test/v0/app1/Tasks"


def test_request_descriptor_defaults() -> None:
    """Test RequestDescriptor default attributes."""
    descriptor = RequestDescriptor("get", URL)
    assert descriptor.method == "GET"
    assert descriptor.url == URL
    assert descriptor.headers == ()
    assert descriptor.body is None


def test_request_descriptor_headers_mapping() -> None:
    """Test that headers can be given as a mapping."""
    descriptor = RequestDescriptor("GET", URL, headers={"Authorization": "Bearer key"})
    assert descriptor.header_map["authorization"] == "Bearer key"
    assert descriptor.header_map["AUTHORIZATION"] == "Bearer key"


def test_request_descriptor_repeated_headers() -> None:
    """Test that repeated header names are kept."""
    descriptor = RequestDescriptor("GET", URL, headers=[("X-Tag", "a"), ("X-Tag", "b")])
    assert descriptor.header_map.get_list("x-tag") == ["a", "b"]


def test_request_descriptor_is_frozen() -> None:
    """Test that a descriptor cannot be mutated."""
    descriptor = RequestDescriptor("GET", URL)
    with pytest.raises(dataclasses.FrozenInstanceError):
        descriptor.url = "https://example.com"  # type: ignore[misc]


def test_request_descriptor_equality() -> None:
    """Test that descriptors with the same content are equal."""
    assert RequestDescriptor("get", URL, {"A": "1"}) == RequestDescriptor("GET", URL, {"a": "1"})


def test_request_descriptor_with_header() -> None:
    """Test that with_header returns a new descriptor."""
    descriptor = RequestDescriptor("POST", URL, body=b"{}")
    updated = descriptor.with_header("Content-Type", "application/json")
    assert updated.header_map["content-type"] == "application/json"
    assert updated.body == b"{}"
    assert descriptor.headers == ()


def test_request_descriptor_build() -> None:
    """Test that build creates an equivalent httpx.Request."""
    descriptor = RequestDescriptor(
        "PATCH", f"{URL}/rec1", headers={"Authorization": "Bearer key"}, body=b'{"fields":{}}'
    )
    request = descriptor.build()
    assert isinstance(request, httpx.Request)
    assert request.method == "PATCH"
    assert str(request.url) == f"{URL}/rec1"
    assert request.headers["authorization"] == "Bearer key"
    assert request.content == b'{"fields":{}}'


def test_request_descriptor_build_fresh_request() -> None:
    """Test that every call to build returns a new request."""
    descriptor = RequestDescriptor("GET", URL)
    assert descriptor.build() is not descriptor.build()


def test_request_descriptor_build_invalid_url() -> None:
    """Test that an invalid URL raises when the request is built."""
    with pytest.raises(httpx.InvalidURL):
        RequestDescriptor("GET", "https://api.airtable.test/v0/app1/Tasks/rec\x001").build()
