r"""Immutable description of one logical HTTP request."""

from __future__ import annotations

__all__ = ["RequestDescriptor"]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True)
class RequestDescriptor:
    r"""Method, URL, headers and body of a request.

    The descriptor is built once per call and never mutated. Every
    physical attempt builds a fresh ``httpx.Request`` from it, so a
    retry sends exactly the same method, URL, headers and body.

    Args:
        method: The HTTP method. Stored upper-cased.
        url: The absolute URL.
        headers: The request headers, as a mapping or as a sequence of
            ``(name, value)`` pairs. Repeated names are kept.
        body: The optional request body.

    Example:
        ```pycon
        >>> from airtablex import RequestDescriptor
        >>> descriptor = RequestDescriptor(
        ...     "get", "https://api.airtable.com/v0/app1/Tasks", headers={"Accept": "application/json"}
        ... )
        >>> descriptor.method
        'GET'
        >>> descriptor.header_map["accept"]
        'application/json'

        ```
    """

    method: str
    url: str
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes | None = None

    def __init__(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: bytes | None = None,
    ) -> None:
        object.__setattr__(self, "method", method.upper())
        object.__setattr__(self, "url", url)
        object.__setattr__(
            self, "headers", tuple(httpx.Headers(headers).multi_items()) if headers else ()
        )
        object.__setattr__(self, "body", body)

    @property
    def header_map(self) -> httpx.Headers:
        """Return the headers as a case-insensitive multi-dict."""
        return httpx.Headers(list(self.headers))

    def with_header(self, name: str, value: str) -> RequestDescriptor:
        """Return a copy of the descriptor with one more header.

        Args:
            name: The header name.
            value: The header value.

        Returns:
            A new descriptor; ``self`` is left unchanged.
        """
        return replace(self, headers=(*self.headers, (name, value)))

    def build(self) -> httpx.Request:
        """Build the ``httpx.Request`` for one physical attempt.

        Raises:
            httpx.InvalidURL: If the URL cannot be parsed.
        """
        return httpx.Request(
            self.method, self.url, headers=list(self.headers), content=self.body
        )
