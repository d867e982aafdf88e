r"""JSON encoding and decoding for request and response bodies.

The codec is passed explicitly to the classifier, the executor and the
tables instead of being configured once as global state.
"""

from __future__ import annotations

__all__ = ["JsonCodec", "StandardJsonCodec"]

import json
from typing import Any, Protocol


class JsonCodec(Protocol):
    """Protocol for objects that encode and decode JSON documents.

    ``loads`` must raise ``ValueError`` (or a subclass such as
    ``json.JSONDecodeError``) on malformed input.
    """

    def loads(self, data: str | bytes) -> Any: ...

    def dumps(self, obj: Any) -> bytes: ...


class StandardJsonCodec:
    r"""JSON codec backed by the standard library ``json`` module.

    Args:
        ensure_ascii: Passed through to ``json.dumps``.

    Example:
        ```pycon
        >>> from airtablex.codec import StandardJsonCodec
        >>> codec = StandardJsonCodec()
        >>> codec.dumps({"fields": {"Name": "Ada"}})
        b'{"fields":{"Name":"Ada"}}'
        >>> codec.loads(b'{"id": "rec1"}')
        {'id': 'rec1'}

        ```
    """

    def __init__(self, ensure_ascii: bool = False) -> None:
        self._ensure_ascii = ensure_ascii

    def loads(self, data: str | bytes) -> Any:
        return json.loads(data)

    def dumps(self, obj: Any) -> bytes:
        return json.dumps(obj, ensure_ascii=self._ensure_ascii, separators=(",", ":")).encode(
            "utf-8"
        )
