r"""Exceptions raised by the Airtable client.

``AirtableError`` is the only error type that leaves the execution core:
transport faults, error statuses and exhausted rate-limit retries are all
reported through it.
"""

from __future__ import annotations

__all__ = ["AirtableError", "ErrorPayload", "PayloadDecodeError", "parse_error_payload"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from airtablex.codec import JsonCodec


@dataclass(frozen=True)
class ErrorPayload:
    """Structured error returned by the Airtable API.

    Airtable reports errors either as
    ``{"error": {"type": "...", "message": "..."}}`` or, for a few
    endpoints, as ``{"error": "NOT_FOUND"}``.

    Attributes:
        type: The error type, e.g. ``"INVALID_REQUEST_UNKNOWN"``.
        message: The human readable message, if provided.
    """

    type: str
    message: str | None = None


def parse_error_payload(body: str | bytes, codec: JsonCodec) -> ErrorPayload | None:
    """Decode the Airtable error schema from a response body.

    Args:
        body: The raw response body.
        codec: The JSON codec used to parse the body.

    Returns:
        The decoded payload, or ``None`` if the body does not follow the
        Airtable error schema.

    Example:
        ```pycon
        >>> from airtablex.codec import StandardJsonCodec
        >>> from airtablex.exceptions import parse_error_payload
        >>> parse_error_payload('{"error": {"type": "X", "message": "m"}}', StandardJsonCodec())
        ErrorPayload(type='X', message='m')
        >>> parse_error_payload("<html>", StandardJsonCodec()) is None
        True

        ```
    """
    if not body:
        return None
    try:
        data: Any = codec.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, str):
        return ErrorPayload(type=error)
    if isinstance(error, dict) and isinstance(error.get("type"), str):
        message = error.get("message")
        return ErrorPayload(type=error["type"], message=message if isinstance(message, str) else None)
    return None


class AirtableError(Exception):
    r"""Error raised when an Airtable call fails.

    Args:
        message: Description of the failure.
        status_code: The HTTP status code, or 0 if no response was
            ever obtained.
        body: The raw response body text, kept verbatim.
        error: The decoded Airtable error payload, if the body could
            be decoded.
        cause: The underlying transport exception, if any.
        method: The HTTP method of the failed request.
        url: The URL of the failed request.

    Example:
        ```pycon
        >>> from airtablex import AirtableError
        >>> err = AirtableError("GET https://api.airtable.com/v0/app/t failed", status_code=404)
        >>> err.status_code
        404
        >>> err.body
        ''

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 0,
        body: str = "",
        error: ErrorPayload | None = None,
        cause: BaseException | None = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._status_code = status_code
        self._body = body
        self._error = error
        self._cause = cause
        self._method = method
        self._url = url
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> str:
        return self._body

    @property
    def error(self) -> ErrorPayload | None:
        return self._error

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def method(self) -> str | None:
        return self._method

    @property
    def url(self) -> str | None:
        return self._url

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(status_code={self._status_code}, "
            f"error={self._error!r}, message={self._message!r})"
        )


class PayloadDecodeError(AirtableError):
    r"""Error raised when a successful response cannot be mapped to
    records.

    The execution core never raises it; it comes from the table layer
    after the response has been delivered.
    """
