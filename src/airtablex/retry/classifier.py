r"""Classification of transport results into retry outcomes.

The classifier is a pure function of its input: it performs no I/O and
keeps no state, so the retry loop can be tested with a substitute
classifier and no real transport.
"""

from __future__ import annotations

__all__ = [
    "RATE_LIMIT_STATUS_CODES",
    "BaseResponseClassifier",
    "ResponseClassifier",
]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import httpx

from airtablex.codec import StandardJsonCodec
from airtablex.exceptions import AirtableError, parse_error_payload
from airtablex.retry.outcome import RetryableFailure, Success, TerminalFailure

if TYPE_CHECKING:
    from airtablex.codec import JsonCodec
    from airtablex.retry.outcome import Outcome

# 429: Too Many Requests. Airtable rate limits are short-lived.
RATE_LIMIT_STATUS_CODES = (429,)


class BaseResponseClassifier(ABC):
    """Strategy deciding how the executor reacts to a transport result."""

    @abstractmethod
    def classify(self, result: httpx.Response | Exception) -> Outcome:
        """Classify the result of one physical attempt.

        Args:
            result: The response, or the exception raised by the
                transport when no response was obtained.

        Returns:
            ``Success``, ``RetryableFailure`` or ``TerminalFailure``.
        """


class ResponseClassifier(BaseResponseClassifier):
    r"""Default classifier for the Airtable API.

    - a transport fault is terminal, with status code 0
    - a status in ``retryable_status_codes`` (429 by default) is
      retryable
    - any other status outside 200-299 is terminal, keeping the raw
      body and the decoded Airtable error when the body has one
    - 200-299 is a success

    Args:
        codec: The JSON codec used to decode error bodies.
        retryable_status_codes: Status codes that may be retried.

    Example:
        ```pycon
        >>> import httpx
        >>> from airtablex.retry import ResponseClassifier
        >>> classifier = ResponseClassifier()
        >>> request = httpx.Request("GET", "https://api.airtable.com/v0/app1/Tasks")
        >>> classifier.classify(httpx.Response(429, request=request)).reason
        'status 429'
        >>> outcome = classifier.classify(httpx.Response(404, text="nope", request=request))
        >>> outcome.error.status_code, outcome.error.body
        (404, 'nope')

        ```
    """

    def __init__(
        self,
        codec: JsonCodec | None = None,
        retryable_status_codes: tuple[int, ...] = RATE_LIMIT_STATUS_CODES,
    ) -> None:
        self.codec: JsonCodec = codec if codec is not None else StandardJsonCodec()
        self.retryable_status_codes = retryable_status_codes

    def classify(self, result: httpx.Response | Exception) -> Outcome:
        if isinstance(result, Exception):
            return TerminalFailure(self._fault_error(result))

        status_code = result.status_code
        if 200 <= status_code < 300:
            return Success(result)
        error = self._status_error(result)
        if status_code in self.retryable_status_codes:
            return RetryableFailure(reason=f"status {status_code}", response=result, error=error)
        return TerminalFailure(error)

    def _status_error(self, response: httpx.Response) -> AirtableError:
        method, url = _request_target(response)
        body = response.text
        payload = parse_error_payload(body, self.codec)
        detail = f": {payload.type}" if payload is not None else ""
        if payload is not None and payload.message:
            detail += f" ({payload.message})"
        return AirtableError(
            f"{_describe(method, url)} failed with status {response.status_code}{detail}",
            status_code=response.status_code,
            body=body,
            error=payload,
            method=method,
            url=url,
        )

    @staticmethod
    def _fault_error(exc: Exception) -> AirtableError:
        method, url = _fault_target(exc)
        return AirtableError(
            f"{_describe(method, url)} failed before a response was received: "
            f"{type(exc).__name__}: {exc}",
            status_code=0,
            cause=exc,
            method=method,
            url=url,
        )


def _request_target(response: httpx.Response) -> tuple[str | None, str | None]:
    try:
        request = response.request
    except RuntimeError:
        return None, None
    return request.method, str(request.url)


def _fault_target(exc: Exception) -> tuple[str | None, str | None]:
    if not isinstance(exc, httpx.HTTPError):
        return None, None
    try:
        request = exc.request
    except RuntimeError:
        return None, None
    return request.method, str(request.url)


def _describe(method: str | None, url: str | None) -> str:
    if method is None:
        return "Request"
    return f"{method} request to {url}"
