r"""Lifecycle callbacks for observing calls to Airtable.

Four hooks are available, all optional:
- on_request: before every physical attempt
- on_retry: after a rate-limited attempt, before waiting
- on_success: when the call resolves with a response
- on_failure: when the call fails with an ``AirtableError``

Callbacks run on the event loop thread and should be fast. An exception
raised by a callback propagates to the caller.

Example:
    ```pycon
    >>> from airtablex.callbacks import RetryInfo
    >>> from airtablex.retry import CallbackConfig
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"retry {info.attempt} of {info.url} in {info.wait_time:.1f}s")
    ...
    >>> config = CallbackConfig(on_retry=log_retry)

    ```
"""

from __future__ import annotations

__all__ = ["FailureInfo", "RequestInfo", "ResponseInfo", "RetryInfo"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from airtablex.exceptions import AirtableError


@dataclass(frozen=True)
class RequestInfo:
    """Information passed to the on_request callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method.
        attempt: The attempt number (1-indexed).
        max_retries: The configured retry ceiling, ``None`` if unbounded.
    """

    url: str
    method: str
    attempt: int
    max_retries: int | None


@dataclass(frozen=True)
class RetryInfo:
    """Information passed to the on_retry callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method.
        attempt: The number of the attempt about to be made (1-indexed),
            so the first retry is attempt 2.
        max_retries: The configured retry ceiling, ``None`` if unbounded.
        wait_time: The delay in seconds before the next attempt.
        status_code: The status code that triggered the retry.
        reason: The reason given by the classifier.
    """

    url: str
    method: str
    attempt: int
    max_retries: int | None
    wait_time: float
    status_code: int
    reason: str


@dataclass(frozen=True)
class ResponseInfo:
    """Information passed to the on_success callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method.
        attempt: The attempt that succeeded (1-indexed).
        max_retries: The configured retry ceiling, ``None`` if unbounded.
        response: The successful response.
        total_time: Seconds spent on all attempts including delays.
    """

    url: str
    method: str
    attempt: int
    max_retries: int | None
    response: httpx.Response
    total_time: float


@dataclass(frozen=True)
class FailureInfo:
    """Information passed to the on_failure callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method.
        attempt: The final attempt number (1-indexed).
        max_retries: The configured retry ceiling, ``None`` if unbounded.
        error: The error delivered to the caller.
        total_time: Seconds spent on all attempts including delays.
    """

    url: str
    method: str
    attempt: int
    max_retries: int | None
    error: AirtableError
    total_time: float
