r"""Invocation of the lifecycle callbacks of one call."""

from __future__ import annotations

__all__ = ["CallbackManager"]

import time
from typing import TYPE_CHECKING

from airtablex.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo

if TYPE_CHECKING:
    import httpx

    from airtablex.exceptions import AirtableError
    from airtablex.request import RequestDescriptor
    from airtablex.retry.config import CallbackConfig


class CallbackManager:
    """Builds the info objects and calls the configured callbacks.

    Attempt numbers are 0-indexed on input and 1-indexed in the info
    objects handed to the callbacks.

    Args:
        callbacks: The callback configuration.
        max_retries: The retry ceiling reported to the callbacks.
    """

    def __init__(self, callbacks: CallbackConfig, max_retries: int | None) -> None:
        self.callbacks = callbacks
        self.max_retries = max_retries

    def on_request(self, request: RequestDescriptor, attempt: int) -> None:
        if self.callbacks.on_request is not None:
            self.callbacks.on_request(
                RequestInfo(
                    url=request.url,
                    method=request.method,
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                )
            )

    def on_retry(
        self,
        request: RequestDescriptor,
        attempt: int,
        wait_time: float,
        status_code: int,
        reason: str,
    ) -> None:
        if self.callbacks.on_retry is not None:
            self.callbacks.on_retry(
                RetryInfo(
                    url=request.url,
                    method=request.method,
                    attempt=attempt + 2,
                    max_retries=self.max_retries,
                    wait_time=wait_time,
                    status_code=status_code,
                    reason=reason,
                )
            )

    def on_success(
        self,
        request: RequestDescriptor,
        attempt: int,
        response: httpx.Response,
        start_time: float,
    ) -> None:
        if self.callbacks.on_success is not None:
            self.callbacks.on_success(
                ResponseInfo(
                    url=request.url,
                    method=request.method,
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    response=response,
                    total_time=time.time() - start_time,
                )
            )

    def on_failure(
        self,
        request: RequestDescriptor,
        attempt: int,
        error: AirtableError,
        start_time: float,
    ) -> None:
        if self.callbacks.on_failure is not None:
            self.callbacks.on_failure(
                FailureInfo(
                    url=request.url,
                    method=request.method,
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    error=error,
                    total_time=time.time() - start_time,
                )
            )
