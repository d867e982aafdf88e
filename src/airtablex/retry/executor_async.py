r"""Asynchronous execution of Airtable requests with automatic retry of
rate-limited attempts.

One call to ``AsyncRequestExecutor.execute`` is one logical operation.
It may span several physical attempts, made strictly one after the
other, and delivers exactly one result or one ``AirtableError`` through
the returned task.
"""

from __future__ import annotations

__all__ = ["AsyncRequestExecutor"]

import asyncio
import functools
import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from airtablex.codec import StandardJsonCodec
from airtablex.retry.classifier import ResponseClassifier
from airtablex.retry.config import CallbackConfig, RetryConfig
from airtablex.retry.manager import CallbackManager
from airtablex.retry.outcome import RetryableFailure, Success, TerminalFailure
from airtablex.retry.strategy import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor

    import httpx

    from airtablex.codec import JsonCodec
    from airtablex.request import RequestDescriptor
    from airtablex.retry.classifier import BaseResponseClassifier
    from airtablex.retry.outcome import Outcome

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRequestExecutor:
    r"""Executes request descriptors against an ``httpx.AsyncClient``.

    Every attempt is classified by the classifier strategy:

    - ``Success``: the call resolves with the response, unchanged
    - ``TerminalFailure``: the call fails with the classifier's error
    - ``RetryableFailure``: the same descriptor is resubmitted after the
      delay computed from the retry policy, unless the retry ceiling is
      reached, in which case the call fails with the error carried by
      the outcome

    Any exception raised while building or sending the request is
    classified like any other result, so a connection failure or a
    closed client surfaces as an ``AirtableError`` with status code 0.
    Cancellation is not an ``Exception`` and is never classified.

    Calls do not share state: each call keeps its attempt counter in
    its own coroutine. The client's connection pool is the only shared
    resource. Cancelling the returned task cancels the in-flight attempt
    (or the pending delay) and no further attempt is made.

    Args:
        client: The HTTP client used to send requests.
        retry_config: The retry policy. Defaults to ``RetryConfig()``.
        callback_config: Optional lifecycle callbacks.
        classifier: The classifier strategy. Defaults to a
            ``ResponseClassifier`` using ``codec``.
        codec: The JSON codec given to the default classifier.
        executor: Optional worker pool. When set, classification and
            any work passed to ``dispatch`` run on it instead of the
            event loop thread.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from airtablex import RequestDescriptor
        >>> from airtablex.retry import AsyncRequestExecutor
        >>> async def main():
        ...     async with httpx.AsyncClient() as client:
        ...         executor = AsyncRequestExecutor(client)
        ...         request = RequestDescriptor(
        ...             "GET",
        ...             "https://api.airtable.com/v0/appXXX/Tasks/recXXX",
        ...             headers={"Authorization": "Bearer key"},
        ...         )
        ...         return await executor.execute(request)
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        retry_config: RetryConfig | None = None,
        callback_config: CallbackConfig | None = None,
        classifier: BaseResponseClassifier | None = None,
        codec: JsonCodec | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.client = client
        self.config: RetryConfig = retry_config if retry_config is not None else RetryConfig()
        self.callbacks: CallbackManager = CallbackManager(
            callback_config if callback_config is not None else CallbackConfig(),
            self.config.max_retries,
        )
        self.strategy: RetryStrategy = RetryStrategy(self.config)
        self.codec: JsonCodec = codec if codec is not None else StandardJsonCodec()
        self.classifier: BaseResponseClassifier = (
            classifier if classifier is not None else ResponseClassifier(codec=self.codec)
        )
        self.executor = executor

    def execute(self, request: RequestDescriptor) -> asyncio.Task[httpx.Response]:
        """Submit a request and return its completion handle.

        The request is scheduled on the running event loop and the task
        is returned immediately.

        Args:
            request: The request to execute.

        Returns:
            A task resolving with the successful response, or failing
            with ``AirtableError``.

        Raises:
            RuntimeError: If no event loop is running.
        """
        return asyncio.get_running_loop().create_task(self._run(request))

    async def send(self, request: RequestDescriptor) -> httpx.Response:
        """Execute a request and wait for its result.

        Args:
            request: The request to execute.

        Returns:
            The successful response.

        Raises:
            AirtableError: If the call fails.
        """
        return await self.execute(request)

    async def dispatch(self, func: Callable[..., T], *args: Any) -> T:
        """Run ``func(*args)`` on the configured worker pool.

        Without a worker pool the function runs inline on the event
        loop thread.
        """
        if self.executor is None:
            return func(*args)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, functools.partial(func, *args))

    async def _attempt(self, request: RequestDescriptor) -> Outcome:
        try:
            response = await self.client.send(request.build())
        except Exception as exc:  # noqa: BLE001
            return await self.dispatch(self.classifier.classify, exc)
        return await self.dispatch(self.classifier.classify, response)

    async def _run(self, request: RequestDescriptor) -> httpx.Response:
        start_time = time.time()
        attempt = 0
        while True:
            self.callbacks.on_request(request, attempt)
            outcome = await self._attempt(request)

            if isinstance(outcome, Success):
                self.callbacks.on_success(request, attempt, outcome.response, start_time)
                return outcome.response

            if isinstance(outcome, TerminalFailure):
                self.callbacks.on_failure(request, attempt, outcome.error, start_time)
                raise outcome.error

            if not isinstance(outcome, RetryableFailure):
                msg = f"Unexpected outcome from {type(self.classifier).__name__}: {outcome!r}"
                raise TypeError(msg)

            if not self.config.can_retry(attempt):
                self.callbacks.on_failure(request, attempt, outcome.error, start_time)
                raise outcome.error

            delay = self.strategy.calculate_delay(attempt, outcome.response)
            logger.debug(
                f"{request.method} request to {request.url}: will retry in {delay:.2f}s "
                f"({outcome.reason}, attempt {attempt + 1})"
            )
            self.callbacks.on_retry(
                request, attempt, delay, outcome.response.status_code, outcome.reason
            )
            if delay > 0:
                await asyncio.sleep(delay)
            attempt += 1
