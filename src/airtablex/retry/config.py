r"""Configuration dataclasses for the retry policy and callbacks.

Airtable answers 429 when a base receives more than five requests per
second and asks the client to back off. The defaults below retry a
bounded number of times with exponential delays; ``max_retries=None``
together with ``ConstantBackoff(0.0)`` resubmits immediately and
without limit.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_FACTOR",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MAX_WAIT_TIME",
    "CallbackConfig",
    "RetryConfig",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from airtablex.backoff import ExponentialBackoff
from airtablex.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

    from airtablex.backoff import BaseBackoffStrategy
    from airtablex.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo

# Default maximum number of retries after a rate-limited attempt
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 5

# Delay before the first retry, doubled for every following retry
# With 0.5: 0.5s, 1s, 2s, 4s, 8s
DEFAULT_BACKOFF_FACTOR = 0.5

# Cap on a single delay, including delays requested by Retry-After and
# jitter
DEFAULT_MAX_WAIT_TIME = 30.0


@dataclass(frozen=True)
class RetryConfig:
    r"""Retry policy applied to rate-limited attempts.

    Args:
        max_retries: Maximum number of retries for one call. ``None``
            retries without limit. Must be >= 0 otherwise.
        backoff_strategy: Strategy computing the delay before each
            retry. Defaults to ``ExponentialBackoff(DEFAULT_BACKOFF_FACTOR)``.
        max_wait_time: Optional cap on a single delay in seconds.
        jitter_factor: Factor of random jitter added to each delay.
        respect_retry_after: Whether a ``Retry-After`` header on the
            response overrides the backoff strategy.

    Example:
        ```pycon
        >>> from airtablex.backoff import ConstantBackoff
        >>> from airtablex.retry import RetryConfig
        >>> RetryConfig().max_retries
        5
        >>> unbounded = RetryConfig(max_retries=None, backoff_strategy=ConstantBackoff(0.0))
        >>> unbounded.merge(max_retries=2).max_retries
        2

        ```
    """

    max_retries: int | None = DEFAULT_MAX_RETRIES
    backoff_strategy: BaseBackoffStrategy = field(
        default_factory=lambda: ExponentialBackoff(base_delay=DEFAULT_BACKOFF_FACTOR)
    )
    max_wait_time: float | None = DEFAULT_MAX_WAIT_TIME
    jitter_factor: float = 0.0
    respect_retry_after: bool = True

    def __post_init__(self) -> None:
        validate_retry_params(
            max_retries=self.max_retries,
            jitter_factor=self.jitter_factor,
            max_wait_time=self.max_wait_time,
        )

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with the given parameters overridden.

        Args:
            **overrides: Parameters to override. An explicit ``None``
                is applied as is, so ``merge(max_retries=None)``
                removes the retry ceiling.

        Returns:
            A new ``RetryConfig``; ``self`` is unchanged.
        """
        return replace(self, **overrides)

    def can_retry(self, retries_done: int) -> bool:
        """Return whether another retry is allowed.

        Args:
            retries_done: The number of retries already made for the call.
        """
        return self.max_retries is None or retries_done < self.max_retries


@dataclass(frozen=True)
class CallbackConfig:
    """Lifecycle callbacks invoked by the executor.

    Attributes:
        on_request: Invoked before each physical attempt.
        on_retry: Invoked after a rate-limited attempt, before waiting.
        on_success: Invoked when the call resolves with a response.
        on_failure: Invoked when the call fails with an error.
    """

    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None
