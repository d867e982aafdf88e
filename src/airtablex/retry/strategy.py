r"""Delay computation between rate-limited attempts."""

from __future__ import annotations

__all__ = ["RetryStrategy", "parse_retry_after"]

import logging
import math
import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from airtablex.retry.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> float | None:
    """Parse a ``Retry-After`` header value into seconds.

    Both forms allowed by RFC 7231 are accepted: a number of seconds or
    an HTTP-date. Negative values and dates in the past give 0.0.
    Non-finite numbers such as ``"inf"`` or ``"nan"`` are rejected.

    Args:
        value: The header value, or ``None`` if absent.

    Returns:
        The delay in seconds, or ``None`` if the header is absent or
        cannot be parsed.

    Example:
        ```pycon
        >>> from airtablex.retry import parse_retry_after
        >>> parse_retry_after("30")
        30.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("soon") is None
        True

        ```
    """
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return _seconds_until(value)
    if not math.isfinite(seconds):
        logger.debug(f"Ignoring non-finite Retry-After header: {value!r}")
        return None
    return max(0.0, seconds)


def _seconds_until(value: str) -> float | None:
    try:
        retry_at = parsedate_to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Ignoring unparseable Retry-After header: {value!r}")
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max(0.0, (retry_at - datetime.now(timezone.utc)).total_seconds())


class RetryStrategy:
    """Computes the delay before the next attempt of a call.

    The delay is, in order: the ``Retry-After`` value of the response if
    present and enabled, else the backoff strategy's value; then
    increased by up to ``jitter_factor`` of itself; finally capped at
    ``max_wait_time``, so jitter never pushes a delay past the cap.

    Args:
        config: The retry policy.
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config

    def calculate_delay(self, retry: int, response: httpx.Response | None = None) -> float:
        """Calculate the delay before a retry.

        Args:
            retry: The number of the retry being scheduled (0-indexed).
            response: The rate-limited response, if any.

        Returns:
            The delay in seconds.
        """
        delay: float | None = None
        if self.config.respect_retry_after and response is not None:
            delay = parse_retry_after(response.headers.get("Retry-After"))
            if delay is not None:
                logger.debug(f"Using Retry-After header value: {delay:.2f}s")
        if delay is None:
            delay = self.config.backoff_strategy.calculate(retry)

        if self.config.jitter_factor > 0:
            delay += random.uniform(0, self.config.jitter_factor) * delay  # noqa: S311

        max_wait_time = self.config.max_wait_time
        if max_wait_time is not None and delay > max_wait_time:
            logger.debug(f"Capping delay from {delay:.2f}s to {max_wait_time:.2f}s")
            delay = max_wait_time
        return delay
