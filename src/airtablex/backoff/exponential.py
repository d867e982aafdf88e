r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

import math

from airtablex.backoff.base import BaseBackoffStrategy
from airtablex.validation import validate_delay


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    The delay is ``base_delay * (2 ** attempt)``, optionally capped at
    ``max_delay``.

    Args:
        base_delay: The delay before the first retry, in seconds.
        max_delay: Optional cap on a single delay, in seconds.

    Example:
        ```pycon
        >>> from airtablex.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.5)
        >>> backoff.calculate(0)
        0.5
        >>> backoff.calculate(3)
        4.0
        >>> ExponentialBackoff(base_delay=1.0, max_delay=30.0).calculate(10)
        30.0

        ```
    """

    def __init__(self, base_delay: float = 0.5, max_delay: float | None = None) -> None:
        validate_delay("base_delay", base_delay)
        if max_delay is not None:
            validate_delay("max_delay", max_delay, allow_zero=False)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def calculate(self, attempt: int) -> float:
        if not self.base_delay:
            return 0.0
        try:
            delay = math.ldexp(self.base_delay, attempt)
        except OverflowError:
            delay = math.inf
        return delay if self.max_delay is None else min(delay, self.max_delay)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_delay={self.base_delay}, max_delay={self.max_delay})"
