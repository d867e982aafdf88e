r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from airtablex.backoff.base import BaseBackoffStrategy
from airtablex.validation import validate_delay


class ConstantBackoff(BaseBackoffStrategy):
    """Wait the same delay before every retry.

    With ``delay=0.0`` a rate-limited request is resubmitted as soon as
    the 429 response has been classified.

    Args:
        delay: The delay in seconds.

    Example:
        ```pycon
        >>> from airtablex.backoff import ConstantBackoff
        >>> ConstantBackoff(delay=2.0).calculate(7)
        2.0

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        validate_delay("delay", delay)
        self.delay = delay

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return float(self.delay)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(delay={self.delay})"
