r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy turns the number of rate-limited attempts seen so
    far into the delay to wait before resubmitting the request.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the delay before the next attempt.

        Args:
            attempt: The number of the retry being scheduled (0-indexed):
                0 is the delay before the first retry.

        Returns:
            The delay in seconds.
        """
