r"""Parameter validation for the client configuration and retry
policy."""

from __future__ import annotations

__all__ = ["validate_delay", "validate_retry_params", "validate_timeout"]

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


def validate_timeout(timeout: float | httpx.Timeout | None) -> None:
    """Validate the request timeout.

    Args:
        timeout: Seconds to wait for the server, an ``httpx.Timeout``,
            or ``None`` to disable timeouts.

    Raises:
        ValueError: If ``timeout`` is a number <= 0.

    Example:
        ```pycon
        >>> from airtablex.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int | None,
    jitter_factor: float = 0.0,
    max_wait_time: float | None = None,
) -> None:
    """Validate the retry policy parameters.

    Args:
        max_retries: Maximum number of retries after a rate-limited
            attempt. ``None`` means no limit; otherwise must be >= 0.
        jitter_factor: Factor of random jitter added to delays. Must
            be >= 0.
        max_wait_time: Cap on a single delay in seconds. Must be > 0
            if provided.

    Raises:
        ValueError: If a parameter is out of range.

    Example:
        ```pycon
        >>> from airtablex.validation import validate_retry_params
        >>> validate_retry_params(max_retries=5)
        >>> validate_retry_params(max_retries=None, max_wait_time=30.0)

        ```
    """
    if max_retries is not None and max_retries < 0:
        msg = f"max_retries must be >= 0 or None, got {max_retries}"
        raise ValueError(msg)
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)
    if max_wait_time is not None and max_wait_time <= 0:
        msg = f"max_wait_time must be > 0, got {max_wait_time}"
        raise ValueError(msg)


def validate_delay(name: str, value: float, allow_zero: bool = True) -> None:
    """Validate a delay used by a backoff strategy.

    Args:
        name: The parameter name, used in the error message.
        value: The delay in seconds.
        allow_zero: Whether 0 is accepted.

    Raises:
        ValueError: If the delay is negative, not finite, or zero when
            ``allow_zero`` is ``False``.

    Example:
        ```pycon
        >>> from airtablex.validation import validate_delay
        >>> validate_delay("delay", 0.0)
        >>> validate_delay("max_delay", 30.0, allow_zero=False)

        ```
    """
    if math.isfinite(value) and (value > 0 or (allow_zero and value == 0)):
        return
    bound = ">= 0" if allow_zero else "> 0"
    msg = f"{name} must be a finite number {bound}, got {value}"
    raise ValueError(msg)
