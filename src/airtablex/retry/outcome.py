r"""Classification outcomes of one physical attempt."""

from __future__ import annotations

__all__ = ["Outcome", "RetryableFailure", "Success", "TerminalFailure"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    import httpx

    from airtablex.exceptions import AirtableError


@dataclass(frozen=True)
class Success:
    """The attempt produced a 2xx response, delivered unchanged."""

    response: httpx.Response


@dataclass(frozen=True)
class RetryableFailure:
    """The attempt failed transiently and the request may be resubmitted.

    Attributes:
        reason: Short description, e.g. ``"status 429"``.
        response: The response that was classified.
        error: The error to deliver if no further attempt is made.
    """

    reason: str
    response: httpx.Response
    error: AirtableError


@dataclass(frozen=True)
class TerminalFailure:
    """The attempt failed and the call must fail with ``error``."""

    error: AirtableError


Outcome = Union[Success, RetryableFailure, TerminalFailure]
