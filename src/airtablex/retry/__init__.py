r"""Resilient asynchronous execution of Airtable requests.

Public API:
    - AsyncRequestExecutor: executes requests and retries rate-limited attempts
    - BaseResponseClassifier / ResponseClassifier: turn transport results
      into outcomes
    - Success / RetryableFailure / TerminalFailure: the outcomes
    - RetryConfig: retry ceiling and delays
    - CallbackConfig: lifecycle callbacks
    - RetryStrategy: delay computation
"""

from __future__ import annotations

__all__ = [
    "AsyncRequestExecutor",
    "BaseResponseClassifier",
    "CallbackConfig",
    "CallbackManager",
    "Outcome",
    "ResponseClassifier",
    "RetryConfig",
    "RetryStrategy",
    "RetryableFailure",
    "Success",
    "TerminalFailure",
    "parse_retry_after",
]

from airtablex.retry.classifier import BaseResponseClassifier, ResponseClassifier
from airtablex.retry.config import CallbackConfig, RetryConfig
from airtablex.retry.executor_async import AsyncRequestExecutor
from airtablex.retry.manager import CallbackManager
from airtablex.retry.outcome import Outcome, RetryableFailure, Success, TerminalFailure
from airtablex.retry.strategy import RetryStrategy, parse_retry_after
