r"""Unit tests for the callback manager."""

from __future__ import annotations

from unittest.mock import Mock

from airtablex.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo
from airtablex.exceptions import AirtableError
from airtablex.retry import CallbackConfig, CallbackManager
from tests.helpers import make_descriptor, make_response


def test_on_request() -> None:
    """Test that on_request receives a 1-indexed attempt."""
    callback = Mock()
    manager = CallbackManager(CallbackConfig(on_request=callback), max_retries=3)
    manager.on_request(make_descriptor(), attempt=0)
    callback.assert_called_once_with(
        RequestInfo(url=make_descriptor().url, method="GET", attempt=1, max_retries=3)
    )


def test_on_retry() -> None:
    """Test that on_retry reports the attempt about to be made."""
    callback = Mock()
    manager = CallbackManager(CallbackConfig(on_retry=callback), max_retries=None)
    manager.on_retry(make_descriptor(), attempt=0, wait_time=0.5, status_code=429, reason="status 429")
    callback.assert_called_once_with(
        RetryInfo(
            url=make_descriptor().url,
            method="GET",
            attempt=2,
            max_retries=None,
            wait_time=0.5,
            status_code=429,
            reason="status 429",
        )
    )


def test_on_success() -> None:
    """Test that on_success receives the response and the elapsed time."""
    callback = Mock()
    response = make_response(200)
    manager = CallbackManager(CallbackConfig(on_success=callback), max_retries=5)
    manager.on_success(make_descriptor(), attempt=1, response=response, start_time=0.0)
    info = callback.call_args.args[0]
    assert isinstance(info, ResponseInfo)
    assert info.attempt == 2
    assert info.response is response
    assert info.total_time > 0


def test_on_failure() -> None:
    """Test that on_failure receives the error."""
    callback = Mock()
    error = AirtableError("failed", status_code=500)
    manager = CallbackManager(CallbackConfig(on_failure=callback), max_retries=5)
    manager.on_failure(make_descriptor("DELETE"), attempt=0, error=error, start_time=0.0)
    info = callback.call_args.args[0]
    assert isinstance(info, FailureInfo)
    assert info.error is error
    assert info.method == "DELETE"
    assert info.attempt == 1


def test_no_callbacks() -> None:
    """Test that the manager does nothing without callbacks."""
    manager = CallbackManager(CallbackConfig(), max_retries=5)
    manager.on_request(make_descriptor(), attempt=0)
    manager.on_retry(make_descriptor(), attempt=0, wait_time=0.0, status_code=429, reason="r")
    manager.on_success(make_descriptor(), attempt=0, response=make_response(200), start_time=0.0)
    manager.on_failure(make_descriptor(), attempt=0, error=AirtableError("x"), start_time=0.0)
