r"""Unit tests for ConstantBackoff strategy."""

from __future__ import annotations

import pytest

from airtablex.backoff import ConstantBackoff


@pytest.mark.parametrize("attempt", [0, 1, 10])
def test_constant_backoff_same_delay(attempt: int) -> None:
    """Test that every retry gets the same delay."""
    assert ConstantBackoff(delay=2.0).calculate(attempt) == 2.0


def test_constant_backoff_zero_delay() -> None:
    """Test that a zero delay is allowed for immediate retries."""
    assert ConstantBackoff(0.0).calculate(3) == 0.0


def test_constant_backoff_default() -> None:
    """Test the default delay."""
    assert ConstantBackoff().delay == 1.0


@pytest.mark.parametrize("delay", [-0.1, float("inf"), float("nan")])
def test_constant_backoff_invalid_delay(delay: float) -> None:
    """Test that a negative or non-finite delay raises ValueError."""
    with pytest.raises(ValueError, match=r"delay must be a finite number >= 0"):
        ConstantBackoff(delay=delay)


def test_constant_backoff_repr() -> None:
    """Test the string representation."""
    assert repr(ConstantBackoff(0.0)) == "ConstantBackoff(delay=0.0)"
