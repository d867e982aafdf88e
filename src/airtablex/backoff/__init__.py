r"""Backoff strategies used between rate-limited attempts.

Two strategies are provided: exponential growth, which is the default
for Airtable's rate limiter, and a constant delay. ``ConstantBackoff(0.0)``
resubmits immediately.
"""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ConstantBackoff", "ExponentialBackoff"]

from airtablex.backoff.base import BaseBackoffStrategy
from airtablex.backoff.constant import ConstantBackoff
from airtablex.backoff.exponential import ExponentialBackoff
