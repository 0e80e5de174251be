"""Retry policy for transient row-source failures.

Usage example:
    from building_lookup.infrastructure.resilience import RetryPolicy

    policy = RetryPolicy(max_retries=3, backoff_factor=0.5)
    delay = policy.compute_backoff(attempt=1)
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import override

import requests

from ..protocols import RetryPolicy as RetryPolicyProtocol


@dataclass
class RetryPolicy(RetryPolicyProtocol):
    """Exponential backoff with jitter, honouring Retry-After when larger."""

    max_retries: int = 3
    backoff_factor: float = 0.5
    max_backoff_seconds: float = 30.0
    jitter_seconds: float = 0.1
    retry_statuses: tuple[int, ...] = (429, 500, 502, 503, 504)
    retry_exceptions: tuple[type[Exception], ...] = (requests.Timeout, requests.ConnectionError)

    @override
    def compute_backoff(self, attempt: int, retry_after: int | None = None) -> float:
        base = min(self.max_backoff_seconds, self.backoff_factor * (2**attempt))
        if retry_after is not None:
            base = max(base, float(retry_after))
        if self.jitter_seconds > 0:
            base += random.uniform(0.0, self.jitter_seconds)
        return float(base)
