"""Concrete infrastructure implementations."""

from .http import RequestsJsonSession, parse_retry_after
from .resilience import RetryPolicy
from .sources import HttpRowSource, JsonFileRowSource

__all__ = [
    "HttpRowSource",
    "JsonFileRowSource",
    "RequestsJsonSession",
    "RetryPolicy",
    "parse_retry_after",
]
