"""Exports for test fakes."""

from .http import FakeHttpSession
from .sources import BlockingRowSource, FailingRowSource, FakeRowSource

__all__ = [
    "BlockingRowSource",
    "FailingRowSource",
    "FakeHttpSession",
    "FakeRowSource",
]
