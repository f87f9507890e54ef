"""Stream layer: consumers, processors and their background wrappers."""

from __future__ import annotations

from .consumer import DiscardStreamConsumer, StreamConsumer
from .executor import aconsume, aprocess, consume_async, get_results_async, spawn
from .processor import (
    AggregatorStreamProcessor,
    MemoizedStreamProcessor,
    StreamProcessor,
    iter_lines,
)

__all__ = [
    "StreamConsumer",
    "DiscardStreamConsumer",
    "StreamProcessor",
    "MemoizedStreamProcessor",
    "AggregatorStreamProcessor",
    "iter_lines",
    "spawn",
    "consume_async",
    "get_results_async",
    "aconsume",
    "aprocess",
]
