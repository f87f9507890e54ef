"""procstream - drain and aggregate child process output without deadlocks.

Environment variables:
    PROCSTREAM_BUFFER_SIZE: default read chunk size (default 8192)
    PROCSTREAM_ENCODING: default text encoding (default: platform)
    PROCSTREAM_LOG_DEBUG: command line debug log file (default false)

Usage:
    from procstream import AggregatorStreamProcessor, DiscardStreamConsumer
"""

__version__ = "0.1.0"

from .errors import ProcStreamError, ResultNotReadyError, StreamConfigError
from .locator import executable_exists, find_executable_path, find_executable_paths
from .streams import (
    AggregatorStreamProcessor,
    DiscardStreamConsumer,
    MemoizedStreamProcessor,
    StreamConsumer,
    StreamProcessor,
    aconsume,
    aprocess,
    consume_async,
    get_results_async,
    iter_lines,
)

__all__ = [
    "__version__",
    "ProcStreamError",
    "StreamConfigError",
    "ResultNotReadyError",
    "StreamConsumer",
    "DiscardStreamConsumer",
    "StreamProcessor",
    "MemoizedStreamProcessor",
    "AggregatorStreamProcessor",
    "iter_lines",
    "consume_async",
    "get_results_async",
    "aconsume",
    "aprocess",
    "find_executable_paths",
    "find_executable_path",
    "executable_exists",
]
