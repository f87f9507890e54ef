"""Stream processors: drain a byte stream into a typed, memoized result.

``StreamProcessor`` only declares ``process()``. ``MemoizedStreamProcessor``
adds the one-shot caching every concrete strategy needs: the first successful
drain is cached, later calls return the same object without touching the
stream. ``AggregatorStreamProcessor`` is the line-joining strategy.

Retrying after a failed drain:
    A failed drain caches nothing. Streams cannot be rewound, so calling
    ``process()`` again reads from wherever the failed attempt stopped and
    yields whatever remains. This is inherent to borrowing a one-pass stream.
"""

from __future__ import annotations

import codecs
import logging
import os
import re
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from concurrent.futures import Executor, Future
from typing import BinaryIO, Generic, TypeVar

from ..errors import ResultNotReadyError
from .executor import aprocess as _aprocess
from .executor import get_results_async as _get_results_async
from .utils import require_stream, resolve_buffer_size, resolve_encoding

__all__ = [
    "StreamProcessor",
    "MemoizedStreamProcessor",
    "AggregatorStreamProcessor",
    "iter_lines",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Same terminators as a classic readLine(): LF, CR, or CRLF
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def iter_lines(stream: BinaryIO, buffer_size: int, encoding: str) -> Iterator[str]:
    """Read a byte stream incrementally and yield its lines in order.

    Line terminators (``\\n``, ``\\r``, ``\\r\\n``) are stripped. A final line
    without a terminator is still yielded; an empty stream yields nothing.
    Undecodable bytes are replaced rather than raising.

    Args:
        stream: Binary stream to read until end-of-stream
        buffer_size: Number of bytes per read
        encoding: Codec used to decode the bytes

    Yields:
        Lines without their terminators
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    # pieces of the current unterminated line, joined once it ends
    partial: list[str] = []
    held_cr = False

    while True:
        chunk = stream.read(buffer_size)
        final = not chunk
        text = decoder.decode(chunk or b"", final=final)

        if held_cr:
            text = "\r" + text
            held_cr = False
        if not final and text.endswith("\r"):
            # may be the first half of a CRLF split across reads
            text = text[:-1]
            held_cr = True

        # only the newly decoded text is scanned for terminators
        parts = _LINE_BREAK.split(text)
        if len(parts) > 1:
            partial.append(parts[0])
            yield "".join(partial)
            yield from parts[1:-1]
            partial = [parts[-1]] if parts[-1] else []
        elif parts[0]:
            partial.append(parts[0])

        if final:
            if partial:
                yield "".join(partial)
            return


class StreamProcessor(ABC, Generic[T]):
    """Processes the data of one bound byte stream into a result of type T."""

    @abstractmethod
    def process(self) -> T:
        """Return the processing result, draining the stream if needed.

        Raises:
            OSError: If reading the stream fails
        """

    def get_results_async(self, executor: Executor | None = None) -> Future[T]:
        """Run ``process()`` in the background and return its future.

        Args:
            executor: Optional executor (default: a dedicated daemon thread)

        Returns:
            Future resolving to the same value ``process()`` returns
        """
        return _get_results_async(self, executor)

    async def aprocess(self) -> T:
        """Await ``process()`` running in a worker thread."""
        return await _aprocess(self)


class MemoizedStreamProcessor(StreamProcessor[T]):
    """Processor that drains its stream once and caches the result.

    Whether a result exists is tracked by an explicit flag, so a legitimate
    result equal to ``""``, ``None`` or ``[]`` is still treated as computed.
    Concurrent ``process()`` calls serialize on a lock; only one drains.

    Subclasses implement ``_drain()``.

    Attributes:
        stream: The bound byte stream (borrowed, never closed)
        buffer_size: Chunk size used for each read
    """

    def __init__(self, stream: BinaryIO, buffer_size: int | None = None) -> None:
        """Bind the processor to a stream.

        Args:
            stream: Binary stream to process
            buffer_size: Chunk size in bytes (default: PROCSTREAM_BUFFER_SIZE or 8192)

        Raises:
            StreamConfigError: If the stream is missing or buffer_size is not positive
        """
        self.stream = require_stream(stream)
        self.buffer_size = resolve_buffer_size(buffer_size)
        self._lock = threading.Lock()
        self._computed = False
        self._result: T | None = None

    @abstractmethod
    def _drain(self) -> T:
        """Read the stream to the end and build the result."""

    def process(self) -> T:
        with self._lock:
            if self._computed:
                return self._result  # type: ignore[return-value]

            result = self._drain()
            self._result = result
            self._computed = True
            return result

    @property
    def computed(self) -> bool:
        """Whether a drain has completed successfully."""
        return self._computed

    @property
    def result(self) -> T:
        """The cached result.

        Raises:
            ResultNotReadyError: If no drain has completed yet
        """
        if not self._computed:
            raise ResultNotReadyError(self)
        return self._result  # type: ignore[return-value]


class AggregatorStreamProcessor(MemoizedStreamProcessor[str]):
    """Aggregates a byte stream into a single string.

    Lines are joined with ``os.linesep`` and no separator follows the last
    line, so ``b"a\\nb\\nc"`` becomes ``"a" + os.linesep + "b" + os.linesep + "c"``.
    An empty stream yields ``""``.

    Attributes:
        encoding: Codec used to decode the stream
    """

    def __init__(
        self,
        stream: BinaryIO,
        buffer_size: int | None = None,
        encoding: str | None = None,
    ) -> None:
        super().__init__(stream, buffer_size)
        self.encoding = resolve_encoding(encoding)

    def _drain(self) -> str:
        lines = list(iter_lines(self.stream, self.buffer_size, self.encoding))
        logger.debug(f"Aggregated {len(lines)} lines from {self.stream!r}")
        return os.linesep.join(lines)

    def __repr__(self) -> str:
        return (
            f"AggregatorStreamProcessor(stream={self.stream!r}, "
            f"buffer_size={self.buffer_size}, encoding={self.encoding}, "
            f"computed={self.computed})"
        )
