"""Stream consumers: drain a byte stream and throw the data away.

A child process with both stdout and stderr piped blocks as soon as either
pipe fills up and nobody reads it. Attaching a consumer to the stream you do
not care about keeps the child running.

Example:
    process = subprocess.Popen(argv, stdout=PIPE, stderr=PIPE)
    stderr_done = DiscardStreamConsumer(process.stderr).drain_async()
    output = AggregatorStreamProcessor(process.stdout).process()
    stderr_done.result()
    process.wait()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future
from typing import BinaryIO

from .executor import aconsume, consume_async
from .utils import require_stream, resolve_buffer_size

__all__ = [
    "StreamConsumer",
    "DiscardStreamConsumer",
]

logger = logging.getLogger(__name__)


class StreamConsumer(ABC):
    """Consumes the data of one bound byte stream.

    Subclasses implement ``drain()``; the background variants come for free.
    """

    @abstractmethod
    def drain(self) -> None:
        """Consume the bound stream until end-of-stream.

        Raises:
            OSError: If reading the stream fails
        """

    def drain_async(self, executor: Executor | None = None) -> Future[None]:
        """Start ``drain()`` in the background and return its future.

        Args:
            executor: Optional executor (default: a dedicated daemon thread)

        Returns:
            Future resolving to None, or carrying the read error
        """
        return consume_async(self, executor)

    async def adrain(self) -> None:
        """Await ``drain()`` running in a worker thread."""
        await aconsume(self)


class DiscardStreamConsumer(StreamConsumer):
    """Consumer that discards everything it reads.

    Attributes:
        stream: The bound byte stream (borrowed, never closed)
        buffer_size: Chunk size used for each read
    """

    def __init__(self, stream: BinaryIO, buffer_size: int | None = None) -> None:
        """Bind the consumer to a stream.

        Args:
            stream: Binary stream to drain
            buffer_size: Chunk size in bytes (default: PROCSTREAM_BUFFER_SIZE or 8192)

        Raises:
            StreamConfigError: If the stream is missing or buffer_size is not positive
        """
        self.stream = require_stream(stream)
        self.buffer_size = resolve_buffer_size(buffer_size)

    def drain(self) -> None:
        read = self.stream.read
        total = 0
        while True:
            chunk = read(self.buffer_size)
            if not chunk:
                break
            total += len(chunk)
        logger.debug(f"Discarded {total} bytes from {self.stream!r}")

    def __repr__(self) -> str:
        return f"DiscardStreamConsumer(stream={self.stream!r}, buffer_size={self.buffer_size})"
