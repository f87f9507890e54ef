"""Argument checks shared by consumers and processors.

All checks run at construction time, before any read is attempted.
"""

from __future__ import annotations

import codecs
from typing import BinaryIO

from ..config import get_config
from ..errors import StreamConfigError

__all__ = [
    "require_stream",
    "resolve_buffer_size",
    "resolve_encoding",
]


def require_stream(stream: BinaryIO | None) -> BinaryIO:
    """Reject a missing stream.

    Args:
        stream: Binary stream to bind

    Returns:
        The same stream

    Raises:
        StreamConfigError: If no stream is supplied or it has no read()
    """
    if stream is None:
        raise StreamConfigError("stream", stream, "a readable stream is required")
    if not callable(getattr(stream, "read", None)):
        raise StreamConfigError("stream", stream, "object has no read() method")
    return stream


def resolve_buffer_size(buffer_size: int | None) -> int:
    """Validate a buffer size, falling back to the configured default.

    Args:
        buffer_size: Chunk size in bytes, or None for PROCSTREAM_BUFFER_SIZE

    Returns:
        A positive integer

    Raises:
        StreamConfigError: If the value is not a positive integer
    """
    if buffer_size is None:
        return get_config().buffer_size
    # bool is an int subclass, but True is never a meaningful chunk size
    if isinstance(buffer_size, bool) or not isinstance(buffer_size, int):
        raise StreamConfigError("buffer_size", buffer_size, "must be an integer")
    if buffer_size <= 0:
        raise StreamConfigError("buffer_size", buffer_size, "must be positive")
    return buffer_size


def resolve_encoding(encoding: str | None) -> str:
    """Validate a text encoding, falling back to the configured default."""
    if encoding is None:
        return get_config().effective_encoding
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        raise StreamConfigError("encoding", encoding, "unknown codec") from None
