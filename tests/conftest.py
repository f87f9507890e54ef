"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Add src to the Python path
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

FIXTURES_DIR = Path(__file__).parent / "fixtures"

from procstream.config import reload_config  # noqa: E402

ENV_VARS = ("PROCSTREAM_BUFFER_SIZE", "PROCSTREAM_ENCODING", "PROCSTREAM_LOG_DEBUG")


class FlakyStream(io.RawIOBase):
    """Byte stream that serves fixed chunks and raises once at a given read.

    Attributes:
        reads: number of read() calls made so far
        requested: sizes passed to read()
    """

    def __init__(self, chunks: list[bytes], fail_at: int | None = None) -> None:
        super().__init__()
        self._chunks = list(chunks)
        self._fail_at = fail_at
        self.reads = 0
        self.requested: list[int] = []

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        self.requested.append(size)
        index = self.reads
        self.reads += 1
        if self._fail_at is not None and index == self._fail_at:
            self._fail_at = None
            raise OSError("simulated read failure")
        if not self._chunks:
            return b""
        return self._chunks.pop(0)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch):
    """Run every test with PROCSTREAM_* unset and a fresh global config."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reload_config()
    yield
    reload_config()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory with helper scripts."""
    return FIXTURES_DIR


@pytest.fixture
def flaky_stream():
    """Factory for FlakyStream instances."""
    return FlakyStream
