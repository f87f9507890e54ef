"""Executable lookup through the OS's own command.

Runs ``where`` on Windows and ``which`` everywhere else, and reads the paths
it prints. Failing to run the lookup, a non-zero exit, or a read error all
produce an empty list: "not found" and "could not probe" are deliberately the
same answer at this boundary. Only invalid arguments raise.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

from .config import get_config
from .streams import DiscardStreamConsumer, iter_lines

__all__ = [
    "IS_WINDOWS",
    "find_executable_paths",
    "find_executable_path",
    "executable_exists",
]

logger = logging.getLogger(__name__)

# Platform detection
IS_WINDOWS = sys.platform == "win32"


def _lookup_command() -> str:
    return "where" if IS_WINDOWS else "which"


def _validate(name: str | None, max_results: int | None) -> None:
    if name is None:
        raise TypeError("executable name is required")
    if not name:
        raise ValueError("executable name must not be empty")
    if max_results is not None and max_results <= 0:
        raise ValueError(f"max_results must be positive, got {max_results}")


def find_executable_paths(name: str, max_results: int | None = None) -> list[Path]:
    """Locate executables named ``name`` on the current PATH.

    Args:
        name: Executable name, e.g. "git"
        max_results: Maximum number of paths to return (None = no limit)

    Returns:
        Paths in the order the lookup command printed them; empty when
        nothing was found or the lookup failed

    Raises:
        TypeError: If name is None
        ValueError: If name is empty or max_results is not positive
    """
    _validate(name, max_results)

    config = get_config()
    argv = [_lookup_command(), name]
    paths: list[Path] = []

    try:
        process = subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        logger.debug(f"Executable lookup could not start argv={argv}: {e}")
        return paths

    with process:
        stderr_done = DiscardStreamConsumer(process.stderr, config.buffer_size).drain_async()
        try:
            for line in iter_lines(process.stdout, config.buffer_size, config.effective_encoding):
                if max_results is not None and len(paths) >= max_results:
                    break
                line = line.strip()
                if line:
                    paths.append(Path(line))
            # keep reading past the cap so the child never blocks on a full pipe
            DiscardStreamConsumer(process.stdout, config.buffer_size).drain()
            stderr_done.result()
            returncode = process.wait()
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Executable lookup failed argv={argv}: {e}")
            return []

    if returncode != 0:
        logger.debug(f"Executable lookup exited argv={argv} returncode={returncode}")
        return []

    logger.debug(f"Executable lookup found {len(paths)} path(s) for {name!r}")
    return paths


def find_executable_path(name: str) -> Path | None:
    """Return the first path for ``name``, or None if there is none."""
    paths = find_executable_paths(name, max_results=1)
    return paths[0] if paths else None


def executable_exists(name: str) -> bool:
    """Check whether at least one executable named ``name`` is on PATH."""
    return bool(find_executable_paths(name, max_results=1))
