"""procstream 命令行入口。

用法:
    procstream which NAME [--all | --max N]
    python -m procstream which NAME
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import Config, get_config
from .locator import find_executable_paths

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def configure_logging(config: Config) -> None:
    """配置命令行日志输出。

    PROCSTREAM_LOG_DEBUG 开启时 DEBUG 日志写入临时文件，否则 INFO 及以上
    输出到 stderr。第三方库保持 WARNING。
    """
    handlers: list[logging.Handler] = []

    if config.log_debug and config.log_file:
        # LOG_DEBUG 模式：输出到临时文件
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)
        log_level = logging.DEBUG
    else:
        # 默认模式：输出到 stderr
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(stderr_handler)
        log_level = logging.INFO

    # root logger（第三方库）保持 WARNING，只对 procstream 命名空间启用详细日志
    logging.basicConfig(level=logging.WARNING, handlers=handlers)
    logging.getLogger("procstream").setLevel(log_level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procstream",
        description="Process stream utilities",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    which = subparsers.add_parser("which", help="Locate an executable on PATH")
    which.add_argument("name", help="Executable name")
    limit = which.add_mutually_exclusive_group()
    limit.add_argument("--all", action="store_true", help="Print every match")
    limit.add_argument("--max", type=_positive_int, default=None, metavar="N",
                       help="Print at most N matches")
    return parser


def main(argv: list[str] | None = None) -> int:
    """主入口点，返回进程退出码。"""
    args = build_parser().parse_args(argv)
    config = get_config()
    configure_logging(config)
    logger.debug(f"Loaded {config!r}")

    if args.all:
        max_results = None
    else:
        max_results = args.max or 1

    paths = find_executable_paths(args.name, max_results=max_results)
    for path in paths:
        print(path)
    return 0 if paths else 1
