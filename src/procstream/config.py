"""procstream 环境变量配置管理。

环境变量:
    PROCSTREAM_BUFFER_SIZE: drain 流时的默认读取块大小
        - 正整数，默认 8192
        - 无效值或非正数回退到默认值

    PROCSTREAM_ENCODING: 按行聚合时的默认文本编码
        - 空/未设置 = 平台默认 (locale.getpreferredencoding)
        - 未知编码名被忽略

    PROCSTREAM_LOG_DEBUG: 命令行日志调试模式
        - true/1/yes/on = 开启 (日志输出到临时文件)
        - false/0/no = 关闭 (默认，日志输出到 stderr)

显式传给 consumer / processor 的参数始终优先于环境变量。
"""

from __future__ import annotations

import codecs
import locale
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

__all__ = [
    "Config",
    "DEFAULT_BUFFER_SIZE",
    "get_config",
    "load_config",
    "reload_config",
]

DEFAULT_BUFFER_SIZE = 8192


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """解析布尔值环境变量。"""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_buffer_size(value: str | None) -> int:
    """解析 PROCSTREAM_BUFFER_SIZE，无效时回退到默认值。"""
    if not value:
        return DEFAULT_BUFFER_SIZE
    try:
        size = int(value.strip())
    except ValueError:
        return DEFAULT_BUFFER_SIZE
    return size if size > 0 else DEFAULT_BUFFER_SIZE


def _parse_encoding(value: str | None) -> str | None:
    """解析 PROCSTREAM_ENCODING，None 表示平台默认。"""
    if not value or not value.strip():
        return None
    name = value.strip()
    try:
        return codecs.lookup(name).name
    except LookupError:
        return None


def _generate_log_file_path() -> str:
    """生成日志文件路径。

    Returns:
        临时目录下的日志文件绝对路径
    """
    # 使用系统临时目录下的 procstream 子目录
    log_dir = Path(tempfile.gettempdir()) / "procstream"
    log_dir.mkdir(parents=True, exist_ok=True)

    # 生成带时间戳的文件名
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"procstream_debug_{timestamp}.log"

    return str(log_file.resolve())


@dataclass
class Config:
    """procstream 配置。

    Attributes:
        buffer_size: consumer / processor 的默认读取块大小
        encoding: 默认文本编码（None = 平台默认）
        log_debug: 日志调试模式（输出到临时文件）
        log_file: 日志文件路径（当 log_debug=True 时自动设置）
    """

    buffer_size: int = DEFAULT_BUFFER_SIZE
    encoding: str | None = None
    log_debug: bool = False
    log_file: str | None = None

    @property
    def effective_encoding(self) -> str:
        """实际用于解码的编码。"""
        return self.encoding or locale.getpreferredencoding(False)

    def __repr__(self) -> str:
        return (
            f"Config(buffer_size={self.buffer_size}, "
            f"encoding={self.encoding or 'platform'}, "
            f"log_debug={self.log_debug}, "
            f"log_file={self.log_file})"
        )


def load_config() -> Config:
    """从环境变量加载配置。"""
    log_debug = _parse_bool(os.environ.get("PROCSTREAM_LOG_DEBUG"), default=False)
    log_file = _generate_log_file_path() if log_debug else None

    return Config(
        buffer_size=_parse_buffer_size(os.environ.get("PROCSTREAM_BUFFER_SIZE")),
        encoding=_parse_encoding(os.environ.get("PROCSTREAM_ENCODING")),
        log_debug=log_debug,
        log_file=log_file,
    )


# 全局配置实例（延迟加载）
_config: Config | None = None


def get_config() -> Config:
    """获取全局配置实例。"""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """重新加载配置（用于测试）。"""
    global _config
    _config = load_config()
    return _config
