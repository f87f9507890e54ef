"""procstream 异常类。

I/O 错误不在这里包装：流自身的 ``OSError``（或读取已关闭文件时的
``ValueError``）原样传给调用方。
"""

from __future__ import annotations

__all__ = [
    "ProcStreamError",
    "StreamConfigError",
    "ResultNotReadyError",
]


class ProcStreamError(Exception):
    """procstream 基础异常。"""
    pass


class StreamConfigError(ProcStreamError, ValueError):
    """构造参数错误（缺少流、缓冲区大小或编码无效）。

    Attributes:
        parameter: 出错的参数名
        value: 被拒绝的值
    """

    def __init__(self, parameter: str, value: object, reason: str) -> None:
        self.parameter = parameter
        self.value = value
        super().__init__(f"invalid {parameter}={value!r}: {reason}")


class ResultNotReadyError(ProcStreamError, RuntimeError):
    """在首次成功 drain 之前读取了 processor 结果。"""

    def __init__(self, processor: object) -> None:
        self.processor = processor
        super().__init__(
            f"{type(processor).__name__} has not completed a drain yet; call process() first"
        )
