"""Config 模块测试。

测试 PROCSTREAM_* 环境变量解析和全局配置缓存。
"""

from __future__ import annotations

import locale
import os
from unittest import mock

import pytest

from procstream.config import (
    DEFAULT_BUFFER_SIZE,
    Config,
    get_config,
    load_config,
    reload_config,
)


class TestBufferSize:
    """测试 PROCSTREAM_BUFFER_SIZE 解析。"""

    def test_default(self):
        """未设置时使用默认值。"""
        assert load_config().buffer_size == DEFAULT_BUFFER_SIZE

    def test_custom(self):
        with mock.patch.dict(os.environ, {"PROCSTREAM_BUFFER_SIZE": "65536"}):
            assert load_config().buffer_size == 65536

    def test_whitespace(self):
        with mock.patch.dict(os.environ, {"PROCSTREAM_BUFFER_SIZE": " 512 "}):
            assert load_config().buffer_size == 512

    @pytest.mark.parametrize("value", ["0", "-5", "abc", "1.5", ""])
    def test_invalid_falls_back(self, value: str):
        """无效值回退到默认值。"""
        with mock.patch.dict(os.environ, {"PROCSTREAM_BUFFER_SIZE": value}):
            assert load_config().buffer_size == DEFAULT_BUFFER_SIZE


class TestEncoding:
    """测试 PROCSTREAM_ENCODING 解析。"""

    def test_unset_uses_platform_default(self):
        config = load_config()
        assert config.encoding is None
        assert config.effective_encoding == locale.getpreferredencoding(False)

    def test_normalized(self):
        with mock.patch.dict(os.environ, {"PROCSTREAM_ENCODING": "UTF8"}):
            assert load_config().encoding == "utf-8"

    def test_unknown_ignored(self):
        """未知编码被忽略。"""
        with mock.patch.dict(os.environ, {"PROCSTREAM_ENCODING": "klingon"}):
            assert load_config().encoding is None


class TestLogDebug:
    """测试 PROCSTREAM_LOG_DEBUG 解析。"""

    def test_default_off(self):
        config = load_config()
        assert config.log_debug is False
        assert config.log_file is None

    @pytest.mark.parametrize("value", ["true", "1", "yes", "on", "TRUE"])
    def test_enabled(self, value: str):
        with mock.patch.dict(os.environ, {"PROCSTREAM_LOG_DEBUG": value}):
            config = load_config()
        assert config.log_debug is True
        assert config.log_file is not None
        assert "procstream_debug_" in config.log_file

    @pytest.mark.parametrize("value", ["false", "0", "no", "off"])
    def test_disabled(self, value: str):
        with mock.patch.dict(os.environ, {"PROCSTREAM_LOG_DEBUG": value}):
            assert load_config().log_debug is False


class TestGlobalConfig:
    """测试 get_config()/reload_config()。"""

    def test_get_config_cached(self):
        """全局配置只加载一次。"""
        assert get_config() is get_config()

    def test_reload_picks_up_environment(self):
        first = get_config()
        with mock.patch.dict(os.environ, {"PROCSTREAM_BUFFER_SIZE": "1024"}):
            reloaded = reload_config()
        assert reloaded is not first
        assert reloaded.buffer_size == 1024
        assert get_config() is reloaded

    def test_repr(self):
        text = repr(Config())
        assert "buffer_size=8192" in text
        assert "encoding=platform" in text
