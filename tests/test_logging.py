"""Tests for logging configuration."""

import logging

import pytest

from interval_async.logging import (
    LOG_LEVEL_ENV_VAR,
    ComponentFormatter,
    configure_logging,
    resolve_level,
)


def _record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "interval_started", None, None)


class TestComponentFormatter:
    """Tests for ComponentFormatter."""

    def test_package_logger_uses_module_name(self):
        formatter = ComponentFormatter("%(component)s | %(message)s")
        assert formatter.format(_record("interval_async.scheduler")) == (
            "scheduler | interval_started"
        )

    def test_foreign_logger_uses_top_level_name(self):
        formatter = ComponentFormatter("%(component)s")
        assert formatter.format(_record("asyncio")) == "asyncio"
        assert formatter.format(_record("myapp.jobs.poller")) == "myapp"


class TestResolveLevel:
    """Tests for resolve_level()."""

    def test_explicit_level(self):
        assert resolve_level("debug") == logging.DEBUG

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "WARNING")
        assert resolve_level() == logging.WARNING

    def test_default_is_info(self, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
        assert resolve_level() == logging.INFO

    def test_unknown_level_falls_back_to_info(self):
        assert resolve_level("CHATTY") == logging.INFO


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.fixture
    def basic_config(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        return calls

    def test_stream_handler(self, basic_config):
        configure_logging("DEBUG")
        assert len(basic_config) == 1
        kwargs = basic_config[0]
        assert kwargs["level"] == logging.DEBUG
        assert kwargs["force"] is True
        (handler,) = kwargs["handlers"]
        assert isinstance(handler, logging.StreamHandler)
        assert isinstance(handler.formatter, ComponentFormatter)

    def test_rich_handler(self, basic_config):
        from rich.logging import RichHandler

        configure_logging("INFO", use_rich=True)
        (handler,) = basic_config[0]["handlers"]
        assert isinstance(handler, RichHandler)
        assert isinstance(handler.formatter, ComponentFormatter)
