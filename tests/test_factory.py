"""Tests for debuggable.factory and debuggable.bundle."""

import sys
import types
from unittest.mock import patch

from debuggable.bundle import BUNDLE_ENV_VAR, bundle_identifier
from debuggable.dispatcher import LoggerServiceDefault
from debuggable.factory import LoggerServiceFactory, build_logger_service
from debuggable.formatting import (
    LoggerColorConfiguration, LoggerDescriptionConfiguration,
)
from debuggable.levels import LoggerLevel
from debuggable.logger_queue import ImmediateLoggerQueue, default_queue
from debuggable.service import LoggerService

from conftest import LoggerQueueMock


class TestFactory:

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv(BUNDLE_ENV_VAR, "com.example.host")
        logger = LoggerServiceFactory.build("app")
        assert isinstance(logger, LoggerServiceDefault)
        assert logger.name == "app"
        assert logger.is_enabled is False
        assert logger.min_logger_level is LoggerLevel.DISABLE
        assert logger.queue is default_queue()
        assert logger.bundle_identifier == "com.example.host"
        assert logger.color_configuration is None
        assert logger.description_configuration is LoggerDescriptionConfiguration.DEFAULT
        assert logger.services == []

    def test_explicit_values(self):
        queue = LoggerQueueMock()
        logger = build_logger_service(
            "app", enable=True, min_logger_level=LoggerLevel.WARNING,
            queue=queue, bundle_identifier="com.example.explicit",
            color_configuration=LoggerColorConfiguration.LINUX,
            description_configuration=None,
        )
        assert logger.is_enabled is True
        assert logger.min_logger_level is LoggerLevel.WARNING
        assert logger.queue is queue
        assert logger.bundle_identifier == "com.example.explicit"
        assert logger.color_configuration is LoggerColorConfiguration.LINUX
        assert logger.description_configuration is None

    def test_bundle_none_omits_tag(self, monkeypatch):
        monkeypatch.setenv(BUNDLE_ENV_VAR, "com.example.host")
        logger = LoggerServiceFactory.build("app", bundle_identifier=None)
        assert logger.bundle_identifier is None

    def test_builds_fresh_instances(self):
        queue = LoggerQueueMock()
        assert (LoggerServiceFactory.build("a", queue=queue)
                is not LoggerServiceFactory.build("a", queue=queue))

    def test_no_submissions_on_build(self):
        queue = LoggerQueueMock()
        LoggerServiceFactory.build("a", enable=True,
                                   min_logger_level=LoggerLevel.VERBOSE, queue=queue)
        assert queue.invoked_async_count == 0

    def test_tables_reach_output(self, buf):
        logger = LoggerServiceFactory.build(
            "app", min_logger_level=LoggerLevel.FATAL_ERROR,
            queue=ImmediateLoggerQueue(), bundle_identifier=None,
            color_configuration=LoggerColorConfiguration.LINUX,
        )
        logger.add(LoggerService("sink", enable=True,
                                 min_logger_level=LoggerLevel.FATAL_ERROR,
                                 file=buf))
        logger.log_error("hello")
        text = buf.getvalue()
        assert text.startswith("\x1b[0;31m‼️ [sink]")
        assert text.endswith("\nhello\x1b[0m\n")


class TestBundleIdentifier:

    def test_env_var_wins(self, monkeypatch):
        monkeypatch.setenv(BUNDLE_ENV_VAR, "com.example.env")
        assert bundle_identifier() == "com.example.env"

    def test_main_module_package(self, monkeypatch):
        monkeypatch.delenv(BUNDLE_ENV_VAR, raising=False)
        main = types.ModuleType("__main__")
        main.__spec__ = types.SimpleNamespace(name="mytool.__main__")
        with patch.dict(sys.modules, {"__main__": main}):
            assert bundle_identifier() == "mytool"

    def test_main_script_stem(self, monkeypatch):
        monkeypatch.delenv(BUNDLE_ENV_VAR, raising=False)
        main = types.ModuleType("__main__")
        main.__spec__ = None
        main.__file__ = "/opt/tools/sync_repos.py"
        with patch.dict(sys.modules, {"__main__": main}):
            assert bundle_identifier() == "sync_repos"

    def test_interactive_session(self, monkeypatch):
        monkeypatch.delenv(BUNDLE_ENV_VAR, raising=False)
        main = types.ModuleType("__main__")
        main.__spec__ = None
        with patch.dict(sys.modules, {"__main__": main}):
            assert bundle_identifier() is None
