"""Shared test fixtures for the debuggable test suite."""

import io
import os
from unittest.mock import patch

import pytest

from debuggable.levels import LoggerLevel
from debuggable.logger_queue import QoS, WorkFlags
from debuggable.service import LoggerService
from debuggable.dispatcher import LoggerServiceDefault
from debuggable import manager as _manager_mod


# ---------------------------------------------------------------------------
# Mocks
# ---------------------------------------------------------------------------
class LoggerQueueMock:
    """Queue that records submissions and optionally runs them inline."""

    def __init__(self, run_work=False):
        self.run_work = run_work
        self.invoked_async_count = 0
        self.invoked_async_parameters = []

    def async_(self, work, group=None, qos=QoS.DEFAULT, flags=WorkFlags.NONE):
        self.invoked_async_count += 1
        self.invoked_async_parameters.append((group, qos, flags))
        if self.run_work:
            work()


class LoggerServiceMock(LoggerService):
    """Sink that records every call instead of writing anything."""

    def __init__(self, name="oslog", enable=True,
                 min_logger_level=LoggerLevel.FATAL_ERROR, **kwargs):
        self.is_enabled_setter_calls = []
        super().__init__(name, enable=enable, min_logger_level=min_logger_level,
                         **kwargs)
        self.is_enabled_setter_calls.clear()
        self.logged = []
        self.emitted = []

    @property
    def is_enabled(self):
        return self._is_enabled

    @is_enabled.setter
    def is_enabled(self, value):
        self.is_enabled_setter_calls.append(value)
        self._is_enabled = value

    def log(self, message, level, context=None, source_location=None):
        self.logged.append((message, level, context, source_location))
        super().log(message, level, context, source_location)

    def emit(self, text, level=None):
        self.emitted.append((text, level))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def buf():
    """A StringIO buffer for capturing output."""
    return io.StringIO()


@pytest.fixture
def logger_queue():
    """A recording queue that runs submitted work inline."""
    return LoggerQueueMock(run_work=True)


@pytest.fixture
def service():
    """An enabled recording sink named 'oslog'."""
    return LoggerServiceMock()


@pytest.fixture
def make_dispatcher(logger_queue):
    """Factory for dispatchers wired to the recording queue."""
    def _make(name="under-test", enable=True,
              min_logger_level=LoggerLevel.FATAL_ERROR, **kwargs):
        kwargs.setdefault("bundle_identifier", "com.example.tests")
        kwargs.setdefault("queue", logger_queue)
        return LoggerServiceDefault(
            name,
            enable=enable,
            min_logger_level=min_logger_level,
            **kwargs,
        )
    return _make


@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.debuggable/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def reset_manager():
    """Restore the module-level dispatcher singleton after a test."""
    old = _manager_mod._logger
    yield
    _manager_mod._logger = old
