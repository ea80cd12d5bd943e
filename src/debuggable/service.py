"""
LoggerService - a single named sink that renders and emits log lines.

A sink has its own enable flag and level floor. It can be registered
into a dispatcher (LoggerServiceDefault) or driven directly; either way
log() re-checks the level floor and the context filter before rendering.

Rendered line:

    <glyph> [<name>][<bundle>][<context>][<timestamp>][<file>]:[<line>:<column>:<function>]
    <message>

Missing pieces (glyph table, bundle id, context, source location) are
left out. A colour configuration, when present, wraps the whole line.

All sinks write through one process-wide lock so lines from concurrently
running render jobs never interleave.
"""

import logging
import sys
import threading
from typing import Any, Callable, Iterable, Optional, TextIO, Union

from .context import context_matches, context_name
from .formatting import (
    LoggerColorConfiguration, LoggerDescriptionConfiguration,
    describe_level, logger_timestamp,
)
from .levels import LoggerLevel, is_allowed_to_log, parse_level
from .source_location import SourceLocation, source_file

Message = Union[str, Callable[[], Any]]

_OUTPUT_LOCK = threading.Lock()


def resolve_message(message: Message) -> str:
    """Evaluate a lazy message (zero-argument callable) or stringify it."""
    if callable(message):
        message = message()
    return message if isinstance(message, str) else str(message)


class LoggerService:
    """Base sink: level gate, context filter, rendering and emission.

    Subclasses normally override emit() only.

    Attributes:
        name: Key of this sink inside a dispatcher
        is_enabled: Whether a dispatcher should hand it work
        min_logger_level: Level floor (DISABLE = emit nothing)
        bundle_identifier: Optional application tag for each line
        log_contexts: Contexts this sink cares about (empty = all)
        color_configuration: Optional per-level line wrapper
        description_configuration: Optional per-level glyph table
    """

    def __init__(
        self,
        name: str,
        enable: bool = False,
        min_logger_level: LoggerLevel = LoggerLevel.DISABLE,
        bundle_identifier: Optional[str] = None,
        log_contexts: Iterable[Any] = (),
        color_configuration: Optional[LoggerColorConfiguration] = None,
        description_configuration: Optional[LoggerDescriptionConfiguration] = LoggerDescriptionConfiguration.DEFAULT,
        file: Optional[TextIO] = None,
    ):
        self.name = name
        self.is_enabled = enable
        self.min_logger_level = parse_level(min_logger_level)
        self.bundle_identifier = bundle_identifier
        self.log_contexts = set(log_contexts)
        self.color_configuration = color_configuration
        self.description_configuration = description_configuration
        self._file = file

    def __repr__(self):
        return (f"{type(self).__name__}(name={self.name!r}, "
                f"is_enabled={self.is_enabled}, "
                f"min_logger_level={self.min_logger_level.name})")

    @property
    def file(self) -> TextIO:
        """Output stream; stdout unless one was injected."""
        return self._file if self._file is not None else sys.stdout

    # -- Gates ---------------------------------------------------------------

    def is_allowed_to_log(self, level: LoggerLevel) -> bool:
        return is_allowed_to_log(level, self.min_logger_level)

    def should_log(self, context: Optional[Any]) -> bool:
        return context_matches(self.log_contexts, context)

    # -- Render and emit -----------------------------------------------------

    def render(self, message: Message, level: LoggerLevel,
               context: Optional[Any] = None,
               source_location: Optional[SourceLocation] = None,
               timestamp: Optional[str] = None) -> str:
        """Build the full text for one log call."""
        head = ''
        glyph = describe_level(level, self.description_configuration)
        if glyph:
            head += f"{glyph} "
        head += f"[{self.name}]"
        if self.bundle_identifier:
            head += f"[{self.bundle_identifier}]"
        name = context_name(context)
        if name:
            head += f"[{name}]"
        head += f"[{timestamp or logger_timestamp()}]"
        if source_location is not None:
            head += (f"[{source_file(source_location.file)}]:"
                     f"[{source_location.line}:{source_location.column}:"
                     f"{source_location.function}]")
        text = f"{head}\n{resolve_message(message)}"
        if self.color_configuration is not None:
            text = self.color_configuration.color(level, text)
        return text

    def log(self, message: Message, level: LoggerLevel,
            context: Optional[Any] = None,
            source_location: Optional[SourceLocation] = None) -> None:
        """Render and emit one message if level and context allow it."""
        if not self.is_allowed_to_log(level):
            return
        if not self.should_log(context):
            return
        self.emit(self.render(message, level, context, source_location), level)

    def emit(self, text: str, level: Optional[LoggerLevel] = None) -> None:
        """Write one rendered entry to the output stream."""
        with _OUTPUT_LOCK:
            print(text, file=self.file, flush=True)

    def debug(self, error: BaseException) -> None:
        """Write the long description of a Debuggable error (str() otherwise)."""
        text = getattr(error, 'debug_description', None) or str(error)
        self.emit(text, LoggerLevel.ERROR)


class ConsoleLoggerService(LoggerService):
    """Sink writing to standard output."""


# Python logging levels per LoggerLevel
_LOGGING_LEVELS = {
    LoggerLevel.DISABLE: logging.NOTSET,
    LoggerLevel.DEBUG: logging.DEBUG,
    LoggerLevel.VERBOSE: logging.DEBUG,
    LoggerLevel.INFO: logging.INFO,
    LoggerLevel.WARNING: logging.WARNING,
    LoggerLevel.ERROR: logging.ERROR,
    LoggerLevel.FATAL_ERROR: logging.CRITICAL,
}


class LoggingLoggerService(LoggerService):
    """Sink forwarding rendered lines to a stdlib ``logging`` logger.

    The logger defaults to one named after the sink, so handlers and
    formatters configured by the host application apply as usual.
    """

    def __init__(self, name: str, logger: Optional[logging.Logger] = None, **kwargs):
        kwargs.setdefault('description_configuration', None)
        super().__init__(name, **kwargs)
        self.logger = logger if logger is not None else logging.getLogger(name)

    def emit(self, text: str, level: Optional[LoggerLevel] = None) -> None:
        py_level = _LOGGING_LEVELS.get(level, logging.INFO) if level is not None else logging.INFO
        self.logger.log(py_level or logging.INFO, text)
