"""
LoggerServiceDefault - fan-out dispatcher over registered sinks.

Two gates apply to every call:

    1. the dispatcher's own floor (min_logger_level) and, for calls that
       carry a context, the dispatcher's own context filter
    2. per sink: is_enabled, the sink's floor and the sink's context filter

For each sink passing both gates one unit of work is submitted to the
injected queue. log() returns once work is submitted, not executed.

Messages may be strings or zero-argument callables. A callable is only
evaluated inside submitted work, and at most once per call, so expensive
formatting is skipped entirely when every gate rejects the call.

Sinks are held by reference: enable() flips the flag on the registered
object itself, so the change is visible through ``services`` and to any
other holder of the sink.
"""

import threading
from typing import Any, List, Optional, Union

from .levels import LoggerLevel
from .logger_queue import LoggerQueue, QoS, WorkFlags, WorkGroup, default_queue
from .service import LoggerService, Message, resolve_message
from .source_location import SourceLocation


class _LazyMessage:
    """Evaluates a message once, on first call, from whichever thread asks."""

    def __init__(self, message: Message):
        self._message = message
        self._text: Optional[str] = None
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            if self._text is None:
                self._text = resolve_message(self._message)
            return self._text


class LoggerServiceDefault(LoggerService):
    """Dispatcher owning an ordered list of sinks.

    Usage::

        logger = LoggerServiceDefault('app', enable=True,
                                      min_logger_level=LoggerLevel.FATAL_ERROR)
        logger.add(ConsoleLoggerService('console', enable=True,
                                        min_logger_level=LoggerLevel.WARNING))
        logger.log_warning("disk almost full")
        logger.log(lambda: expensive_dump(), LoggerLevel.DEBUG)
    """

    def __init__(
        self,
        name: str,
        enable: bool = False,
        min_logger_level: LoggerLevel = LoggerLevel.DISABLE,
        queue: Optional[LoggerQueue] = None,
        bundle_identifier: Optional[str] = None,
        group: Optional[WorkGroup] = None,
        **kwargs: Any,
    ):
        super().__init__(name, enable=enable, min_logger_level=min_logger_level,
                         bundle_identifier=bundle_identifier, **kwargs)
        self.queue = queue if queue is not None else default_queue()
        self.group = group
        self._services: List[LoggerService] = []
        self._lock = threading.RLock()

    # -- Registration --------------------------------------------------------

    @property
    def services(self) -> List[LoggerService]:
        """Registered sinks in insertion order (a copy of the list)."""
        with self._lock:
            return list(self._services)

    def add(self, service: LoggerService) -> None:
        """Append a sink. Duplicate names are allowed.

        A sink without a colour or glyph table of its own takes the
        dispatcher's, so tables passed to the factory reach the output.
        """
        with self._lock:
            if service.color_configuration is None:
                service.color_configuration = self.color_configuration
            if service.description_configuration is None:
                service.description_configuration = self.description_configuration
            self._services.append(service)

    def remove(self, service: Union[LoggerService, str]) -> None:
        """Remove every sink whose name matches. No-op when none match."""
        name = service if isinstance(service, str) else service.name
        with self._lock:
            self._services = [s for s in self._services if s.name != name]

    def enable(self, value: bool, name: str) -> None:
        """Set is_enabled on the last sink named `name`. No-op when none match."""
        with self._lock:
            matches = [s for s in self._services if s.name == name]
            if matches:
                matches[-1].is_enabled = value

    # -- Dispatch ------------------------------------------------------------

    def log(self, message: Message, level: LoggerLevel,
            context: Optional[Any] = None,
            source_location: Optional[SourceLocation] = None,
            *, stacklevel: int = 1) -> None:
        """Fan a message out to every eligible sink through the queue.

        Args:
            message: Text, or a zero-argument callable producing it
            level: Emission level (DISABLE never passes)
            context: Optional context; applies the context filters
            source_location: Location to report; captured from the
                caller when omitted
            stacklevel: Frames above log() to attribute the call to
        """
        if not self.is_allowed_to_log(level):
            return
        if context is not None and not self.should_log(context):
            return

        with self._lock:
            targets = [
                s for s in self._services
                if s.is_enabled and s.is_allowed_to_log(level) and s.should_log(context)
            ]
        if not targets:
            return

        if source_location is None:
            source_location = SourceLocation.capture(depth=stacklevel)
        lazy = _LazyMessage(message)

        for service in targets:
            self.queue.async_(
                self._make_work(service, lazy, level, context, source_location),
                group=self.group,
                qos=QoS.DEFAULT,
                flags=WorkFlags.DETACHED,
            )

    @staticmethod
    def _make_work(service, message, level, context, source_location):
        def work():
            service.log(message, level, context, source_location)
        return work

    def debug(self, error: BaseException) -> None:
        """Log the long description of a Debuggable error at ERROR level."""
        self.log(lambda: getattr(error, 'debug_description', None) or str(error),
                 LoggerLevel.ERROR, stacklevel=2)

    # -- Shorthands ----------------------------------------------------------

    def log_error(self, message: Message, context: Optional[Any] = None) -> None:
        self.log(message, LoggerLevel.ERROR, context, stacklevel=2)

    def log_info(self, message: Message, context: Optional[Any] = None) -> None:
        self.log(message, LoggerLevel.INFO, context, stacklevel=2)

    def log_debug(self, message: Message, context: Optional[Any] = None) -> None:
        self.log(message, LoggerLevel.DEBUG, context, stacklevel=2)

    def log_verbose(self, message: Message, context: Optional[Any] = None) -> None:
        self.log(message, LoggerLevel.VERBOSE, context, stacklevel=2)

    def log_warning(self, message: Message, context: Optional[Any] = None) -> None:
        self.log(message, LoggerLevel.WARNING, context, stacklevel=2)

    def log_fatal_error(self, message: Message, context: Optional[Any] = None) -> None:
        self.log(message, LoggerLevel.FATAL_ERROR, context, stacklevel=2)
