"""Construction of dispatchers with injected dependencies."""

from typing import Optional

from .bundle import bundle_identifier as _host_bundle_identifier
from .dispatcher import LoggerServiceDefault
from .formatting import LoggerColorConfiguration, LoggerDescriptionConfiguration
from .levels import LoggerLevel
from .logger_queue import LoggerQueue

_UNSET = object()


class LoggerServiceFactory:
    """Builds LoggerServiceDefault instances. No side effects beyond construction."""

    @staticmethod
    def build(
        name: str,
        enable: bool = False,
        min_logger_level: LoggerLevel = LoggerLevel.DISABLE,
        queue: Optional[LoggerQueue] = None,
        bundle_identifier=_UNSET,
        color_configuration: Optional[LoggerColorConfiguration] = None,
        description_configuration: Optional[LoggerDescriptionConfiguration] = LoggerDescriptionConfiguration.DEFAULT,
    ) -> LoggerServiceDefault:
        """Build a dispatcher.

        Args:
            name: Dispatcher name
            enable: Initial enable flag
            min_logger_level: Dispatcher floor (DISABLE = emit nothing)
            queue: Execution queue; None uses the shared thread pool queue
            bundle_identifier: Application tag; defaults to the host
                application's identifier, pass None to omit it
            color_configuration: Optional colour wrapper
            description_configuration: Optional glyph table

        Returns:
            A new LoggerServiceDefault with no sinks registered.
        """
        if bundle_identifier is _UNSET:
            bundle_identifier = _host_bundle_identifier()
        return LoggerServiceDefault(
            name,
            enable=enable,
            min_logger_level=min_logger_level,
            queue=queue,
            bundle_identifier=bundle_identifier,
            color_configuration=color_configuration,
            description_configuration=description_configuration,
        )


build_logger_service = LoggerServiceFactory.build
