"""
debuggable - debuggable errors and a fan-out logging dispatcher.

Public API:
    LoggerLevel            - ordered severity ranks
    LoggerContext          - named log scope
    SourceLocation         - call-site location
    LoggerService          - base sink (render and emit)
    ConsoleLoggerService   - stdout sink
    LoggingLoggerService   - sink forwarding to stdlib logging
    LoggerServiceDefault   - dispatcher over registered sinks
    LoggerServiceFactory   - dispatcher construction
    ImmediateLoggerQueue   - run log work on the caller thread
    ThreadPoolLoggerQueue  - run log work on a thread pool
    Debuggable             - exception mixin with causes, fixes and links
    init_logger / get_logger - module-level dispatcher singleton
    trace                  - function tracing decorator
"""

from debuggable._version import __version__, __app_name__
from debuggable.levels import LoggerLevel, is_allowed_to_log, parse_level
from debuggable.context import LoggerContext, EMPTY_CONTEXT, context_matches
from debuggable.source_location import SourceLocation
from debuggable.logger_queue import (
    QoS, WorkFlags, WorkGroup, LoggerQueue,
    ImmediateLoggerQueue, ThreadPoolLoggerQueue, default_queue,
)
from debuggable.formatting import (
    LoggerColorConfiguration, LoggerDescriptionConfiguration, logger_timestamp,
)
from debuggable.errors import Debuggable, HelpFormat
from debuggable.service import (
    LoggerService, ConsoleLoggerService, LoggingLoggerService,
)
from debuggable.dispatcher import LoggerServiceDefault
from debuggable.factory import LoggerServiceFactory, build_logger_service
from debuggable.manager import init_logger, get_logger, set_logger, reset_logger
from debuggable.trace import trace

__all__ = [
    '__version__', '__app_name__',
    'LoggerLevel', 'is_allowed_to_log', 'parse_level',
    'LoggerContext', 'EMPTY_CONTEXT', 'context_matches',
    'SourceLocation',
    'QoS', 'WorkFlags', 'WorkGroup', 'LoggerQueue',
    'ImmediateLoggerQueue', 'ThreadPoolLoggerQueue', 'default_queue',
    'LoggerColorConfiguration', 'LoggerDescriptionConfiguration', 'logger_timestamp',
    'Debuggable', 'HelpFormat',
    'LoggerService', 'ConsoleLoggerService', 'LoggingLoggerService',
    'LoggerServiceDefault',
    'LoggerServiceFactory', 'build_logger_service',
    'init_logger', 'get_logger', 'set_logger', 'reset_logger',
    'trace',
]
