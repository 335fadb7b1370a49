"""
Logging for keyhunt

Modules log structured events through structlog; the events are handed over to
stdlib ``logging`` and rendered by structlog's ``ProcessorFormatter`` so
handlers, levels and renderers are configured in one place by
``setup_logging``. Logs always go to stderr (stdout carries results).
"""

import logging
import logging.handlers
import sys
from typing import Optional, TextIO
import structlog
from keyhunt.config.settings import settings

ROOT_LOGGER_NAME = "keyhunt"

# Human readable text for each event key
LOG_MESSAGES = {
    'logging_configured': 'Logging configured',
    'catalog_loaded': 'Translation catalog loaded',
    'catalog_file_loaded': 'Translation file loaded',
    'catalog_file_cleaned': 'Unused keys removed from translation file',
    'source_dir_missing': 'Source directory does not exist, skipping',
    'walk_error': 'Directory could not be traversed',
    'files_discovered': 'Source files discovered',
    'matcher_skipped': 'Pattern failed to compile, matcher dropped',
    'matchers_compiled': 'Matchers compiled',
    'file_skipped': 'Source file could not be read, skipping',
    'prefix_complete': 'All keys of prefix found',
    'prefix_dynamic': 'Dynamic usage of prefix found',
    'scan_started': 'Scan started',
    'scan_finished': 'Scan finished',
    'hunt_finished': 'Hunt finished',
    'log_file_unavailable': 'Log file could not be opened, using stderr only',
}

# Shared by structlog events and plain stdlib records
_SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """One JSON object per line"""
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(ensure_ascii=False, default=str),
        ],
        foreign_pre_chain=_SHARED_PROCESSORS,
    )


def console_formatter() -> structlog.stdlib.ProcessorFormatter:
    """``timestamp [level] message [logger] key=value ...`` for humans reading stderr"""
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ],
        foreign_pre_chain=_SHARED_PROCESSORS,
    )


def configure_structlog():
    """Route structlog events into stdlib logging"""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class HuntLogger:
    """Event-key logger: ``logger.info('scan_started', files=10)``"""

    def __init__(self, name: str = ROOT_LOGGER_NAME):
        self.name = name
        self._logger = structlog.get_logger(name)

    def log(self, level: str, message_key: str, /, **kwargs) -> None:
        """
        Log an event

        Args:
            level: DEBUG, INFO, WARNING, ERROR or CRITICAL
            message_key: Event key, looked up in LOG_MESSAGES
            **kwargs: Structured fields attached to the event; any name is
                allowed since both arguments above are positional-only
        """
        message = LOG_MESSAGES.get(message_key, message_key)
        getattr(self._logger, level.lower())(message, event_key=message_key, **kwargs)

    def debug(self, message_key: str, /, **kwargs):
        self.log('DEBUG', message_key, **kwargs)

    def info(self, message_key: str, /, **kwargs):
        self.log('INFO', message_key, **kwargs)

    def warning(self, message_key: str, /, **kwargs):
        self.log('WARNING', message_key, **kwargs)

    def error(self, message_key: str, /, **kwargs):
        self.log('ERROR', message_key, **kwargs)

    def critical(self, message_key: str, /, **kwargs):
        self.log('CRITICAL', message_key, **kwargs)


configure_structlog()

# Package-wide logger
logger = HuntLogger()


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None,
                  json_output: Optional[bool] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure handlers on the ``keyhunt`` logger

    Calling it again replaces the handlers installed by the previous call.
    Arguments left as None fall back to settings.
    """
    level = (level or settings.log_level).upper()
    log_file = settings.log_file if log_file is None else log_file
    json_output = settings.log_json if json_output is None else json_output

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, level, logging.WARNING))

    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setFormatter(json_formatter() if json_output else console_formatter())
    root.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=settings.log_max_size,
                backupCount=settings.log_backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(json_formatter())
            root.addHandler(file_handler)
        except OSError as e:
            logger.warning('log_file_unavailable', log_file=log_file, error=str(e))

    logger.debug('logging_configured', log_level=level, log_file=log_file or None)
    return root


def log_scan_event(event_type: str, level: str = 'INFO', **details):
    """Log a scan lifecycle event"""
    logger.log(level, event_type, **details)


def log_file_event(event_type: str, path: str, error: Optional[str] = None):
    """Log an event about one source file"""
    logger.debug(event_type, path=path, error=error)


def log_catalog_event(event_type: str, path: Optional[str] = None, **details):
    """Log a translation catalog event"""
    logger.info(event_type, path=path, **details)


def get_logger(name: str = ROOT_LOGGER_NAME) -> HuntLogger:
    """Return an event-key logger for a module"""
    return HuntLogger(name)
