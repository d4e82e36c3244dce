# 📄 File: authhub/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up a smart logging system that records what happens in the service in a structured way,
# making it easy to follow a single signup or login through every step it triggers.

# 🧪 Purpose (Technical Summary):
# Implements structured logging with JSON formatting (python-json-logger), contextual request and
# correlation identifiers carried in context variables, and a thin StructuredLogger wrapper
# that turns keyword arguments into structured extra fields.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: authhub.main (setup), every operation (emit_success / emit_error records),
# the domain event bus (handler failures), repositories and adapters

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter as BaseJsonFormatter

from authhub.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
correlation_id_var: ContextVar[str] = ContextVar('correlation_id', default='')

SERVICE_NAME = 'authhub-api'

# Global logging configuration
_logging_configured = False
_loggers_cache: Dict[str, "StructuredLogger"] = {}

_PASSTHROUGH_KWARGS = ('exc_info', 'stack_info', 'stacklevel')


class ContextualFormatter(logging.Formatter):
    """
    Formatter that adds contextual information to log records.

    Adds request ID, correlation ID, hostname and the structured extra
    fields to every log message for better traceability.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'
        self.service_name = SERVICE_NAME

    def format(self, record):
        record.request_id = request_id_var.get('')
        record.correlation_id = correlation_id_var.get('')
        record.hostname = self.hostname
        record.service = self.service_name
        record.timestamp = datetime.now(timezone.utc).isoformat()

        message = super().format(record)
        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            rendered = " ".join(f"{key}={value!r}" for key, value in extra_fields.items())
            message = f"{message} | {rendered}"
        return message


class JSONFormatter(BaseJsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record with a consistent envelope so
    log aggregation can group every record of one correlation chain.
    """

    def __init__(self):
        super().__init__(
            '%(levelname)s %(name)s %(message)s',
            rename_fields={'levelname': 'level', 'name': 'logger'},
            json_default=str,
            json_ensure_ascii=False,
        )
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        extra_fields = log_record.pop('extra_fields', None)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['service'] = SERVICE_NAME
        log_record['hostname'] = self.hostname
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        if request_id_var.get():
            log_record['request_id'] = request_id_var.get()
        if correlation_id_var.get():
            log_record['correlation_id'] = correlation_id_var.get()
        if extra_fields:
            log_record['extra'] = extra_fields


class StructuredLogger:
    """
    Logger wrapper with structured logging capabilities.

    Keyword arguments passed to any log method are collected into an
    ``extra_fields`` mapping on the record, which both formatters render.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)

    def debug(self, message: str, extra: Dict = None, **kwargs):
        """Log debug message with extra fields."""
        self._log(logging.DEBUG, message, extra, **kwargs)

    def info(self, message: str, extra: Dict = None, **kwargs):
        """Log info message with extra fields."""
        self._log(logging.INFO, message, extra, **kwargs)

    def warning(self, message: str, extra: Dict = None, **kwargs):
        """Log warning message with extra fields."""
        self._log(logging.WARNING, message, extra, **kwargs)

    def error(self, message: str, extra: Dict = None, exc_info: bool = False, **kwargs):
        """Log error message with extra fields."""
        self._log(logging.ERROR, message, extra, exc_info=exc_info, **kwargs)

    def exception(self, message: str, extra: Dict = None, **kwargs):
        """Log error message with the active exception attached."""
        self._log(logging.ERROR, message, extra, exc_info=True, **kwargs)

    def _log(self, level: int, message: str, extra: Dict = None, **kwargs):
        """Internal log method with extra fields handling."""
        extra_fields = dict(extra or {})

        for key, value in kwargs.items():
            if key not in _PASSTHROUGH_KWARGS:
                extra_fields[key] = value

        clean_kwargs = {k: v for k, v in kwargs.items() if k in _PASSTHROUGH_KWARGS}
        # keep the caller's frame as the record origin
        clean_kwargs.setdefault('stacklevel', 3)

        if extra_fields:
            clean_kwargs['extra'] = {'extra_fields': extra_fields}

        self.logger.log(level, message, **clean_kwargs)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_console: bool = True,
    force: bool = False,
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Level name; defaults to ``Settings.LOG_LEVEL``
        log_format: ``json`` or ``text``; defaults to ``Settings.LOG_FORMAT``
        enable_console: Attach a stdout handler
        force: Reconfigure even if logging was already set up

    Returns:
        logging.Logger: The ``startup`` logger
    """
    global _logging_configured

    if _logging_configured and not force:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter = JSONFormatter()
    else:
        formatter = ContextualFormatter('%(timestamp)s - %(name)s - %(levelname)s - %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('passlib').setLevel(logging.ERROR)
    logging.getLogger('aiosqlite').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = StructuredLogger(name)
    _loggers_cache[name] = logger

    return logger


@contextmanager
def log_context(request_id: str = None, correlation_id: str = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier, generated when omitted
        correlation_id: Correlation identifier of the event chain
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    correlation_token = correlation_id_var.set(correlation_id or '')

    try:
        yield {
            'request_id': request_id,
            'correlation_id': correlation_id,
        }
    finally:
        request_id_var.reset(request_token)
        correlation_id_var.reset(correlation_token)


def get_request_id() -> Optional[str]:
    """Request id of the current context, if one is set."""
    return request_id_var.get() or None
