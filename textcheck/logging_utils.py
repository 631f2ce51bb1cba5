"""
Text Check Logging
==================
Structured logging for the orchestrator and engines.

Loggers are standard ``logging`` loggers configured from the ``logging``
section of the textcheck configuration, emitting either JSON records or
plain text.
"""

import sys
import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional
import threading

from .config import LoggingConfig, get_config
from .errors import TextCheckError

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                  # Number of log backup files to keep

_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'thread', 'threadName', 'exc_info', 'exc_text',
    'message', 'taskName',
))


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        # Add extra fields
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class StructuredLogger:
    """Logger wrapper that attaches keyword context as record extras."""

    def __init__(self, name: str, config: Optional[LoggingConfig] = None):
        self.name = name
        self.config = config or get_config().logging
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, self.config.level.upper(), logging.WARNING))
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if self.config.format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if self.config.to_file:
            log_dir = Path(self.config.log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_dir / f"{self.name.lower()}.log",
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @staticmethod
    def _extra(kwargs: Dict[str, Any]) -> Dict[str, Any]:
        # LogRecord refuses extras that shadow its own attributes.
        return {k: v for k, v in kwargs.items() if k not in _RESERVED_ATTRS}

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, extra=self._extra(kwargs))

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, extra=self._extra(kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self.logger.error(message, exc_info=exc_info, extra=self._extra(kwargs))

    @contextmanager
    def log_operation(self, operation: str, **context):
        """
        Context manager logging an operation's start and end with timing.

        Expected textcheck errors are logged as warnings, anything else as
        an error with traceback. The exception is always re-raised.
        """
        start_time = time.perf_counter()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
        except TextCheckError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.warning(f"{operation} failed: {e}", operation=operation, status='failed',
                         error_code=e.code, duration_ms=round(duration_ms, 2), **context)
            raise
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), exc_info=True, **context)
            raise
        else:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.debug(f"{operation} completed", operation=operation, status='completed',
                       duration_ms=round(duration_ms, 2), **context)


_loggers: Dict[str, StructuredLogger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str, config: Optional[LoggingConfig] = None) -> StructuredLogger:
    """Get a structured logger instance, configured once per name."""
    with _loggers_lock:
        logger = _loggers.get(name)
        if logger is None or (config is not None and config is not logger.config):
            logger = StructuredLogger(name, config)
            _loggers[name] = logger
        return logger


def reset_loggers():
    """Forget cached loggers so the next get_logger call re-reads config."""
    with _loggers_lock:
        _loggers.clear()
