"""
Centralized logging configuration for the Document Service.

Structured logging on top of the standard library ``logging`` module:
- every entry carries service, environment and the current trace ID
- console (colored) or JSON output, optional JSON log file
- ``metadata`` dict for event-specific fields
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from app.core.config import config
from app.middleware.trace_context import get_trace_id


class StructuredLogger:
    """
    Logger with structured entries and trace correlation.
    """

    def __init__(self, name: str = None):
        self.service_name = config.service_name
        self.environment = config.environment
        self.log_format = config.log_format.lower()
        self._logger = logging.getLogger(name or config.service_name)
        self._setup_logging()

    def _setup_logging(self):
        """Configure handlers for the service logger"""
        level = getattr(logging, config.log_level.upper(), logging.INFO)
        self._logger.handlers.clear()
        self._logger.setLevel(level)
        self._logger.propagate = True

        if config.log_to_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            if self.log_format == "json":
                console_handler.setFormatter(JSONFormatter())
            else:
                console_handler.setFormatter(ConsoleFormatter())
            self._logger.addHandler(console_handler)

        if config.log_to_file:
            log_dir = os.path.dirname(config.log_file_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(config.log_file_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())  # Always JSON for files
            self._logger.addHandler(file_handler)

    def _build_log_entry(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Build structured log entry"""
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "service": self.service_name,
            "environment": self.environment,
            "message": message,
            "correlationId": correlation_id or get_trace_id(),
        }
        if user_id:
            entry["userId"] = user_id
        if metadata:
            entry["metadata"] = metadata
        return entry

    def _log(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ):
        entry = self._build_log_entry(level, message, correlation_id, user_id, metadata)
        levelno = getattr(logging, level)
        if not self._logger.isEnabledFor(levelno):
            return
        # 'message' would clash with the LogRecord attribute
        extra = {k: v for k, v in entry.items() if k != "message"}
        self._logger.log(levelno, message, extra=extra, exc_info=exc_info)

    def debug(self, message: str, correlation_id: Optional[str] = None,
              user_id: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        """Debug level logging"""
        self._log("DEBUG", message, correlation_id, user_id, metadata)

    def info(self, message: str, correlation_id: Optional[str] = None,
             user_id: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        """Info level logging"""
        self._log("INFO", message, correlation_id, user_id, metadata)

    def warning(self, message: str, correlation_id: Optional[str] = None,
                user_id: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        """Warning level logging"""
        self._log("WARNING", message, correlation_id, user_id, metadata)

    def error(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        error: Optional[Union[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ):
        """Error level logging"""
        metadata = dict(metadata or {})
        if error is not None:
            if isinstance(error, Exception):
                metadata["error"] = {"type": type(error).__name__, "message": str(error)}
            else:
                metadata["error"] = {"message": str(error)}
        self._log("ERROR", message, correlation_id, user_id, metadata, exc_info=exc_info)


_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "exc_info",
    "exc_text", "stack_info", "taskName",
}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": config.service_name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for development"""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        line = f"{color}[{timestamp}] {record.levelname}{reset} - {record.getMessage()}"
        metadata = getattr(record, "metadata", None)
        if metadata:
            line += f" {json.dumps(metadata, default=str)}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# Create and export the logger instance
logger = StructuredLogger()
