"""
Structured Logging System for Numeric Entry.
Provides console and rotating file logging with structured fields,
session tracking and input/validation categories.
"""
import logging
import logging.handlers
import time
import json
import traceback
from pathlib import Path
from typing import Optional, Dict, Any, Union
from enum import Enum, auto
from contextlib import contextmanager
from datetime import datetime
import uuid


class LogLevel(Enum):
    """Log levels including a TRACE level below DEBUG."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogCategory(Enum):
    """Categories for numeric entry logging."""
    SYSTEM = auto()
    USER_ACTION = auto()
    INPUT_FILTER = auto()
    VALIDATION = auto()
    CONFIGURATION = auto()


class StructuredFormatter(logging.Formatter):
    """Formatter that appends structured fields as JSON."""

    def __init__(self, include_json=True):
        super().__init__()
        self.include_json = include_json

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        basic_line = f"[{timestamp}] {record.levelname:8} {record.name}: {record.getMessage()}"
        if not self.include_json:
            return basic_line
        structured_data = {}
        for key, value in record.__dict__.items():
            if key.startswith('field_') or key in ['category', 'session_id']:
                structured_data[key] = value
        if record.exc_info:
            structured_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }
        structured_data['location'] = {
            'filename': record.filename,
            'line': record.lineno,
            'function': record.funcName
        }
        json_data = json.dumps(structured_data, default=str, ensure_ascii=False)
        return f"{basic_line} | {json_data}"


class NumericEntryLogger:
    """Project logger with structured fields and per-session ids."""

    def __init__(self, name: str = "numeric_entry", log_dir: Optional[Path] = None):
        self.name = name
        self.session_id = str(uuid.uuid4())[:8]
        if log_dir is None:
            log_dir = Path.home() / "NumericEntry" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._setup_loggers()
        self.debug("Logging system initialized",
                   category=LogCategory.SYSTEM,
                   session_id=self.session_id,
                   log_dir=str(self.log_dir))

    def _setup_loggers(self):
        """Setup main logger and handlers."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(LogLevel.TRACE.value)
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()
        # Console
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(StructuredFormatter(include_json=False))
        self.logger.addHandler(console_handler)
        self.console_handler = console_handler
        # Main file with rotation
        file_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.name}.log", maxBytes=10*1024*1024, backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter(include_json=True))
        self.logger.addHandler(file_handler)
        # Errors only
        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / f"{self.name}_errors.log", maxBytes=5*1024*1024, backupCount=5,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(StructuredFormatter(include_json=True))
        self.logger.addHandler(error_handler)

    def _log(self, level: int, message: str, category: Union[LogCategory, str, None] = None,
             exception: Optional[Exception] = None, **kwargs):
        """Internal logging method adding session and structured fields."""
        if isinstance(category, LogCategory):
            category_name = category.name
        elif category:
            category_name = str(category).upper()
        else:
            category_name = 'GENERAL'
        extra = {
            'session_id': self.session_id,
            'category': category_name
        }
        for key, value in kwargs.items():
            if not key.startswith('_'):
                extra[f'field_{key}'] = value
        if exception:
            self.logger.log(level, message, exc_info=(type(exception), exception, exception.__traceback__),
                            extra=extra, stacklevel=3)
        else:
            self.logger.log(level, message, extra=extra, stacklevel=3)

    def trace(self, message: str, category: Union[LogCategory, str, None] = None, **kwargs):
        """Log trace message (per-keystroke detail)."""
        self._log(LogLevel.TRACE.value, message, category, **kwargs)

    def debug(self, message: str, category: Union[LogCategory, str, None] = None, **kwargs):
        """Log debug message."""
        self._log(LogLevel.DEBUG.value, message, category, **kwargs)

    def info(self, message: str, category: Union[LogCategory, str, None] = None, **kwargs):
        """Log info message."""
        self._log(LogLevel.INFO.value, message, category, **kwargs)

    def warning(self, message: str, category: Union[LogCategory, str, None] = None, **kwargs):
        """Log warning message."""
        self._log(LogLevel.WARNING.value, message, category, **kwargs)

    def error(self, message: str, exception: Optional[Exception] = None,
              category: Union[LogCategory, str, None] = None, **kwargs):
        """Log error message."""
        self._log(LogLevel.ERROR.value, message, category, exception, **kwargs)

    def critical(self, message: str, exception: Optional[Exception] = None,
                 category: Union[LogCategory, str, None] = None, **kwargs):
        """Log critical message."""
        self._log(LogLevel.CRITICAL.value, message, category, exception, **kwargs)

    def log_user_action(self, action: str, details: Optional[Dict[str, Any]] = None):
        """Log user actions such as rejected keystrokes or pastes."""
        log_data = {
            'action': action,
            'timestamp': time.time()
        }
        if details:
            log_data.update(details)
        self._log(LogLevel.DEBUG.value, f"USER ACTION: {action}",
                  LogCategory.USER_ACTION, **log_data)

    @contextmanager
    def timer(self, operation: str, log_result: bool = True):
        """Context manager for timing operations."""
        start_time = time.time()
        operation_id = str(uuid.uuid4())[:8]
        self.debug(f"Starting operation: {operation}",
                   category=LogCategory.SYSTEM, operation_id=operation_id)
        try:
            yield operation_id
        finally:
            duration = time.time() - start_time
            if log_result:
                self.info(f"Completed operation: {operation} in {duration:.3f}s",
                          category=LogCategory.SYSTEM, operation_id=operation_id,
                          duration=duration)

    def get_session_id(self) -> str:
        """Get the current session ID."""
        return self.session_id

    def set_log_level(self, level: Union[str, int, LogLevel]):
        """Set the logging level."""
        if isinstance(level, LogLevel):
            level = level.value
        elif isinstance(level, str):
            level = LogLevel[level.upper()].value
        self.logger.setLevel(level)
        self.info(f"Log level set to: {logging.getLevelName(level)}")

    def set_console_level(self, level: Union[str, int, LogLevel]):
        """Set the level of the console handler only."""
        if isinstance(level, LogLevel):
            level = level.value
        elif isinstance(level, str):
            level = LogLevel[level.upper()].value
        self.console_handler.setLevel(level)

    def close(self):
        """Flush and close every handler."""
        for handler in list(self.logger.handlers):
            handler.flush()
            handler.close()
        self.logger.handlers.clear()


logging.addLevelName(LogLevel.TRACE.value, "TRACE")

# Global logger instance
_global_logger: Optional[NumericEntryLogger] = None


def get_logger() -> NumericEntryLogger:
    """Get the global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = NumericEntryLogger()
    return _global_logger


def setup_logger(name: str = "numeric_entry", log_dir: Optional[Path] = None) -> NumericEntryLogger:
    """Set up and return the global logger."""
    global _global_logger
    if _global_logger is not None:
        _global_logger.close()
    _global_logger = NumericEntryLogger(name, log_dir)
    return _global_logger


def timer(operation: str, log_result: bool = True):
    """Timer context manager using global logger."""
    return get_logger().timer(operation, log_result)


class LoggableMixin:
    """Mixin class to add logging capabilities to other classes."""

    def __init__(self):
        self._module_name = self.__class__.__name__

    @property
    def _logger(self) -> NumericEntryLogger:
        return get_logger()

    def log_trace(self, message: str, **kwargs):
        """Log trace message."""
        self._logger.trace(f"[{self._module_name}] {message}", **kwargs)

    def log_debug(self, message: str, **kwargs):
        """Log debug message."""
        self._logger.debug(f"[{self._module_name}] {message}", **kwargs)

    def log_info(self, message: str, **kwargs):
        """Log info message."""
        self._logger.info(f"[{self._module_name}] {message}", **kwargs)

    def log_warning(self, message: str, **kwargs):
        """Log warning message."""
        self._logger.warning(f"[{self._module_name}] {message}", **kwargs)

    def log_error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message."""
        self._logger.error(f"[{self._module_name}] {message}", exception=exception, **kwargs)

    def log_user_action(self, action: str, details: Optional[Dict[str, Any]] = None):
        """Log user action."""
        action_details = {'module': self._module_name}
        if details:
            action_details.update(details)
        self._logger.log_user_action(action, action_details)
