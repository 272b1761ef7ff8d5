import os
import traceback
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        return list(LogLevel).index(self)


class Slogger:
    """
    Append-only file logger shared by the app and its services.

    Lines look like ``2024-05-01 12:00:00 - INFO - message | key=value``.
    The terminal belongs to the TUI, so nothing is ever printed.
    """

    log_path = "logs/character_browser.log"
    min_level = LogLevel.INFO

    @classmethod
    def configure(cls, log_path: Optional[str] = None, level: Optional[str] = None) -> None:
        """Apply the ``logging`` config section."""
        if log_path:
            cls.log_path = log_path
        if level:
            cls.min_level = LogLevel[level.upper()]

    @classmethod
    def enabled_for(cls, level: LogLevel) -> bool:
        return level.rank >= cls.min_level.rank

    @classmethod
    def _write(cls, line: str) -> None:
        log_dir = os.path.dirname(cls.log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(cls.log_path, "a", encoding="utf-8") as f:
            f.write(line)

    @classmethod
    def log(cls, message: str, level: LogLevel = LogLevel.INFO, context: Optional[Dict[str, Any]] = None):
        """
        Log a message with an optional level and context.

        Args:
            message: The message to log
            level: The log level; anything below ``min_level`` is dropped
            context: Optional key/value pairs appended to the line
        """
        if not cls.enabled_for(level):
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} - {level.value} - {message}"
        if context:
            line += " | " + " | ".join(f"{k}={v}" for k, v in context.items())

        cls._write(line + "\n")

    @classmethod
    def debug(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.DEBUG, context)

    @classmethod
    def info(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.INFO, context)

    @classmethod
    def warning(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.WARNING, context)

    @classmethod
    def error(cls, message: str, context: Optional[Dict[str, Any]] = None):
        cls.log(message, LogLevel.ERROR, context)

    @classmethod
    def exception(cls, e: BaseException, message: str = "Exception occurred", context: Optional[Dict[str, Any]] = None):
        """
        Log an exception at ERROR level, followed by its traceback.

        The traceback is taken from the exception itself, so this also works
        outside the ``except`` block that caught it (e.g. inside a worker).
        """
        exc_type = type(e).__name__
        error_context = {**(context or {}), "exception_type": exc_type}
        status_code = getattr(e, "status_code", None)
        if status_code is not None:
            error_context["status_code"] = status_code

        cls.error(f"{message}: {exc_type} - {e}", error_context)

        tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cls._write(f"{timestamp} - {LogLevel.ERROR.value} - TRACEBACK:\n{tb}\n")
