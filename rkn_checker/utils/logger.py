"""
Logging configuration module for the RKN checker.

- Colored console output in development (ENV=dev)
- One JSON object per line everywhere else, for log shippers
- Deduplication of root handlers so repeated setup never doubles log lines
- Performance timing decorator for development/QA environments
"""

import logging
import sys
import os
import json
import time
from typing import Optional, Dict, Any, Callable
from functools import wraps
from datetime import datetime, timezone


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for log levels and logger names in development environments."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[1;31m", # Bold Red
    }
    GREY = "\033[90m"  # Grey for logger names
    RESET = "\033[0m"

    def formatTime(self, record, datefmt=None):
        """Override to include milliseconds in the timestamp."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s},{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colored log level and logger name."""
        original_levelname = record.levelname
        original_name = record.name

        log_color = self.COLORS.get(record.levelname, "")
        if log_color:
            record.levelname = f"{log_color}{record.levelname}{self.RESET}"
        record.name = f"{self.GREY}{record.name}{self.RESET}"

        formatted = super().format(record)

        # Restore original values for next handler
        record.levelname = original_levelname
        record.name = original_name

        return formatted


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging in production environments."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, ensure_ascii=False)


def _get_log_level() -> str:
    """
    Get log level from environment variable.

    Returns:
        str: Logging level name (defaults to INFO if not set)
    """
    return os.getenv("LOG_LEVEL", "INFO").upper()


def _get_environment() -> str:
    """
    Get current environment from ENV variable.

    Returns:
        str: Environment name (dev, qa, prod, etc.)
    """
    return os.getenv("ENV", "prod").lower()


def setup_logging() -> None:
    """
    Install a single stdout handler on the root logger.

    Colored text in dev, JSON lines otherwise. Any StreamHandlers already on
    the root logger (e.g. from a previous call or from basicConfig) are
    replaced; FileHandlers are kept untouched. uvicorn's own loggers are
    pointed at the root logger so access/error lines share the format.
    """
    if _get_environment() == "dev":
        formatter: logging.Formatter = ColoredFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = JSONFormatter()

    root_logger = logging.getLogger()
    other_handlers = [
        h for h in root_logger.handlers
        if not isinstance(h, logging.StreamHandler) or isinstance(h, logging.FileHandler)
    ]
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    for h in other_handlers:
        root_logger.addHandler(h)

    level = getattr(logging, _get_log_level(), None)
    root_logger.setLevel(level if isinstance(level, int) else logging.INFO)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(logger_name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the specified name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)


def log_execution_time(func: Optional[Callable] = None, *, level: str = "DEBUG") -> Callable:
    """
    Decorator to log function execution time.

    Only active in dev and qa environments. In production, this decorator
    does nothing to avoid overhead.

    Example:
        >>> @log_execution_time(level="INFO")
        ... def load_dump(path):
        ...     pass
    """
    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if _get_environment() not in ("dev", "qa"):
                return f(*args, **kwargs)

            logger = get_logger(f.__module__)
            start_time = time.perf_counter()
            try:
                return f(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - start_time
                log_method = getattr(logger, level.lower(), logger.debug)
                log_method(f"Function '{f.__name__}' executed in {elapsed:.4f}s")

        return wrapper

    # Allow usage with or without parentheses
    if func is None:
        return decorator
    return decorator(func)
