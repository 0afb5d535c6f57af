"""
Centralized logging configuration for the photowall client.

Structured logging is set up with structlog on top of the standard library
logging module, rendering to the console in development and to JSON lines
everywhere else.
"""

import logging
import os
import sys
from typing import Any

import structlog


class ColoredJSONRenderer:
    """JSON renderer that colours each line by level when attached to a terminal."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }

    def __init__(self, colors: bool = False):
        self.colors = colors
        self.json_renderer = structlog.processors.JSONRenderer()

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
        json_output = str(self.json_renderer(logger, method_name, event_dict))

        if not self.colors:
            return json_output

        level = str(event_dict.get("level", "")).upper()
        color = self.LEVEL_COLORS.get(level, "")
        return f"{color}{json_output}\033[0m"


def get_log_level() -> int:
    """
    Resolve the log level from the LOG_LEVEL environment variable.

    Returns:
        int: Log level constant from the logging module, INFO when unset or unknown
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    level_mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    return level_mapping.get(level_name, logging.INFO)


def is_development_environment() -> bool:
    """Check if running in a development environment."""
    return os.getenv("ENVIRONMENT", "development").lower() in ["development", "dev", "local"]


def configure_structured_logging() -> None:
    """
    Configure structured logging for the whole application.

    Development gets the structlog console renderer (or coloured JSON when
    stderr is a terminal), production gets plain JSON lines.
    """
    log_level = get_log_level()
    is_dev = is_development_environment()
    use_colors = is_dev and sys.stderr.isatty()

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=sys.stderr,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer() if not use_colors else ColoredJSONRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger().setLevel(log_level)

    logger = structlog.get_logger("photowall.logging")
    logger.info(
        "logging_configured",
        log_level=logging.getLevelName(log_level),
        environment="development" if is_dev else "production",
        colors_enabled=use_colors,
    )


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (optional, defaults to the calling module)

    Returns:
        structlog.BoundLogger: Configured logger instance
    """
    if name is None:
        import inspect

        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "unknown")

    return structlog.get_logger(name)


def log_performance(operation: str, duration: float, **context: Any) -> None:
    """
    Log a timing measurement.

    Args:
        operation: Name of the operation
        duration: Duration in seconds
        **context: Additional context information
    """
    logger = get_logger("photowall.performance")
    logger.info("performance_metric", operation=operation, duration_seconds=duration, **context)


def log_error(error: Exception, context: dict[str, Any] | None = None) -> None:
    """
    Log an error with structured context.

    Args:
        error: Exception that occurred
        context: Additional context information
    """
    logger = get_logger("photowall.errors")

    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(context)

    logger.error("error_occurred", **error_context)



class LogContext:
    """Context manager that binds structured context to a logger."""

    def __init__(self, logger: Any, **context: Any):
        self.logger = logger
        self.context = context
        self.bound_logger: Any = None

    def __enter__(self) -> Any:
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is not None and self.bound_logger is not None:
            self.bound_logger.error(
                "context_exception", exception_type=exc_type.__name__, exception_message=str(exc_val)
            )


def log_context(logger: Any = None, **context: Any) -> LogContext:
    """
    Create a logging context manager.

    Args:
        logger: Logger to bind (optional, defaults to a logger for this module)
        **context: Context variables to add to all log messages

    Returns:
        LogContext: Context manager for structured logging
    """
    return LogContext(logger or get_logger(__name__), **context)
