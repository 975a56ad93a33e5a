"""Structlog configuration and logger setup.

Provides module loggers for the catalog library and an optional structlog
configuration with environment-aware rendering. Importing the library never
configures logging; applications call configure_logging() themselves.

Usage:
    from langcatalog.logging import configure_logging, get_module_logger

    # Configure logging at application startup (optional)
    configure_logging()

    # Get a logger for your module
    logger = get_module_logger()
    logger.info("event_name", key="value")
"""

import inspect
import logging
import sys
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from langcatalog.configuration import settings


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Args:
        log_level: Optional override for log level (DEBUG, INFO, WARNING, etc).
            Defaults to settings.LOG_LEVEL if not provided.
        is_production: Optional override for production mode. Defaults to
            settings.is_production if not provided. Controls JSON vs console output.

    Returns:
        Configured logger instance
    """
    # Suppress all logging during tests
    if _is_test_environment():
        logging.root.setLevel(logging.CRITICAL + 1)

        # Basic processors avoid errors, the root level keeps logs from being emitted
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    prod_mode = is_production if is_production is not None else settings.is_production

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Pretty printing for development, JSON for production
    if not prod_mode:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    effective_log_level = log_level or settings.LOG_LEVEL
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, effective_log_level.upper(), logging.INFO),
    )

    return structlog.stdlib.get_logger()


# Lazy: resolved against the current structlog configuration on first use
logger: BoundLogger = structlog.stdlib.get_logger()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Automatically detects the calling module and binds component
    and module_path context for structured logging.

    The logger is lazy, so it follows whatever structlog configuration
    is active when it first logs.

    Returns:
        Logger instance with module context

    Example:
        # In langcatalog/i18n/builder.py
        logger = get_module_logger()
        # logger has context: {"component": "builder", "module_path": "langcatalog.i18n.builder"}

        logger.info("language_added", language="fr")
    """
    current_frame = inspect.currentframe()
    if current_frame is None:
        return logger

    frame = current_frame.f_back
    if frame is None:
        return logger

    module = inspect.getmodule(frame)
    if module:
        module_name = module.__name__
        parts = module_name.split(".")
        context = {
            "component": parts[-1],
            "module_path": module_name,
        }
        return structlog.stdlib.get_logger(**context)

    return structlog.stdlib.get_logger(component="unknown")
