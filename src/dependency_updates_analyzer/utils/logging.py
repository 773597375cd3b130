"""
Simple logging configuration using standard library logging.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """
    Configure basic logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file to write logs to
        verbose: Enable verbose output
        quiet: Only report warnings and errors on the console
    """
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"

    handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel("DEBUG")  # Always log everything to file
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level="DEBUG" if log_file else level,
        handlers=handlers,
        format="%(message)s",
        datefmt="[%X]",
        force=True,
    )

    logger = get_logger(__name__)
    logger.debug(f"Logging configured - level: {level}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger
    """
    return logging.getLogger(name)


def _with_context(message: str, **kwargs) -> str:
    context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
    if context:
        return f"{message} ({context})"
    return message


class LoggerMixin:
    """Mixin class to add logging capabilities to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        logger = self.__dict__.get("_logger")
        if logger is None:
            logger = get_logger(
                self.__class__.__module__ + "." + self.__class__.__name__
            )
            # Frozen dataclasses reject normal attribute assignment
            object.__setattr__(self, "_logger", logger)
        return logger

    def log_operation(self, operation: str, **kwargs) -> None:
        """Log an operation with context."""
        self.logger.info(_with_context(f"Starting {operation}", **kwargs))

    def log_success(self, operation: str, **kwargs) -> None:
        """Log successful operation completion."""
        self.logger.info(_with_context(f"Completed {operation}", **kwargs))

    def log_error(self, operation: str, error: Exception, **kwargs) -> None:
        """Log operation error."""
        self.logger.error(_with_context(f"Failed {operation}: {error}", **kwargs))

    def log_info(self, message: str, **kwargs) -> None:
        """Log an info message with context."""
        self.logger.info(_with_context(message, **kwargs))

    def log_warning(self, message: str, **kwargs) -> None:
        """Log a warning with context."""
        self.logger.warning(_with_context(message, **kwargs))

    def log_debug(self, message: str, **kwargs) -> None:
        """Log a debug message with context."""
        self.logger.debug(_with_context(message, **kwargs))
