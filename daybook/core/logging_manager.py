#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for daybook.

Each component (``database``, ``cli``) gets a JournalLogger writing
``<component>.log`` with rotation; errors also land in a shared
``errors.log``. Warnings are echoed to the console.

Managers and decorators accept an optional logger and go through
``safe_logger()``, so running without a log directory costs nothing.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
)
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JournalLogger:
    """
    Rotating file logger for one daybook component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Suffix of the ``daybook.<component>`` logger name
        main_logger: Everything from DEBUG up, plus WARNING to the console
        error_logger: ERROR records only, shared ``errors.log``
    """

    def __init__(self, log_dir: Path, component_name: str = "daybook") -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._fresh_logger(f"daybook.{component_name}", logging.DEBUG)
        self.main_logger.addHandler(
            self._file_handler(self.log_dir / f"{component_name}.log", logging.DEBUG)
        )
        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

        self.error_logger = self._fresh_logger(
            f"daybook.{component_name}.errors", logging.ERROR
        )
        self.error_logger.addHandler(
            self._file_handler(self.log_dir / "errors.log", logging.ERROR)
        )

    @staticmethod
    def _fresh_logger(name: str, level: int) -> logging.Logger:
        # Loggers are process-global; drop handlers left by an earlier instance
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers = []
        logger.propagate = False
        return logger

    @staticmethod
    def _file_handler(path: Path, level: int) -> RotatingFileHandler:
        handler = RotatingFileHandler(
            path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        return handler

    def _emit(
        self, level: int, label: str, message: str, details: Optional[Dict[str, Any]]
    ) -> None:
        text = f"{label} - {message}"
        if details:
            text += f": {json.dumps(details, default=str)}"
        self.main_logger.log(level, text, stacklevel=3)

    def close(self) -> None:
        """Close and detach every handler owned by this logger."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a completed operation with its details as JSON."""
        self._emit(logging.INFO, "OPERATION", operation, details or {})

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.DEBUG, "DEBUG", message, details)

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._emit(logging.INFO, "INFO", message, details)

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self._emit(logging.WARNING, "WARNING", message, details)

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write an error, its context and the active traceback to errors.log.

        Args:
            error: Exception that occurred
            context: Where it happened (operation name, ids, paths)
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            self.error_logger.error(f"Context: {context_str}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed CLI command and exit.

    The full error goes to the logger stored in ``ctx.obj``; stderr gets a
    one-line summary, followed by the traceback when ``--verbose`` is set.
    Never returns.
    """
    obj = ctx.obj or {}
    context = {"operation": operation}
    if additional_context:
        context.update(additional_context)

    safe_logger(obj.get("logger")).log_error(error, context)

    message = f"Error - {type(error).__name__}: {error}"
    if obj.get("verbose", False):
        message = f"{message}\n\n{traceback.format_exc()}"

    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """No-op stand-in with the JournalLogger interface."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass


_null_logger = NullLogger()


def safe_logger(logger: Optional[JournalLogger]) -> JournalLogger:
    """
    Return the provided logger or the shared null logger if None.

    Use:
        safe_logger(logger).log_info("message")
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
