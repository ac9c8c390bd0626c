#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Structured logging for the publishing engine.

Every component (``database``, ``cli``) writes to its own rotating log
file; errors of all components land in a shared ``errors.log``. Warnings
are echoed to the console. Call sites that may run without a log
directory wrap their logger with ``safe_logger`` and never check for
``None`` themselves.

Usage:
    logger = AntiblogLogger(LOG_DIR, component_name="database")
    logger.log_operation("rotate_completed", {"promoted": 1234567})
    safe_logger(None).log_info("discarded")
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

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _with_details(label: str, message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return f"{label} - {message}"
    return f"{label} - {message}: {json.dumps(details, default=str)}"


class AntiblogLogger:
    """
    Rotating file logger of one engine component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component prefix of logger and file names
        main_logger: ``<component>.operations``, DEBUG and up
        error_logger: ``<component>.errors``, ERROR only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "antiblog",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.main_logger = self._build(
            "operations", logging.DEBUG, self.log_dir / f"{component_name}.log"
        )
        self.error_logger = self._build(
            "errors", logging.ERROR, self.log_dir / "errors.log"
        )

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _build(self, channel: str, level: int, file_path: Path) -> logging.Logger:
        """Fresh named logger with a single rotating file handler."""
        logger = logging.getLogger(f"{self.component_name}.{channel}")
        logger.setLevel(level)
        # Previous instances for the same component leave handlers behind
        for stale in list(logger.handlers):
            stale.close()
            logger.removeHandler(stale)

        handler = RotatingFileHandler(
            file_path,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Detach and close every handler owned by this logger."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a completed operation with its JSON-encoded details."""
        self.main_logger.info(
            f"OPERATION - {operation}: {json.dumps(details or {}, default=str)}"
        )

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write an exception, its context and the active traceback to the
        error log.
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            pairs = ", ".join(f"{k}={v}" for k, v in context.items())
            self.error_logger.error(f"Context: {pairs}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_with_details("DEBUG", message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_with_details("INFO", message, details))

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.main_logger.warning(_with_details("WARNING", message, details))

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error raised by a command and format it for the terminal.

        Args:
            error: Exception raised by the command
            context: Where the error happened (defaults to ``source=cli``)
            show_traceback: Append the traceback to the returned message

        Returns:
            One-line message, e.g. ``❌ InvalidReferenceError: Bad number: two``
        """
        self.log_error(error, context or {"source": "cli"})
        return format_cli_error(error, show_traceback)


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        return f"{message}\n\n{traceback.format_exc()}"
    return message


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    Full details go to the log files of the command's logger (when one was
    set up in ``ctx.obj``); the terminal gets a single line, or the
    traceback too with ``--verbose``. Never returns.

    Args:
        ctx: Click context whose ``obj`` carries ``logger`` and ``verbose``
        error: Exception raised by the command
        operation: Command name (e.g. ``rotate``, ``page``)
        additional_context: Extra context such as the reference or payload
        exit_code: Process exit status
    """
    context = {"operation": operation, **(additional_context or {})}
    message = safe_logger(ctx.obj.get("logger")).log_cli_error(
        error, context, show_traceback=ctx.obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Drop-in AntiblogLogger that discards everything."""

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

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[AntiblogLogger]) -> AntiblogLogger:
    """Return ``logger``, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
