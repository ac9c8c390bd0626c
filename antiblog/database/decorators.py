#!/usr/bin/env python3
"""
decorators.py
--------------------
Decorators shared by the database managers.

    @log_database_operation("enqueue_rss_entry")
    def enqueue(self, entry_id): ...

    @validate_payload(["id"])
    def update(self, payload): ...

Both expect to decorate methods; ``log_database_operation`` reads the
``logger`` attribute of the instance.
"""
from functools import wraps
from time import perf_counter
from typing import Any, Callable, Dict, List
from datetime import datetime

from antiblog.core.logging_manager import safe_logger
from antiblog.core.validators import DataValidator


def log_database_operation(operation_name: str):
    """
    Log start, completion and failure of a manager method.

    Completion is recorded with ``log_operation("<name>_completed")`` and
    the elapsed seconds; failures go to ``log_error`` and are re-raised
    unchanged.
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = safe_logger(getattr(self, "logger", None))
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            details: Dict[str, Any] = {"operation_id": f"{operation_name}_{stamp}"}

            logger.log_debug(
                f"Starting {operation_name}",
                {**details, "args_count": len(args), "kwargs_keys": list(kwargs)},
            )
            started = perf_counter()
            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                details["duration_seconds"] = perf_counter() - started
                logger.log_error(e, {"operation": operation_name, **details})
                raise

            details["duration_seconds"] = perf_counter() - started
            logger.log_operation(f"{operation_name}_completed", {**details, "success": True})
            return result

        return wrapper

    return decorator


def validate_payload(required_fields: List[str]):
    """
    Reject a payload lacking any of ``required_fields`` before the method
    runs.

    The payload is the first positional argument after ``self``, or the
    ``payload`` keyword.

    Raises:
        ValidationError: If the payload is not a mapping or a field is
            missing or empty
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            payload = args[0] if args else kwargs.get("payload", {})
            DataValidator.validate_required_fields(payload, required_fields)
            return function(self, *args, **kwargs)

        return wrapper

    return decorator
