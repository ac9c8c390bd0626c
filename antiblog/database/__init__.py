#!/usr/bin/env python3
"""
Antiblog Database Package
-------------------------
Storage and query engine of the Antiblog publishing platform.

This package provides:
- The AntiblogDB facade (engine, transactions, top-level operations)
- SQLAlchemy models for entries and their relations
- Per-concern managers for ranks, aliases, tags, series, the recency
  feed, pagination and view assembly
"""

from .manager import AntiblogDB
from antiblog.core.exceptions import (
    AntiblogError,
    DatabaseError,
    InvalidReferenceError,
    InvariantError,
    ValidationError,
)
from .decorators import log_database_operation, validate_payload

__all__ = [
    # Main manager
    "AntiblogDB",
    # Exceptions
    "AntiblogError",
    "DatabaseError",
    "InvalidReferenceError",
    "InvariantError",
    "ValidationError",
    # Decorators
    "log_database_operation",
    "validate_payload",
]
