#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Antiblog project.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    └── AntiblogError - Base for all project errors
        ├── DatabaseError - Misuse of the database facade
        ├── ValidationError - Malformed mutation payloads
        │   └── InvalidReferenceError - Unparseable page references
        ├── InvariantError - Contract violations inside the engine
        └── ConfigurationError - Unreadable or malformed profiles

Store failures raised by SQLAlchemy are deliberately absent from this
hierarchy: they propagate unchanged once the enclosing transaction has
been rolled back.

Usage:
    from antiblog.core.exceptions import InvalidReferenceError

    try:
        context = db.page_view("stuff", "two")
    except InvalidReferenceError as e:
        logger.error(f"Bad page reference: {e}")
"""


class AntiblogError(Exception):
    """Base exception for every error raised by Antiblog itself."""

    pass


class DatabaseError(AntiblogError):
    """
    Exception for incorrect use of the database layer.

    Raised when the facade is used outside of its lifecycle, e.g. when an
    entity manager is accessed without an active session scope.

    Examples:
        >>> raise DatabaseError("TagManager requires active session")
    """

    pass


class ValidationError(AntiblogError):
    """
    Exception for data validation failures.

    Raised when a payload handed to the entry repository is missing
    required fields or carries values of the wrong shape.

    Examples:
        >>> raise ValidationError("Required field 'id' missing or empty")
        >>> raise ValidationError("Series item must carry 'series' and 'index'")
    """

    pass


class InvalidReferenceError(ValidationError):
    """
    Exception for page references that cannot be resolved.

    The ordinal part of a page reference must be a positive integer or
    the symbolic ``last`` marker.

    Examples:
        >>> raise InvalidReferenceError("Bad number: two")
    """

    pass


class InvariantError(AntiblogError):
    """
    Exception for violated internal contracts.

    These are programming errors rather than user-facing conditions, for
    example a ``None`` title reaching an entry view record.
    """

    pass


class ConfigurationError(AntiblogError):
    """
    Exception for profile loading failures.

    Examples:
        >>> raise ConfigurationError("Profile not found: ~/.antiblog/blog.json")
    """

    pass
