#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for Antiblog payloads.

Provides type-safe conversion and validation functions used by the entry
repository and the command line before anything reaches the database.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError

_DIGITS = re.compile(r"^[0-9]+$")

# Largest integer the store can hold
MAX_ID = 2**63 - 1


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Payload must be a mapping, got {type(data).__name__}")
        for field in required_fields:
            if field not in data or data[field] is None or data[field] == "":
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Args:
            value: Value to normalize

        Returns:
            Stripped string, or None for empty input
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer safely.

        Accepts ints and strings made only of digits; booleans and anything
        else yield None.

        Args:
            value: Value to convert

        Returns:
            Integer value or None
        """
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and _DIGITS.match(value.strip()):
            return int(value.strip())
        return None

    @staticmethod
    def is_numeric_ref(value: Any) -> bool:
        """Check whether a textual reference consists of digits only."""
        return isinstance(value, str) and bool(_DIGITS.match(value))

    @staticmethod
    def normalize_tags(tags: Optional[List[Any]]) -> List[str]:
        """
        Normalize a list of tag labels.

        Blank labels are dropped and duplicates collapsed, preserving the
        first occurrence order.

        Args:
            tags: Raw tag list from a payload (may be None)

        Returns:
            List of unique, stripped tag strings

        Raises:
            ValidationError: If tags is not a list
        """
        if tags is None:
            return []
        if not isinstance(tags, (list, tuple)):
            raise ValidationError(f"Tags must be a list, got {type(tags).__name__}")

        seen: Dict[str, None] = {}
        for tag in tags:
            normalized = DataValidator.normalize_string(tag)
            if normalized:
                seen.setdefault(normalized, None)
        return list(seen)

    @staticmethod
    def normalize_series(series: Optional[List[Any]]) -> List[Dict[str, Any]]:
        """
        Normalize series memberships from a payload.

        Args:
            series: List of ``{"series": name, "index": int}`` mappings

        Returns:
            List of ``{"series": str, "index": int}`` dictionaries

        Raises:
            ValidationError: If an item lacks a name or an integer index
        """
        if series is None:
            return []
        if not isinstance(series, (list, tuple)):
            raise ValidationError(f"Series must be a list, got {type(series).__name__}")

        result = []
        for item in series:
            if not isinstance(item, dict):
                raise ValidationError("Series item must be a mapping")
            name = DataValidator.normalize_string(item.get("series"))
            index = item.get("index")
            if isinstance(index, str):
                index = DataValidator.normalize_int(index)
            if not name or not isinstance(index, int) or isinstance(index, bool):
                raise ValidationError(
                    f"Series item must carry 'series' and integer 'index': {item}"
                )
            result.append({"series": name, "index": index})
        return result
