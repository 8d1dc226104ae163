"""
Input Validation Utilities
===========================

Common validation functions for sensor values and identifiers.

Author: Scan Data Collector Team
"""

import math
from typing import Optional


def validate_sensor_value(value) -> bool:
    """
    Validate a distance reading.

    Args:
        value: Anything - bools and strings are rejected

    Returns:
        True if value is a finite int/float, False otherwise
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def parse_sensor_value(raw: Optional[str]) -> Optional[float]:
    """
    Turn a spoken/typed number into a float.

    Args:
        raw: Text like "12.5"

    Returns:
        The number, or None if it isn't a finite number
    """
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if validate_sensor_value(value) else None


def validate_record_id(record_id) -> bool:
    """
    Validate a database identifier (positive integer).

    Args:
        record_id: Identifier to check

    Returns:
        True if valid, False otherwise
    """
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        return False
    return record_id > 0
