"""
Utility modules for the scan data collector backend.
"""

from scan_collector.utils.validation import (
    validate_sensor_value,
    parse_sensor_value,
    validate_record_id,
)

__all__ = [
    "validate_sensor_value",
    "parse_sensor_value",
    "validate_record_id",
]
