"""
Transformer - legacy value normalization and column mapping.
Invoked per record by the loader.
"""

from migration.transform.utils import (
    MIN_VALID_DATE,
    SENTINEL_DATE_PATTERNS,
    is_sentinel_date,
    parse_date,
    parse_day,
    to_bool,
    to_flag,
    parse_big_int,
    clean_string,
    to_float,
)
from migration.transform.mappings import SUPPLEMENTAL_APPOINTMENT_TYPES
from migration.transform.validator import REQUIRED_FIELDS, validate_record

__all__ = [
    "MIN_VALID_DATE",
    "SENTINEL_DATE_PATTERNS",
    "is_sentinel_date",
    "parse_date",
    "parse_day",
    "to_bool",
    "to_flag",
    "parse_big_int",
    "clean_string",
    "to_float",
    "SUPPLEMENTAL_APPOINTMENT_TYPES",
    "REQUIRED_FIELDS",
    "validate_record",
]
