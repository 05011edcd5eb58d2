# migration/transform/utils.py
"""
Transformer Utilities - value normalization shared by every table mapping.
Contains the sentinel-date policy plus boolean, big-integer, string and
numeric conversions. Every legacy value passes through these functions;
table mappings never parse values on their own.
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)

# Placeholder values that should be treated as null
NULL_PLACEHOLDERS = ["", "NULL", "null", "[NULL]", "[null]", "None", "nan", "NaN", "NaT"]

# Textual renderings of the year-one placeholder the legacy system stores
# instead of NULL. SQL Server CONVERT output pads single-digit days with a
# space, hence "Jan  1 0001".
SENTINEL_DATE_PATTERNS = [
    "0001-01-01",
    "Jan  1 0001",
    "Jan 1 0001",
    "Jan 01 0001",
    "1-01-01",
    "01/01/0001",
    "1/1/0001",
]

# Anything earlier than this is treated as invalid
MIN_VALID_DATE = datetime(1900, 1, 1)

TRUE_VALUES = {"1", "true", "t", "yes", "y"}
FALSE_VALUES = {"0", "false", "f", "no", "n"}

# SQL Server datetime fractions, e.g. 2024-03-05 10:15:00.1230000
_FRACTIONAL_SECONDS = re.compile(r"(\d{2}:\d{2}:\d{2})\.\d+")


def is_missing(value: Any) -> bool:
    """True for None, NaN, NaT and textual NULL placeholders."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in NULL_PLACEHOLDERS
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def is_sentinel_date(value: Any) -> bool:
    """
    Check whether a value is the legacy year-one "no date" placeholder.

    Accepts date/datetime objects (year 1) and any of the textual
    renderings in SENTINEL_DATE_PATTERNS.
    """
    if isinstance(value, (date, datetime)):
        return value.year == 1
    if not isinstance(value, str):
        return False
    text = value.strip()
    return any(text.startswith(pattern) for pattern in SENTINEL_DATE_PATTERNS)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Normalize a legacy date/time value.

    Handles:
    - None / NaN / "NULL" -> None
    - Sentinel placeholders (0001-01-01 and its renderings) -> None
    - SQL Server fractional seconds are dropped before parsing
    - Unparseable strings -> None
    - Anything earlier than 1900-01-01 -> None
    - Valid dates are returned unchanged

    Args:
        value: str, date, datetime or pandas Timestamp

    Returns:
        datetime or None
    """
    if is_missing(value) or is_sentinel_date(value):
        return None

    if isinstance(value, pd.Timestamp):
        parsed = value.to_pydatetime()
    elif isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = _parse_date_string(value.strip())
    else:
        logger.warning(f"Unsupported date value {value!r} ({type(value).__name__}), using null")
        return None

    if parsed is None:
        return None
    if parsed.replace(tzinfo=None) < MIN_VALID_DATE:
        return None
    return parsed


def _parse_date_string(text: str) -> Optional[datetime]:
    text = _FRACTIONAL_SECONDS.sub(r"\1", text)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    # Other renderings, e.g. "Mar  5 2024 10:15AM"
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        logger.warning(f"Unparseable date {text!r}, using null")
        return None
    return parsed.to_pydatetime()


def parse_day(value: Any) -> Optional[date]:
    """parse_date() truncated to a calendar date."""
    parsed = parse_date(value)
    return parsed.date() if parsed is not None else None


def to_bool(value: Any) -> Optional[bool]:
    """Convert 0/1, True/False, "0"/"1", "true"/"false" to bool. Missing stays None."""
    if is_missing(value):
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    logger.warning(f"Unrecognized boolean value {value!r}, using null")
    return None


def to_flag(value: Any) -> int:
    """Boolean as a 0/1 smallint; missing counts as 0."""
    return 1 if to_bool(value) else 0


def parse_big_int(value: Any) -> Optional[int]:
    """
    Parse an identifier that may exceed the 32/64-bit range.

    Python ints are arbitrary precision, so only malformed input fails;
    a failure degrades to None with a warning rather than rejecting the record.
    """
    if is_missing(value):
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        logger.warning(f"Non-integral identifier {value!r}, using null")
        return None

    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = Decimal(text)
    except InvalidOperation:
        logger.warning(f"Could not parse big integer {value!r}, using null")
        return None
    if not number.is_finite():
        logger.warning(f"Non-finite identifier {value!r}, using null")
        return None
    if number == number.to_integral_value():
        return int(number)
    logger.warning(f"Non-integral identifier {value!r}, using null")
    return None


def clean_string(value: Any, default: Optional[str] = None) -> Optional[str]:
    """
    Clean a string value by handling null/empty/placeholder values.

    Args:
        value: Raw value
        default: Value to use for nulls (None = keep as null, "" = empty string)

    Returns:
        Stripped string or default
    """
    if is_missing(value):
        return default
    return str(value).strip()


def to_float(value: Any) -> Optional[float]:
    """Numeric (including Decimal and numeric strings) to float; missing or bad -> None."""
    if is_missing(value):
        return None
    if isinstance(value, bool):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Could not parse number {value!r}, using null")
        return None


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Integer column value; missing or bad -> default."""
    parsed = parse_big_int(value)
    return default if parsed is None else parsed
