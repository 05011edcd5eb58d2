# migration/transform/validator.py
"""
Pre-insert validation - every transformed row must carry the destination's
NOT NULL fields before it is handed to the database.
"""

from typing import Any, Dict, List, Optional

from migration.common.exceptions import RecordValidationError

# NOT NULL columns without a server default, per destination table
REQUIRED_FIELDS: Dict[str, List[str]] = {
    "appointment_types": ["id"],
    "employees": ["id"],
    "time_periods": ["id", "year", "pay_period", "start_date", "end_date"],
    "clients": ["id", "appt_type_id"],
    "rates": ["id", "start_date"],
    "appointments": [
        "id",
        "client_id",
        "employee_id",
        "appt_date",
        "duration",
        "created",
        "updated",
    ],
    "logs": ["id", "log_time", "type", "description"],
}


def missing_fields(table_name: str, row: Dict[str, Any]) -> List[str]:
    """Return the required fields that are absent or None in row."""
    return [f for f in REQUIRED_FIELDS.get(table_name, []) if row.get(f) is None]


def validate_record(table_name: str, row: Dict[str, Any], record_id: Optional[Any] = None) -> None:
    """
    Check a transformed row against REQUIRED_FIELDS.

    Args:
        table_name: Destination table name
        row: Transformed row (destination column names)
        record_id: Source ID used in the error message

    Raises:
        RecordValidationError: on the first missing required field
    """
    missing = missing_fields(table_name, row)
    if missing:
        raise RecordValidationError(
            f"Record {record_id} in {table_name} is missing required field '{missing[0]}'",
            table_name=table_name,
            record_id=record_id,
            field=missing[0],
        )
