"""
Common utilities shared across migration stages.
Includes configuration, quality checks, logging, and custom exceptions.
"""

from migration.common.quality_checks import (
    QCResult,
    QCReport,
    count_table,
    check_row_count,
    check_date_floor,
)
from migration.common.exceptions import (
    MigrationError,
    ConnectivityError,
    ExtractionError,
    RowCountMismatchError,
    RecordValidationError,
    BatchLoadError,
    VerificationError,
)
from migration.common.logging import configure_logging, create_run_log_file

__all__ = [
    # Quality Checks
    "QCResult",
    "QCReport",
    "count_table",
    "check_row_count",
    "check_date_floor",
    # Exceptions
    "MigrationError",
    "ConnectivityError",
    "ExtractionError",
    "RowCountMismatchError",
    "RecordValidationError",
    "BatchLoadError",
    "VerificationError",
    # Logging
    "configure_logging",
    "create_run_log_file",
]
