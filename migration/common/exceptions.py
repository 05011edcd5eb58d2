# migration/common/exceptions.py
"""
Custom exceptions for the migration pipeline.
Provides specific error types for each stage and common failure scenarios.
"""

from typing import Optional, Dict, Any


class MigrationError(Exception):
    """Base exception for all migration errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error
        if original_error is not None:
            self.__cause__ = original_error

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConnectivityError(MigrationError):
    """Raised when the source or destination database cannot be reached."""

    def __init__(
        self,
        message: str,
        database: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if database:
            details["database"] = database
        super().__init__(message, details=details, **kwargs)


class ExtractionError(MigrationError):
    """Exception raised while reading a table from the legacy source."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if table_name:
            details["table_name"] = table_name
        super().__init__(message, details=details, **kwargs)


class RowCountMismatchError(ExtractionError):
    """Extracted row count differs from the expected count."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        details["expected"] = expected
        details["actual"] = actual
        self.expected = expected
        self.actual = actual
        super().__init__(message, table_name=table_name, details=details, **kwargs)


class RecordValidationError(MigrationError):
    """A single record cannot be inserted (missing NOT NULL field, bad value)."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        record_id: Optional[Any] = None,
        field: Optional[str] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if table_name:
            details["table_name"] = table_name
        if record_id is not None:
            details["record_id"] = record_id
        if field:
            details["field"] = field
        self.table_name = table_name
        self.record_id = record_id
        self.field = field
        super().__init__(message, details=details, **kwargs)


class BatchLoadError(MigrationError):
    """Exception describing a batch that was rolled back."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        first_id: Optional[Any] = None,
        last_id: Optional[Any] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if table_name:
            details["table_name"] = table_name
        details["id_range"] = f"{first_id}-{last_id}"
        self.table_name = table_name
        self.first_id = first_id
        self.last_id = last_id
        super().__init__(message, details=details, **kwargs)


class VerificationError(MigrationError):
    """Exception raised when post-load verification fails."""

    def __init__(
        self,
        message: str,
        failed_checks: Optional[int] = None,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if failed_checks:
            details["failed_checks"] = failed_checks
        super().__init__(message, details=details, **kwargs)
