"""
Post-load checks run against the destination database.

Each check returns a QCResult; the verifier collects them in a QCReport,
which logs every outcome as it is added.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@dataclass
class QCResult:
    """Outcome of one check on one table."""
    check_name: str
    table_name: str
    passed: bool
    message: str
    details: Optional[Dict[str, Any]] = None

    @property
    def label(self) -> str:
        return "PASS" if self.passed else "FAIL"


@dataclass
class QCReport:
    """All check outcomes of one verification run."""
    started_at: datetime = field(default_factory=datetime.now)
    results: List[QCResult] = field(default_factory=list)

    @property
    def failures(self) -> List[QCResult]:
        return [r for r in self.results if not r.passed]

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def passed_count(self) -> int:
        return len(self.results) - self.failed_count

    def get(self, table_name: str, check_name: str) -> Optional[QCResult]:
        """First result recorded for (table, check), or None."""
        return next(
            (r for r in self.results if (r.table_name, r.check_name) == (table_name, check_name)),
            None,
        )

    def add(self, result: QCResult) -> None:
        self.results.append(result)
        level = logging.INFO if result.passed else logging.WARNING
        logger.log(level, f"[QC {result.label}] {result.table_name}: {result.check_name} - {result.message}")

    def summary(self) -> str:
        header = (
            f"VERIFICATION {self.started_at:%Y-%m-%d %H:%M:%S} - "
            f"{self.passed_count}/{len(self.results)} checks passed"
        )
        rows = [f"[{r.label}] {r.table_name}.{r.check_name}: {r.message}" for r in self.results]
        return "\n".join(["=" * 60, header, "-" * 60, *rows, "=" * 60])


def count_table(session: Session, model) -> int:
    """Count rows in a destination table."""
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def check_row_count(session: Session, model, table_name: str, expected: Optional[int] = None) -> QCResult:
    """
    Report the row count of a table, comparing it to an expected count when one is given.

    Args:
        session: Destination session
        model: Destination model class
        table_name: Name used in the report
        expected: Rows the table should hold; None only records the count

    Returns:
        QCResult named "row_count"
    """
    count = count_table(session, model)
    details: Dict[str, Any] = {"db_row_count": count}
    message = f"Records in database: {count}"
    if expected is not None:
        details["expected"] = expected
        message += f" (expected: {expected})"

    return QCResult(
        check_name="row_count",
        table_name=table_name,
        passed=expected is None or count == expected,
        message=message,
        details=details,
    )


def check_date_floor(session: Session, model, column_name: str, table_name: str, min_date: date) -> QCResult:
    """Count rows whose date column is earlier than min_date; expects zero."""
    column = getattr(model, column_name)
    below = session.execute(
        select(func.count()).select_from(model).where(column < min_date)
    ).scalar_one()

    return QCResult(
        check_name=f"date_floor_{column_name}",
        table_name=table_name,
        passed=below == 0,
        message=f"Dates before {min_date.isoformat()}: {below} (should be 0)",
        details={"below_floor": below, "min_date": min_date.isoformat()},
    )
