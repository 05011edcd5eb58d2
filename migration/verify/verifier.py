# migration/verify/verifier.py
"""
Verify Stage - post-load checks against the destination database.

- Row count per table (optionally compared with what the loader attempted)
- Leftover sentinel dates in clients.next_appt (expects zero)

Referential integrity is not re-checked here; the foreign keys already
rejected orphan rows at insert time.
"""

import logging
import sys
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from db.models import Client
from migration.common.exceptions import MigrationError
from migration.common.quality_checks import (
    QCReport,
    QCResult,
    check_date_floor,
    check_row_count,
    count_table,
)
from migration.tables import TableSpec, get_spec
from migration.transform.utils import MIN_VALID_DATE

logger = logging.getLogger(__name__)


class MigrationVerifier:
    """Re-queries the destination through an injected session."""

    def __init__(self, session: Session):
        self.session = session

    def count_rows(self, specs: List[TableSpec]) -> Dict[str, int]:
        """Row count per destination table."""
        return {spec.name: count_table(self.session, spec.model) for spec in specs}

    def check_sentinel_dates(self) -> QCResult:
        """Clients whose next_appt is still earlier than 1900-01-01."""
        result = check_date_floor(
            self.session, Client, "next_appt", "clients", MIN_VALID_DATE.date()
        )
        if not result.passed:
            logger.warning("!" * 60)
            logger.warning(
                f"{result.details['below_floor']} client(s) still carry a sentinel next_appt date"
            )
            logger.warning("!" * 60)
        return result

    def check_counts(self, expected: Dict[str, int]) -> List[QCResult]:
        """Compare destination counts against expected counts per table."""
        return [
            check_row_count(self.session, get_spec(table_name).model, table_name, count)
            for table_name, count in expected.items()
        ]

    def verify(
        self,
        specs: List[TableSpec],
        expected: Optional[Dict[str, int]] = None,
    ) -> QCReport:
        """
        Run all post-load checks.

        Args:
            specs: Tables to count
            expected: Optional expected row count per table name; tables not
                listed are counted without comparison

        Returns:
            QCReport with one row_count result per table plus the sentinel check
        """
        expected = expected or {}
        report = QCReport()
        logger.info("=" * 60)
        logger.info("VERIFY: destination row counts and date checks")
        logger.info("=" * 60)

        for spec in specs:
            report.add(check_row_count(
                self.session, spec.model, spec.name, expected.get(spec.name)
            ))
        report.add(self.check_sentinel_dates())

        logger.info(report.summary())
        return report


def run_verify() -> QCReport:
    """Verify the configured destination database; exits non-zero on failures."""
    from db.db_utils import check_connection, get_engine, get_session
    from migration.common.config import settings
    from migration.common.logging import configure_from_settings
    from migration.tables import get_table_specs

    configure_from_settings()
    engine = None
    session = None
    try:
        engine = get_engine(settings.DATABASE_URL)
        check_connection(engine)
        session = get_session(engine)
        report = MigrationVerifier(session).verify(
            get_table_specs(include_logs=settings.INCLUDE_LOGS)
        )
    except MigrationError as e:
        logger.error(f"Verification failed: {e}")
        sys.exit(1)
    finally:
        if session is not None:
            session.close()
        if engine is not None:
            engine.dispose()

    if not report.passed:
        sys.exit(1)
    return report


if __name__ == "__main__":
    run_verify()
