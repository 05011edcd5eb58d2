# migration/orchestrator.py
"""
Migration Pipeline Orchestrator.
Runs Extract -> Load (transform per record) -> Verify against injected
source and destination connections.

State: idle -> extracting -> loading -> verifying -> done, or aborted on any
fatal error. There is no resume; an aborted run is repeated from the start.
"""

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from migration.common.exceptions import MigrationError, VerificationError
from migration.common.quality_checks import QCReport
from migration.extract.extractor import ExtractResult, TableExtractor
from migration.load.loader import DEFAULT_BATCH_SIZE, LoadResult, TableLoader
from migration.tables import TableSpec, get_table_specs
from migration.verify.verifier import MigrationVerifier

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    LOADING = "loading"
    VERIFYING = "verifying"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class MigrationResult:
    """Everything a run produced, stage by stage."""
    state: PipelineState = PipelineState.IDLE
    extract_results: List[ExtractResult] = field(default_factory=list)
    load_results: List[LoadResult] = field(default_factory=list)
    qc_report: Optional[QCReport] = None
    error: Optional[str] = None

    @property
    def total_inserted(self) -> int:
        return sum(r.inserted for r in self.load_results)

    @property
    def total_failed(self) -> int:
        return sum(r.failed for r in self.load_results)

    @property
    def errors(self) -> List[str]:
        return [e for r in self.load_results for e in r.errors]

    @property
    def succeeded(self) -> bool:
        return (
            self.state == PipelineState.DONE
            and self.total_failed == 0
            and self.qc_report is not None
            and self.qc_report.passed
        )

    def summary(self) -> str:
        extracted = {r.table_name: r.row_count for r in self.extract_results}
        lines = [
            "=" * 60,
            f"MIGRATION SUMMARY - {self.state.value.upper()}",
            "=" * 60,
            f"{'Table':<20}{'Extracted':>10}{'Inserted':>10}{'Failed':>10}",
            "-" * 60,
        ]
        for r in self.load_results:
            lines.append(
                f"{r.table_name:<20}{extracted.get(r.table_name, '-'):>10}"
                f"{r.inserted:>10}{r.failed:>10}"
            )
        lines.append("-" * 60)
        lines.append(
            f"{'TOTAL':<20}{sum(extracted.values()):>10}"
            f"{self.total_inserted:>10}{self.total_failed:>10}"
        )
        dates_nulled = sum(r.dates_nulled for r in self.load_results)
        if dates_nulled:
            lines.append(f"Invalid dates converted to null: {dates_nulled}")
        if self.qc_report is not None:
            lines.append(
                f"Verification: {self.qc_report.passed_count} passed, "
                f"{self.qc_report.failed_count} failed"
            )
        if self.error:
            lines.append(f"Aborted: {self.error}")
        lines.append("=" * 60)
        return "\n".join(lines)


class MigrationPipeline:
    """
    Sequential extract -> load -> verify run.

    Args:
        source_engine: Engine for the legacy database
        destination_session: Session on the destination database
        export_dir: Directory for the intermediate JSON files
        batch_size: Loader batch size
        abort_on_count_mismatch: Stop when an extracted count differs from expected
        include_logs: Also migrate the Logs table
        check_counts: Compare extracted counts with the production snapshot counts
        fail_on_verification: Raise VerificationError when a check fails
    """

    def __init__(
        self,
        source_engine: Engine,
        destination_session: Session,
        export_dir: str = "data/exports",
        batch_size: int = DEFAULT_BATCH_SIZE,
        abort_on_count_mismatch: bool = True,
        include_logs: bool = False,
        check_counts: bool = True,
        fail_on_verification: bool = False,
    ):
        self.export_dir = export_dir
        self.fail_on_verification = fail_on_verification
        self.specs: List[TableSpec] = get_table_specs(
            include_logs=include_logs, check_counts=check_counts
        )
        self.extractor = TableExtractor(
            source_engine, export_dir=export_dir, abort_on_count_mismatch=abort_on_count_mismatch
        )
        self.loader = TableLoader(destination_session, batch_size=batch_size)
        self.verifier = MigrationVerifier(destination_session)
        self.state = PipelineState.IDLE

    def _enter(self, state: PipelineState, step: int, title: str) -> None:
        self.state = state
        logger.info("")
        logger.info("=" * 70)
        logger.info(f"  STEP {step}: {title}")
        logger.info("=" * 70)

    def run(self) -> MigrationResult:
        """
        Run all stages.

        Returns:
            MigrationResult in state DONE

        Raises:
            MigrationError: any fatal error, after moving to ABORTED
        """
        result = MigrationResult()
        try:
            self._enter(PipelineState.EXTRACTING, 1, "EXTRACT - legacy tables to JSON")
            result.extract_results = self.extractor.extract_all(self.specs)

            self._enter(PipelineState.LOADING, 2, "LOAD - JSON to destination")
            result.load_results = self.loader.load_all(self.specs, self.export_dir)

            self._enter(PipelineState.VERIFYING, 3, "VERIFY - destination checks")
            # Every record handed to the loader should now be in the table
            expected = {r.table_name: r.total for r in result.load_results}
            result.qc_report = self.verifier.verify(self.specs, expected)
            if self.fail_on_verification and not result.qc_report.passed:
                raise VerificationError(
                    "Post-load verification failed",
                    failed_checks=result.qc_report.failed_count,
                )
        except MigrationError as e:
            self.state = PipelineState.ABORTED
            result.state = self.state
            result.error = str(e)
            logger.error(f"MIGRATION ABORTED: {e}")
            logger.info(result.summary())
            raise

        self.state = PipelineState.DONE
        result.state = self.state
        logger.info(result.summary())
        return result


def run_migration() -> MigrationResult:
    """Full run using the configured source and destination databases."""
    from db.db_utils import (
        check_connection,
        create_all_tables,
        get_engine,
        get_session,
        get_source_engine,
    )
    from migration.common.config import settings
    from migration.common.logging import configure_logging, create_run_log_file

    configure_logging(
        level=settings.LOG_LEVEL,
        log_file=settings.LOG_FILE or create_run_log_file(),
    )

    source_engine = None
    destination_engine = None
    session = None
    try:
        source_engine = get_source_engine(settings.SOURCE_DATABASE_URL)
        destination_engine = get_engine(settings.DATABASE_URL)
        check_connection(source_engine, database="source")
        check_connection(destination_engine)
        create_all_tables(destination_engine)
        session = get_session(destination_engine)

        pipeline = MigrationPipeline(
            source_engine,
            session,
            export_dir=settings.EXPORT_DIR,
            batch_size=settings.BATCH_SIZE,
            abort_on_count_mismatch=settings.ABORT_ON_COUNT_MISMATCH,
            include_logs=settings.INCLUDE_LOGS,
        )
        result = pipeline.run()
    except MigrationError as e:
        logger.error(f"Migration failed: {e}")
        sys.exit(1)
    finally:
        if session is not None:
            session.close()
        if destination_engine is not None:
            destination_engine.dispose()
        if source_engine is not None:
            source_engine.dispose()

    if not result.succeeded:
        sys.exit(1)
    return result


if __name__ == "__main__":
    run_migration()
