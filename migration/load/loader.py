# migration/load/loader.py
"""
Load Stage - JSON export files -> PostgreSQL destination tables.

- Clears every destination table (children first) before loading
- Loads tables in dependency order, parents first
- Inserts in fixed-size batches; each batch is one transaction
- A failed batch is rolled back, recorded and skipped; later batches still load
- Logs progress with a linear time-remaining estimate
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, insert, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from migration.common.exceptions import (
    BatchLoadError,
    MigrationError,
    RecordValidationError,
)
from migration.extract.extractor import read_export
from migration.tables import TableSpec
from migration.transform.mappings import SUPPLEMENTAL_APPOINTMENT_TYPES
from migration.transform.utils import is_missing, to_int
from migration.transform.validator import validate_record

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000


@dataclass
class LoadResult:
    """Per-table load outcome."""
    table_name: str
    total: int = 0
    inserted: int = 0
    failed: int = 0
    dates_nulled: int = 0
    batches_failed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.failed == 0


def _db_error_message(error: SQLAlchemyError) -> str:
    """Driver message without the SQL statement and parameters."""
    orig = getattr(error, "orig", None)
    return str(orig).strip() if orig is not None else str(error)


def with_supplemental_appointment_types(
    type_records: List[Dict[str, Any]],
    referencing_records: List[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Append the known-missing appointment types that are referenced but absent.

    Args:
        type_records: Extracted AppointmentType records
        referencing_records: Client, Rate and Appointment records (Appt_TypeID column)

    Returns:
        type_records plus any supplemental rows needed
    """
    existing = {to_int(r.get("ID")) for r in type_records}
    referenced = {to_int(r.get("Appt_TypeID")) for r in referencing_records}

    records = list(type_records)
    for extra in SUPPLEMENTAL_APPOINTMENT_TYPES:
        if extra["ID"] not in existing and extra["ID"] in referenced:
            logger.info(f"Adding missing appointment type {extra['ID']} ({extra['Appt_Type']})")
            records.append(dict(extra))
    return records


class TableLoader:
    """Batch loader bound to an injected destination session."""

    def __init__(self, session: Session, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.session = session
        self.batch_size = batch_size

    @staticmethod
    def estimate_remaining(elapsed: float, processed: int, total: int) -> Optional[float]:
        """Seconds left, extrapolated linearly from the rate so far."""
        if processed <= 0:
            return None
        return elapsed / processed * max(total - processed, 0)

    def clear_tables(self, specs: List[TableSpec]) -> Dict[str, int]:
        """
        Delete all rows from each table, children first, in one transaction.

        Returns:
            Rows deleted per table

        Raises:
            MigrationError: if any delete fails (nothing is removed)
        """
        logger.info("Clearing destination tables...")
        deleted: Dict[str, int] = {}
        try:
            for spec in reversed(specs):
                result = self.session.execute(delete(spec.model))
                deleted[spec.name] = result.rowcount
                logger.info(f"  Cleared {spec.name} ({result.rowcount} rows)")
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise MigrationError(
                f"Failed to clear destination tables: {_db_error_message(e)}",
                original_error=e,
            )
        return deleted

    def _prepare_batch(
        self, spec: TableSpec, batch: List[Dict[str, Any]]
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Transform and validate a batch; returns rows and sentinel dates nulled."""
        rows = []
        nulled = 0
        for record in batch:
            record_id = record.get("ID")
            try:
                row = spec.transform(record)
            except (TypeError, ValueError, ArithmeticError) as e:
                raise RecordValidationError(
                    f"Record {record_id} in {spec.name} could not be transformed: {e}",
                    table_name=spec.name,
                    record_id=record_id,
                    original_error=e,
                )
            validate_record(spec.name, row, record_id)

            for source_col, dest_col in spec.sentinel_fields:
                if not is_missing(record.get(source_col)) and row.get(dest_col) is None:
                    nulled += 1
            rows.append(row)
        return rows, nulled

    def load_table(self, spec: TableSpec, records: List[Dict[str, Any]]) -> LoadResult:
        """
        Insert records into spec.model in batches.

        Args:
            spec: Destination table
            records: Exported records (legacy column names)

        Returns:
            LoadResult with counts and per-batch error messages
        """
        result = LoadResult(table_name=spec.name, total=len(records))
        logger.info(f"Loading {spec.name} ({result.total} records)...")
        start = time.monotonic()

        for i in range(0, result.total, self.batch_size):
            batch = records[i:i + self.batch_size]
            first_id, last_id = batch[0].get("ID"), batch[-1].get("ID")

            try:
                rows, nulled = self._prepare_batch(spec, batch)
                self.session.execute(insert(spec.model), rows)
                self.session.commit()
                result.inserted += len(rows)
                result.dates_nulled += nulled
            except (RecordValidationError, SQLAlchemyError) as e:
                self.session.rollback()
                reason = e.message if isinstance(e, MigrationError) else _db_error_message(e)
                error = BatchLoadError(
                    f"Batch failed (IDs {first_id}-{last_id}): {reason}",
                    table_name=spec.name,
                    first_id=first_id,
                    last_id=last_id,
                    original_error=e,
                )
                result.errors.append(error.message)
                result.failed += len(batch)
                result.batches_failed += 1
                logger.error(f"  {spec.name}: {error.message}")

            processed = min(i + self.batch_size, result.total)
            eta = self.estimate_remaining(time.monotonic() - start, processed, result.total)
            logger.info(
                f"  {spec.name}: {result.inserted}/{result.total} inserted, "
                f"{result.failed} failed, ETA {eta:.1f}s"
            )

        if spec.sentinel_fields:
            logger.info(f"  {spec.name}: converted {result.dates_nulled} invalid dates to null")
        log_fn = logger.info if result.succeeded else logger.warning
        log_fn(
            f"Finished {spec.name}: {result.inserted} inserted, {result.failed} failed "
            f"in {time.monotonic() - start:.1f}s"
        )
        return result

    def load_all(self, specs: List[TableSpec], export_dir: str) -> List[LoadResult]:
        """
        Clear the destination, then load every table from export_dir.

        All export files are read before anything is deleted, so a missing
        file aborts the run with the destination untouched.
        """
        logger.info("=" * 60)
        logger.info("LOAD: JSON exports -> destination")
        logger.info(f"Batch size: {self.batch_size}")
        logger.info("=" * 60)

        records_by_table = {spec.name: read_export(export_dir, spec) for spec in specs}

        if "appointment_types" in records_by_table:
            referencing = (
                records_by_table.get("clients", [])
                + records_by_table.get("rates", [])
                + records_by_table.get("appointments", [])
            )
            records_by_table["appointment_types"] = with_supplemental_appointment_types(
                records_by_table["appointment_types"], referencing
            )

        self.clear_tables(specs)
        results = [self.load_table(spec, records_by_table[spec.name]) for spec in specs]
        self.reset_sequences(specs)

        log_load_summary(results)
        return results

    def reset_sequences(self, specs: List[TableSpec]) -> None:
        """
        Move each id sequence past the highest loaded id (PostgreSQL only).
        Rows were inserted with explicit source ids, so the sequences never advanced.
        """
        if self.session.get_bind().dialect.name != "postgresql":
            return
        try:
            for spec in specs:
                self.session.execute(text(
                    f"SELECT setval(pg_get_serial_sequence('{spec.name}', 'id'), "
                    f"COALESCE((SELECT MAX(id) FROM {spec.name}), 0) + 1, false)"
                ))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise MigrationError(
                f"Failed to reset id sequences: {_db_error_message(e)}",
                original_error=e,
            )
        logger.info("Id sequences reset to follow loaded ids")


def log_load_summary(results: List[LoadResult]) -> None:
    """Per-table totals plus every collected batch error."""
    logger.info("=" * 60)
    logger.info("LOAD SUMMARY")
    logger.info("=" * 60)
    for r in results:
        logger.info(f"  {r.table_name}: {r.inserted}/{r.total} inserted, {r.failed} failed")
    dates_nulled = sum(r.dates_nulled for r in results)
    if dates_nulled:
        logger.info(f"  Invalid dates converted to null: {dates_nulled}")

    errors = [e for r in results for e in r.errors]
    if errors:
        logger.warning(f"{len(errors)} batch error(s):")
        for e in errors:
            logger.warning(f"  - {e}")
    else:
        logger.info("No batch errors")


def run_load() -> List[LoadResult]:
    """Load every exported table into the configured destination database."""
    from db.db_utils import check_connection, create_all_tables, get_engine, get_session
    from migration.common.config import settings
    from migration.common.logging import configure_from_settings
    from migration.tables import get_table_specs

    configure_from_settings()
    engine = None
    session = None
    try:
        engine = get_engine(settings.DATABASE_URL)
        check_connection(engine)
        create_all_tables(engine)
        session = get_session(engine)
        loader = TableLoader(session, batch_size=settings.BATCH_SIZE)
        return loader.load_all(
            get_table_specs(include_logs=settings.INCLUDE_LOGS), settings.EXPORT_DIR
        )
    except MigrationError as e:
        logger.error(f"Load failed: {e}")
        sys.exit(1)
    finally:
        if session is not None:
            session.close()
        if engine is not None:
            engine.dispose()


if __name__ == "__main__":
    run_load()
