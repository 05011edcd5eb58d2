# migration/extract/extractor.py
"""
Extract Stage - snapshot each legacy SQL Server table to a JSON file.

One file per table under the export directory, holding a list of flat
records (legacy column names, rows ordered by ID). Dates are written as ISO
strings and decimals as numbers so the file can be read without the source
database.
"""

import json
import logging
import sys
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from migration.common.exceptions import (
    ExtractionError,
    MigrationError,
    RowCountMismatchError,
)
from migration.tables import TableSpec

logger = logging.getLogger(__name__)


@dataclass
class ExtractResult:
    """Outcome of extracting one table."""
    table_name: str
    source_table: str
    path: str
    row_count: int
    expected_rows: Optional[int] = None

    @property
    def count_matched(self) -> bool:
        return self.expected_rows is None or self.row_count == self.expected_rows


def clean_nulls(df: pd.DataFrame) -> pd.DataFrame:
    """Replace NaN/NaT with None so they serialize as JSON null."""
    return df.where(pd.notna(df), None)


def _json_default(value: Any) -> Any:
    """JSON encoder for the value types SQL Server drivers return."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, bytes):
        return value.hex()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def read_export(export_dir: str, spec: TableSpec) -> List[Dict[str, Any]]:
    """
    Read an extracted table back from disk.

    Args:
        export_dir: Directory holding the export files
        spec: Table to read

    Returns:
        List of records with legacy column names

    Raises:
        ExtractionError: when the file is missing or not a JSON list
    """
    path = Path(export_dir) / spec.export_file
    if not path.exists():
        raise ExtractionError(
            f"Export file not found: {path} (run the extract stage first)",
            table_name=spec.source_table,
        )
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ExtractionError(
            f"Could not read export file {path}: {e}",
            table_name=spec.source_table,
            original_error=e,
        )
    if not isinstance(records, list):
        raise ExtractionError(
            f"Export file {path} does not contain a list of records",
            table_name=spec.source_table,
        )
    return records


class TableExtractor:
    """Reads legacy tables through an injected source engine."""

    def __init__(
        self,
        source_engine: Engine,
        export_dir: str = "data/exports",
        abort_on_count_mismatch: bool = True,
    ):
        self.source_engine = source_engine
        self.export_dir = Path(export_dir)
        self.abort_on_count_mismatch = abort_on_count_mismatch

    def fetch_table(self, spec: TableSpec) -> pd.DataFrame:
        """Query spec.columns of the source table ordered by ID."""
        table = spec.source_model.__table__
        stmt = select(*[table.c[name] for name in spec.columns]).order_by(table.c.ID)

        try:
            with self.source_engine.connect() as conn:
                result = conn.execute(stmt)
                # dtype=object keeps nullable integer columns as ints
                df = pd.DataFrame(result.fetchall(), columns=list(result.keys()), dtype=object)
        except SQLAlchemyError as e:
            raise ExtractionError(
                f"Failed to read {spec.source_table}: {e}",
                table_name=spec.source_table,
                original_error=e,
            )
        return clean_nulls(df)

    def write_export(self, spec: TableSpec, records: List[Dict[str, Any]]) -> Path:
        """Write records as pretty-printed JSON; creates the export dir if absent."""
        path = self.export_dir / spec.export_file
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, default=_json_default)
        except (OSError, TypeError) as e:
            raise ExtractionError(
                f"Failed to write {path}: {e}",
                table_name=spec.source_table,
                original_error=e,
            )
        return path

    def extract_table(self, spec: TableSpec) -> ExtractResult:
        """
        Extract one table to <export_dir>/<spec.export_file>.

        Raises:
            ExtractionError: on any query or file error
            RowCountMismatchError: when the count differs from spec.expected_rows
                and abort_on_count_mismatch is set (the file is still written)
        """
        logger.info(f"Extracting {spec.source_table}...")
        df = self.fetch_table(spec)
        records = df.to_dict(orient="records")
        path = self.write_export(spec, records)

        result = ExtractResult(
            table_name=spec.name,
            source_table=spec.source_table,
            path=str(path),
            row_count=len(records),
            expected_rows=spec.expected_rows,
        )
        logger.info(f"Saved {result.row_count} rows to {path}")

        if not result.count_matched:
            message = (
                f"Row count mismatch for {spec.source_table}: "
                f"expected {spec.expected_rows}, got {result.row_count}"
            )
            logger.warning(message)
            if self.abort_on_count_mismatch:
                raise RowCountMismatchError(
                    message,
                    table_name=spec.source_table,
                    expected=spec.expected_rows,
                    actual=result.row_count,
                )
        return result

    def extract_all(self, specs: List[TableSpec]) -> List[ExtractResult]:
        """Extract every table in order; the first error aborts the run."""
        logger.info("=" * 60)
        logger.info("EXTRACT: legacy tables -> JSON")
        logger.info(f"Export directory: {self.export_dir.resolve()}")
        logger.info("=" * 60)

        results = [self.extract_table(spec) for spec in specs]

        logger.info("-" * 60)
        for r in results:
            status = "OK" if r.count_matched else "MISMATCH"
            logger.info(f"  {r.source_table}: {r.row_count} rows [{status}]")
        logger.info(f"Extraction complete: {sum(r.row_count for r in results)} rows total")
        return results


def run_extract() -> List[ExtractResult]:
    """Extract all tables using the configured source database."""
    from db.db_utils import check_connection, get_source_engine
    from migration.common.config import settings
    from migration.common.logging import configure_from_settings
    from migration.tables import get_table_specs

    configure_from_settings()
    engine = None
    try:
        engine = get_source_engine(settings.SOURCE_DATABASE_URL)
        check_connection(engine, database="source")
        extractor = TableExtractor(
            engine,
            export_dir=settings.EXPORT_DIR,
            abort_on_count_mismatch=settings.ABORT_ON_COUNT_MISMATCH,
        )
        return extractor.extract_all(get_table_specs(include_logs=settings.INCLUDE_LOGS))
    except MigrationError as e:
        logger.error(f"Extraction failed: {e}")
        sys.exit(1)
    finally:
        if engine is not None:
            engine.dispose()


if __name__ == "__main__":
    run_extract()
