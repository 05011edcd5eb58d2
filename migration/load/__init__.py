"""
Load stage - batch inserts into the destination database.
"""

from migration.load.loader import (
    LoadResult,
    TableLoader,
    with_supplemental_appointment_types,
    run_load,
)

__all__ = ["LoadResult", "TableLoader", "with_supplemental_appointment_types", "run_load"]
