"""
Extract stage - legacy tables to JSON export files.
"""

from migration.extract.extractor import (
    ExtractResult,
    TableExtractor,
    read_export,
    run_extract,
)

__all__ = ["ExtractResult", "TableExtractor", "read_export", "run_extract"]
