"""
Core processing modules for tabular ingestion.
"""

from .ingest import FileKind, Row, RowSet, TabularIngestor, ingest
from .summary import summarize_rows

__all__ = [
    "FileKind",
    "Row",
    "RowSet",
    "TabularIngestor",
    "ingest",
    "summarize_rows",
]
