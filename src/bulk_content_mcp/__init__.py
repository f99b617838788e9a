"""
Bulk Content MCP Server

An MCP server that turns spreadsheets (Excel workbooks and CSV files) into row
records for bulk content generation.
"""

__version__ = "0.1.0"

from .processors.ingest import FileKind, TabularIngestor, ingest

__all__ = ["FileKind", "TabularIngestor", "ingest", "__version__"]
