"""
Workbook decoding for the tabular ingestor.
Turns the bytes of an Excel workbook into row records using openpyxl.
"""

import io
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

import openpyxl
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..errors import SheetNotFoundError, WorkbookDecodeError

logger = logging.getLogger(__name__)

EMPTY_HEADER = "__EMPTY"


def load_workbook_bytes(data: bytes) -> Workbook:
    """
    Decode workbook bytes.

    Formula cells yield their cached values and date cells come back as
    ``datetime`` objects.

    Raises:
        WorkbookDecodeError: If the bytes are not a readable workbook
    """
    try:
        return openpyxl.load_workbook(io.BytesIO(data), data_only=True)
    except Exception as e:
        raise WorkbookDecodeError(f"Failed to load workbook: {e}") from e


def select_worksheet(workbook: Workbook, sheet_name: Optional[str] = None) -> Worksheet:
    """
    Pick the requested sheet, or the first declared sheet when none (or an empty name) is given.

    Raises:
        SheetNotFoundError: If the named sheet does not exist
    """
    if not sheet_name:
        return workbook[workbook.sheetnames[0]]

    if sheet_name not in workbook.sheetnames:
        raise SheetNotFoundError(
            f"Sheet '{sheet_name}' not found",
            hint=f"Available sheets: {', '.join(workbook.sheetnames)}",
        )
    return workbook[sheet_name]


def build_headers(header_row: Sequence[Any]) -> List[str]:
    """Column names from the header row: blanks become __EMPTY, duplicates get _N."""
    headers: List[str] = []
    seen: Dict[str, int] = {}
    for value in header_row:
        name = EMPTY_HEADER if value is None or value == "" else str(value)
        if name in seen:
            seen[name] += 1
            candidate = f"{name}_{seen[name]}"
            while candidate in seen:
                seen[name] += 1
                candidate = f"{name}_{seen[name]}"
            seen[candidate] = 0
            name = candidate
        else:
            seen[name] = 0
        headers.append(name)
    return headers


def rows_to_records(rows: Iterable[Sequence[Any]]) -> List[Dict[str, Any]]:
    """
    Convert a grid of cell values to row records.

    The first row supplies column names. Empty cells are left out of a record
    and rows without any value are skipped.
    """
    iterator = iter(rows)
    try:
        headers = build_headers(next(iterator))
    except StopIteration:
        return []

    records: List[Dict[str, Any]] = []
    for row in iterator:
        record = {
            headers[idx]: value
            for idx, value in enumerate(row)
            if idx < len(headers) and value is not None
        }
        if record:
            records.append(record)
    return records


def read_worksheet_rows(worksheet: Worksheet) -> List[Dict[str, Any]]:
    """Read the used range of a worksheet as row records."""
    cells = worksheet.iter_rows(
        min_row=worksheet.min_row,
        max_row=worksheet.max_row,
        min_col=worksheet.min_column,
        max_col=worksheet.max_column,
        values_only=True,
    )
    return rows_to_records(cells)


def parse_workbook(data: bytes, sheet_name: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Parse workbook bytes into row records for one sheet.

    Args:
        data: Raw workbook bytes
        sheet_name: Sheet to read (first declared sheet if None)

    Returns:
        Row records in sheet order

    Raises:
        WorkbookDecodeError: If decoding fails
        SheetNotFoundError: If the sheet does not exist
    """
    workbook = load_workbook_bytes(data)
    try:
        worksheet = select_worksheet(workbook, sheet_name)
        records = read_worksheet_rows(worksheet)
        logger.info(f"Parsed {len(records)} rows from sheet '{worksheet.title}'")
        return records
    finally:
        workbook.close()


def list_sheet_names(data: bytes) -> List[str]:
    """Return the declared sheet names of a workbook, in order."""
    workbook = load_workbook_bytes(data)
    try:
        return list(workbook.sheetnames)
    finally:
        workbook.close()
