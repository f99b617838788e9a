"""
Delimited-text parsing for the tabular ingestor.

Header line defines the columns, values are dynamically typed and fully empty
lines are skipped.
"""

import csv
import io
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..errors import DelimitedParseError

logger = logging.getLogger(__name__)

CANDIDATE_DELIMITERS = ",;\t|\x1e\x1f"
DEFAULT_DELIMITER = ","
EXTRA_FIELDS_KEY = "__parsed_extra"
SNIFF_SAMPLE_CHARS = 8192
MAX_SAFE_NUMBER = 2**53

_INT_RE = re.compile(r"^\s*-?\d+\s*$")
_FLOAT_RE = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")
_ISO_DATETIME_RE = re.compile(
    r"^\d{4}-[01]\d-[0-3]\dT[0-2]\d:[0-5]\d(:[0-5]\d(\.\d+)?)?([+-][0-2]\d:[0-5]\d|Z)$"
)


def decode_text(data: bytes, encoding: str = "utf-8") -> str:
    """Decode bytes as text, replacing invalid sequences and dropping a leading BOM."""
    text = data.decode(encoding, errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]
    return text


def convert_value(value: str) -> Any:
    """Best-effort dynamic typing of a single field."""
    if value in ("true", "TRUE"):
        return True
    if value in ("false", "FALSE"):
        return False
    if value == "":
        return None
    if _INT_RE.match(value):
        # Only integers inside the exact double range are converted.
        digits = value.strip().lstrip("-").lstrip("0")
        if len(digits) > len(str(MAX_SAFE_NUMBER)):
            return value
        number = int(value)
        return number if -MAX_SAFE_NUMBER < number < MAX_SAFE_NUMBER else value
    if _FLOAT_RE.match(value):
        number = float(value)
        return number if -MAX_SAFE_NUMBER < number < MAX_SAFE_NUMBER else value
    if _ISO_DATETIME_RE.match(value):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value


def _is_empty_row(row: Sequence[str]) -> bool:
    return len(row) == 0 or (len(row) == 1 and row[0] == "")


def _read_rows(text: str, delimiter: str) -> List[List[str]]:
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    return [row for row in reader if not _is_empty_row(row)]


def guess_delimiter(text: str) -> str:
    """Sniff the delimiter from the start of the text, falling back to a comma."""
    try:
        dialect = csv.Sniffer().sniff(text[:SNIFF_SAMPLE_CHARS], delimiters=CANDIDATE_DELIMITERS)
    except csv.Error:
        return DEFAULT_DELIMITER
    return dialect.delimiter


def build_headers(header_row: Sequence[str]) -> List[str]:
    """Column names from the header line; repeated names get a _N suffix."""
    headers: List[str] = []
    counts: Dict[str, int] = {}
    for name in header_row:
        if name in counts:
            counts[name] += 1
            candidate = f"{name}_{counts[name]}"
            while candidate in counts:
                counts[name] += 1
                candidate = f"{name}_{counts[name]}"
            counts[candidate] = 0
            name = candidate
        else:
            counts[name] = 0
        headers.append(name)
    return headers


def parse_delimited(text: str, delimiter: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Parse delimited text into row records.

    Args:
        text: Decoded file content
        delimiter: Field separator (guessed from the content if None)

    Returns:
        Row records keyed by header names, in line order

    Raises:
        DelimitedParseError: If the text is malformed (e.g. bad quoting)
    """
    delimiter = delimiter or guess_delimiter(text)

    try:
        rows = _read_rows(text, delimiter)
    except csv.Error as e:
        raise DelimitedParseError(str(e)) from e

    if not rows:
        return []

    headers = build_headers(rows[0])
    records: List[Dict[str, Any]] = []
    for row in rows[1:]:
        record: Dict[str, Any] = {}
        for idx, value in enumerate(row):
            if idx < len(headers):
                record[headers[idx]] = convert_value(value)
            else:
                record.setdefault(EXTRA_FIELDS_KEY, []).append(convert_value(value))
        records.append(record)

    logger.info(f"Parsed {len(records)} rows with delimiter {delimiter!r}")
    return records
