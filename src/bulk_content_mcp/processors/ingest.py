"""
Tabular ingestion: one file in, one ordered list of row records out.

Every call re-reads and re-parses the source; nothing is cached between calls.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..config import DEFAULT_MAX_FILE_BYTES, DEFAULT_TEXT_ENCODING
from ..errors import FileReadError, IngestionError, ValidationError
from ..safety import FileAccess, LocalFileAccess, validate_file_size
from .delimited import decode_text, parse_delimited
from .workbook import list_sheet_names, parse_workbook

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
RowSet = List[Row]


class FileKind(str, Enum):
    """Parse mode for a source file. Values match the tool-level ``fileType``."""

    WORKBOOK = "excel"
    DELIMITED_TEXT = "csv"

    @classmethod
    def coerce(cls, value: Union["FileKind", str]) -> "FileKind":
        """Accept a FileKind or its string value."""
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise ValidationError(
                f"Unsupported file type: {value!r}", hint=f"Valid choices: {choices}"
            ) from None


class TabularIngestor:
    """Reads a workbook or delimited-text file and returns its rows."""

    def __init__(
        self,
        file_access: Optional[FileAccess] = None,
        max_file_bytes: int = DEFAULT_MAX_FILE_BYTES,
        text_encoding: str = DEFAULT_TEXT_ENCODING,
    ):
        self._file_access = file_access or LocalFileAccess()
        self._max_file_bytes = max_file_bytes
        self._text_encoding = text_encoding

    async def read(self, file_path: str) -> bytes:
        """
        Read raw bytes through the file-access collaborator.

        Raises:
            FileReadError: If the read fails or the payload is too large
        """
        try:
            data = await self._file_access.read_bytes(file_path)
        except OSError as e:
            raise FileReadError(str(e)) from e
        validate_file_size(len(data), self._max_file_bytes)
        return data

    async def ingest(
        self,
        file_path: str,
        file_kind: Union[FileKind, str],
        sheet_name: Optional[str] = None,
        delimiter: Optional[str] = None,
    ) -> RowSet:
        """
        Convert one file into a RowSet.

        Args:
            file_path: Path of the file to read
            file_kind: Workbook or delimited text
            sheet_name: Sheet to read (workbooks only; first sheet if None)
            delimiter: Field separator for delimited text (guessed if None)

        Returns:
            Row records in source order

        Raises:
            ValidationError: If file_kind is not supported
            IngestionError: If reading, decoding or parsing fails
        """
        kind = FileKind.coerce(file_kind)
        logger.debug(f"Ingesting {file_path} as {kind.value}")

        try:
            data = await self.read(file_path)
            if kind is FileKind.WORKBOOK:
                rows = await asyncio.to_thread(parse_workbook, data, sheet_name)
            else:
                text = decode_text(data, self._text_encoding)
                rows = await asyncio.to_thread(parse_delimited, text, delimiter)
        except IngestionError:
            raise
        except Exception as e:
            raise IngestionError(str(e)) from e

        logger.info(f"Ingested {len(rows)} rows from {file_path}")
        return rows

    async def sheet_names(self, file_path: str) -> List[str]:
        """
        List the declared sheet names of a workbook file.

        Raises:
            IngestionError: If reading or decoding fails
        """
        try:
            data = await self.read(file_path)
            return await asyncio.to_thread(list_sheet_names, data)
        except IngestionError:
            raise
        except Exception as e:
            raise IngestionError(str(e)) from e


async def ingest(
    file_path: str,
    file_kind: Union[FileKind, str],
    sheet_name: Optional[str] = None,
    file_access: Optional[FileAccess] = None,
) -> RowSet:
    """Ingest a file with a default-configured TabularIngestor."""
    return await TabularIngestor(file_access=file_access).ingest(
        file_path, file_kind, sheet_name=sheet_name
    )
