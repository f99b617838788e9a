"""
Safety utilities for file access and validation.
Provides the file-access collaborator used by the ingestor plus size and name checks.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol

from .config import DEFAULT_MAX_FILE_BYTES
from .errors import FileReadError, ValidationError

logger = logging.getLogger(__name__)

WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm", ".xltx", ".xltm")
DELIMITED_EXTENSIONS = (".csv", ".tsv", ".txt")


class FileAccess(Protocol):
    """Reads raw bytes for a path. Injected into the ingestor."""

    async def read_bytes(self, file_path: str) -> bytes: ...


class LocalFileAccess:
    """File access backed by the local filesystem.

    The blocking read runs in a worker thread so the event loop keeps serving
    other tool calls while I/O is outstanding.
    """

    async def read_bytes(self, file_path: str) -> bytes:
        data = await asyncio.to_thread(Path(file_path).read_bytes)
        logger.debug(f"Read {len(data)} bytes from {file_path}")
        return data


def validate_file_path(file_path: str) -> str:
    """
    Validate the shape of a file path argument.

    Existence is not checked here; a missing file surfaces from the read itself.

    Raises:
        ValidationError: If path is not a non-empty string
    """
    if not file_path or not isinstance(file_path, str):
        raise ValidationError("File path must be a non-empty string")
    if "\x00" in file_path:
        raise ValidationError("File path must not contain NUL characters")
    return file_path


def validate_file_size(size: int, max_size: Optional[int] = None) -> None:
    """
    Validate that a payload size is within acceptable limits.

    Args:
        size: Size in bytes of the data read
        max_size: Maximum size in bytes (default: DEFAULT_MAX_FILE_BYTES)

    Raises:
        FileReadError: If the payload is too large
    """
    max_size = max_size or DEFAULT_MAX_FILE_BYTES
    if size > max_size:
        raise FileReadError(f"File too large: {size} bytes (max: {max_size} bytes)")


def validate_sheet_name(sheet_name: str) -> str:
    """
    Validate worksheet name according to Excel rules.

    Raises:
        ValidationError: If name is invalid
    """
    if not sheet_name or not isinstance(sheet_name, str):
        raise ValidationError("Sheet name must be a non-empty string")

    if len(sheet_name) > 31:
        raise ValidationError("Sheet name cannot exceed 31 characters")

    # Excel forbidden characters
    forbidden_chars = ["\\", "/", "?", "*", "[", "]", ":"]
    for char in forbidden_chars:
        if char in sheet_name:
            raise ValidationError(
                f"Sheet name cannot contain '{char}'. "
                f"Forbidden characters: {', '.join(forbidden_chars)}"
            )

    return sheet_name
