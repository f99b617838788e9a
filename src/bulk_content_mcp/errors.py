"""
Error taxonomy and response envelopes for the bulk content MCP server.
Every tool result is a dict with an ``ok`` flag; failures carry a stable ``code``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

DETAIL_MAX_CHARS = 160


def to_error_result(
    *, code: str, message: str, hint: Optional[str] = None, **kwargs: Any
) -> dict[str, Any]:
    """Build a standard tool error envelope."""
    out: dict[str, Any] = {"ok": False, "code": code, "message": message}
    if hint:
        out["hint"] = hint
    if kwargs:
        out.update(kwargs)
    return out


def user_input_error(message: str, hint: Optional[str] = None, **kwargs: Any) -> dict[str, Any]:
    """Return a structured UserInput error response."""
    return to_error_result(code="UserInput", message=message, hint=hint, **kwargs)


def internal_error(
    message: str, detail: Optional[str] = None, **kwargs: Any
) -> dict[str, Any]:
    """Return a structured Internal error response."""
    error = to_error_result(code="Internal", message=message, **kwargs)
    if detail:
        error["detail"] = detail[:DETAIL_MAX_CHARS]
        logger.error(f"Internal error: {message} - {detail}")
    return error


def success_response(data: Any, **kwargs: Any) -> dict[str, Any]:
    """Return a structured success response."""
    response = {"ok": True, "data": data}
    if kwargs:
        response.update(kwargs)
    return response


class BulkContentError(Exception):
    """Base exception for errors that are safe to report to MCP clients."""

    code = "Internal"

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_result(self) -> dict[str, Any]:
        """Convert the error into the standard tool envelope."""
        return to_error_result(code=self.code, message=self.message, hint=self.hint)


class ValidationError(BulkContentError):
    """Raised when tool arguments or ingest parameters are invalid."""

    code = "UserInput"


class ConfigError(BulkContentError):
    """Raised when host configuration is missing or invalid."""

    code = "Config"


class NotImplementedToolError(BulkContentError):
    """Raised by tools that are declared but carry no behavior yet."""

    code = "NotImplemented"


class IngestionError(BulkContentError):
    """Any failure while reading, decoding or parsing a tabular file.

    The message always reads ``Error parsing file: <original message>``.
    """

    code = "ParseError"
    kind = "parse"

    def __init__(self, detail: str, hint: Optional[str] = None):
        super().__init__(f"Error parsing file: {detail}", hint=hint)
        self.detail = detail

    def to_result(self) -> dict[str, Any]:
        return to_error_result(
            code=self.code, message=self.message, hint=self.hint, kind=self.kind
        )


class FileReadError(IngestionError):
    """The file could not be read (missing, unreadable, too large)."""

    kind = "read"


class WorkbookDecodeError(IngestionError):
    """The bytes are not a readable workbook container."""

    kind = "decode"


class DelimitedParseError(IngestionError):
    """The delimited text is malformed (e.g. inconsistent quoting)."""

    kind = "parse"


class SheetNotFoundError(IngestionError):
    """The requested sheet does not exist in the workbook."""

    code = "UserInput"
    kind = "sheet"
