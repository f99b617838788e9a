"""MCP server wiring for bulk-content-mcp.

Lists the declared tools and resources and serializes every tool result as JSON
text content.
"""

from __future__ import annotations

import json
import logging
from typing import Any

try:
    from mcp.server import Server
    from mcp.types import Resource, TextContent, Tool
except ImportError as exc:  # pragma: no cover
    raise ImportError("MCP library not installed. Install with: pip install mcp") from exc

from . import __version__
from .config import DEFAULT_MAX_FILE_BYTES
from .errors import BulkContentError, internal_error
from .processors.ingest import FileKind
from .safety import DELIMITED_EXTENSIONS, WORKBOOK_EXTENSIONS
from .tools import TOOL_METADATA, dispatch_tool, initialize_runtime_from_env

logger = logging.getLogger(__name__)

SERVER_NAME = "bulk-content-mcp"
SUPPORTED_FORMATS_URI = "bulk-content://supported-formats"
SERVER_STATUS_URI = "bulk-content://server-status"

server = Server(SERVER_NAME)


def _resources() -> list[Resource]:
    return [
        Resource(
            uri=SUPPORTED_FORMATS_URI,
            name="Supported Formats",
            description="File types accepted by parse_spreadsheet and their extensions",
            mimeType="application/json",
        ),
        Resource(
            uri=SERVER_STATUS_URI,
            name="Server Status",
            description="Server version, available tools and effective limits",
            mimeType="application/json",
        ),
    ]


def _tools() -> list[Tool]:
    return [
        Tool(name=name, description=meta["description"], inputSchema=meta["inputSchema"])
        for name, meta in TOOL_METADATA.items()
    ]


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    tools = _tools()
    logger.info("Listed %s tools", len(tools))
    return tools


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Execute a tool and return MCP-compliant TextContent."""
    if not isinstance(arguments, dict):
        arguments = {}

    try:
        raw_result = await dispatch_tool(name, arguments)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.error("Tool %s failed: %s", name, exc)
        raw_result = internal_error("Tool execution failed", detail=str(exc))

    content = TextContent(type="text", text=json.dumps(raw_result, indent=2, default=str))
    return [content]


@server.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return _resources()


@server.read_resource()
async def read_resource(uri: Any) -> str:
    """Read resource content."""
    uri_s = uri if isinstance(uri, str) else str(uri)
    logger.info("Resource requested: %s", uri_s)

    if uri_s == SUPPORTED_FORMATS_URI:
        formats = {
            "file_types": {
                FileKind.WORKBOOK.value: {
                    "extensions": list(WORKBOOK_EXTENSIONS),
                    "description": (
                        "Excel workbook (Office Open XML only; legacy .xls and .ods are not read); "
                        "first row is the header row"
                    ),
                    "options": ["sheet"],
                },
                FileKind.DELIMITED_TEXT.value: {
                    "extensions": list(DELIMITED_EXTENSIONS),
                    "description": "Delimited text; first line is the header, delimiter is detected",
                    "options": [],
                },
            },
            "default_max_file_size_mb": DEFAULT_MAX_FILE_BYTES // (1024 * 1024),
        }
        return json.dumps(formats, indent=2)

    if uri_s == SERVER_STATUS_URI:
        status: dict[str, Any] = {
            "server": SERVER_NAME,
            "version": __version__,
            "status": "running",
            "tools_available": len(TOOL_METADATA),
            "tool_names": sorted(TOOL_METADATA),
            "configured": False,
        }
        try:
            runtime = initialize_runtime_from_env()
            status["configured"] = True
            status["limits"] = {
                "max_file_bytes": runtime.config.max_file_bytes,
                "text_encoding": runtime.config.text_encoding,
            }
        except BulkContentError as err:
            status["config_error"] = err.message

        return json.dumps(status, indent=2)

    return json.dumps({"ok": False, "code": "NotFound", "message": "Unknown resource"}, indent=2)


async def run_server() -> None:
    """Run the server over stdio."""
    # Fail fast on invalid host configuration.
    try:
        _ = initialize_runtime_from_env()
    except BulkContentError as exc:
        logger.error("Startup configuration error: %s", exc.message)
        raise

    from mcp.server.stdio import stdio_server

    logger.info("Starting %s %s", SERVER_NAME, __version__)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        logger.info("%s stopped", SERVER_NAME)


async def test_server() -> None:
    """Lightweight self-test to ensure tool/resource listing works."""
    tools = _tools()
    resources = _resources()
    logger.info("Self-test ok: %s tools, %s resources", len(tools), len(resources))
