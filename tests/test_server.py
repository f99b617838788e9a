"""Smoke tests for the MCP server wiring."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import bulk_content_mcp.tools as tools
from bulk_content_mcp.server import (
    SERVER_STATUS_URI,
    SUPPORTED_FORMATS_URI,
    call_tool,
    list_resources,
    list_tools,
    read_resource,
)


@pytest.mark.asyncio
async def test_server_lists_all_declared_tools() -> None:
    listed = await list_tools()

    assert {t.name for t in listed} == set(tools.TOOL_METADATA)
    assert all(t.inputSchema["type"] == "object" for t in listed)


@pytest.mark.asyncio
async def test_server_lists_resources() -> None:
    resources = await list_resources()

    assert {r.name for r in resources} == {"Supported Formats", "Server Status"}
    assert all(r.mimeType == "application/json" for r in resources)


@pytest.mark.asyncio
async def test_call_tool_returns_json_text(monkeypatch: pytest.MonkeyPatch, sample_csv: Path) -> None:
    monkeypatch.setattr(tools, "_RUNTIME", None)

    content = await call_tool("parse_spreadsheet", {"filePath": str(sample_csv), "fileType": "csv"})

    assert len(content) == 1
    assert content[0].type == "text"
    payload = json.loads(content[0].text)
    assert payload["ok"] is True
    assert payload["row_count"] == 2


@pytest.mark.asyncio
async def test_call_tool_tolerates_non_dict_arguments() -> None:
    content = await call_tool("parse_spreadsheet", None)  # type: ignore[arg-type]

    payload = json.loads(content[0].text)
    assert payload["ok"] is False
    assert payload["code"] == "UserInput"


@pytest.mark.asyncio
async def test_read_supported_formats() -> None:
    formats = json.loads(await read_resource(SUPPORTED_FORMATS_URI))

    assert set(formats["file_types"]) == {"excel", "csv"}
    assert ".xlsx" in formats["file_types"]["excel"]["extensions"]
    assert formats["default_max_file_size_mb"] == 200
    assert ".xls" not in formats["file_types"]["excel"]["extensions"]
    assert ".ods" in formats["file_types"]["excel"]["description"]


@pytest.mark.asyncio
async def test_read_server_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tools, "_RUNTIME", None)
    monkeypatch.setenv("BULK_CONTENT_MCP_MAX_FILE_BYTES", "2048")

    status = json.loads(await read_resource(SERVER_STATUS_URI))

    assert status["configured"] is True
    assert status["limits"]["max_file_bytes"] == 2048
    assert "parse_spreadsheet" in status["tool_names"]


@pytest.mark.asyncio
async def test_read_server_status_with_bad_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tools, "_RUNTIME", None)
    monkeypatch.setenv("BULK_CONTENT_MCP_TEXT_ENCODING", "no-such-codec")

    status = json.loads(await read_resource(SERVER_STATUS_URI))

    assert status["configured"] is False
    assert "no-such-codec" in status["config_error"]


@pytest.mark.asyncio
async def test_read_unknown_resource() -> None:
    out = json.loads(await read_resource("bulk-content://nope"))

    assert out["code"] == "NotFound"
