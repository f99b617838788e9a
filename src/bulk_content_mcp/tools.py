"""Tool registry and dispatch layer.

This module:
- declares the tools and their input schemas (public contract surface)
- validates arguments against those schemas before any handler runs
- builds a per-server runtime from host-provided config
- turns handler results and errors into ``{"ok": ...}`` envelopes
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Awaitable, Callable

from .config import AppConfig, load_config_from_env
from .errors import (
    BulkContentError,
    NotImplementedToolError,
    ValidationError,
    internal_error,
    success_response,
)
from .processors.ingest import FileKind, TabularIngestor
from .processors.summary import summarize_rows
from .safety import validate_file_path, validate_sheet_name
from .utils.validation import (
    validate_choice_param,
    validate_datetime_param,
    validate_dict_param,
    validate_list_param,
    validate_required_params,
    validate_string_param,
    validate_unknown_params,
)

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ["png", "jpg", "pdf"]

_SPREADSHEET_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["filePath", "fileType"],
    "properties": {
        "filePath": {"type": "string", "minLength": 1, "description": "Path to the data file"},
        "fileType": {
            "type": "string",
            "enum": [kind.value for kind in FileKind],
            "description": "Type of file",
        },
        "sheet": {"type": "string", "description": "Sheet name (for Excel)"},
    },
    "additionalProperties": False,
}

TOOL_METADATA: dict[str, dict[str, Any]] = {
    "parse_spreadsheet": {
        "description": "Parse Excel or CSV files for content generation",
        "inputSchema": _SPREADSHEET_SCHEMA,
    },
    "inspect_spreadsheet": {
        "description": "Summarize the columns and rows of an Excel or CSV file",
        "inputSchema": _SPREADSHEET_SCHEMA,
    },
    "create_template": {
        "description": "Create a new Canva template for content generation",
        "inputSchema": {
            "type": "object",
            "required": ["type", "elements"],
            "properties": {
                "type": {
                    "type": "string",
                    "enum": ["social", "presentation", "document"],
                    "description": "Type of template",
                },
                "elements": {
                    "type": "array",
                    "description": "Template elements",
                    "items": {
                        "type": "object",
                        "properties": {
                            "type": {"type": "string", "enum": ["text", "image", "shape"]},
                            "properties": {"type": "object"},
                        },
                    },
                },
            },
            "additionalProperties": False,
        },
    },
    "generate_content": {
        "description": "Generate multiple designs using template and data",
        "inputSchema": {
            "type": "object",
            "required": ["templateId", "data"],
            "properties": {
                "templateId": {"type": "string", "minLength": 1, "description": "Template ID"},
                "data": {
                    "type": "array",
                    "items": {"type": "object"},
                    "description": "Array of data objects",
                },
                "outputFormat": {
                    "type": "string",
                    "enum": OUTPUT_FORMATS,
                    "description": "Output format",
                },
            },
            "additionalProperties": False,
        },
    },
    "export_designs": {
        "description": "Export generated designs in bulk",
        "inputSchema": {
            "type": "object",
            "required": ["designs", "format", "outputDir"],
            "properties": {
                "designs": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of design IDs",
                },
                "format": {"type": "string", "enum": OUTPUT_FORMATS, "description": "Export format"},
                "outputDir": {"type": "string", "minLength": 1, "description": "Output directory"},
            },
            "additionalProperties": False,
        },
    },
    "schedule_posts": {
        "description": "Schedule content for social media posting",
        "inputSchema": {
            "type": "object",
            "required": ["designs", "platforms", "schedule"],
            "properties": {
                "designs": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of design IDs",
                },
                "platforms": {
                    "type": "array",
                    "items": {
                        "type": "string",
                        "enum": ["instagram", "facebook", "twitter", "linkedin"],
                    },
                    "description": "Target platforms",
                },
                "schedule": {
                    "type": "object",
                    "properties": {
                        "startDate": {"type": "string", "format": "date-time"},
                        "frequency": {"type": "string", "enum": ["daily", "weekly", "custom"]},
                    },
                },
            },
            "additionalProperties": False,
        },
    },
}

_ITEM_TYPES: dict[str, type] = {"string": str, "object": dict, "array": list}


@dataclass(frozen=True, slots=True)
class Runtime:
    """Per-server dependencies shared across tool calls."""

    config: AppConfig
    ingestor: TabularIngestor


_RUNTIME: Runtime | None = None


def new_correlation_id() -> str:
    """Generate a random correlation id for tracing one tool call through the logs."""
    return uuid.uuid4().hex


def initialize_runtime_from_env() -> Runtime:
    """Initialize and cache runtime from environment.

    Called at server startup (fail-fast), and lazily on the first tool call.
    """
    global _RUNTIME  # pylint: disable=global-statement
    if _RUNTIME is not None:
        return _RUNTIME

    config = load_config_from_env()
    ingestor = TabularIngestor(
        max_file_bytes=config.max_file_bytes,
        text_encoding=config.text_encoding,
    )
    _RUNTIME = Runtime(config=config, ingestor=ingestor)
    return _RUNTIME


def _validate_value(value: Any, spec: dict[str, Any], name: str, required: bool) -> None:
    """Validate one value against a declared property schema."""
    expected = spec.get("type")

    if expected == "string":
        if "enum" in spec:
            validate_choice_param(value, name, spec["enum"], required=required)
        elif spec.get("format") == "date-time":
            validate_datetime_param(value, name, required=required)
        else:
            validate_string_param(value, name, required=required, min_length=spec.get("minLength", 0))

    elif expected == "array":
        items = spec.get("items", {})
        item_type = _ITEM_TYPES.get(items.get("type"), object)
        values = validate_list_param(value, name, required=required, item_type=item_type)
        for i, item in enumerate(values or []):
            _validate_value(item, items, f"{name}[{i}]", required=True)

    elif expected == "object":
        props: dict[str, Any] = spec.get("properties", {})
        allowed = set(props) if spec.get("additionalProperties") is False else None
        obj = validate_dict_param(
            value,
            name,
            required=required,
            required_keys=set(spec.get("required", [])),
            allowed_keys=allowed,
        )
        if obj:
            for key, prop in props.items():
                if key in obj:
                    _validate_value(obj[key], prop, f"{name}.{key}", required=True)


def validate_tool_arguments(tool_name: str, arguments: dict[str, Any]) -> None:
    """Validate tool arguments against the tool's declared input schema.

    Enforces required fields, no extra top-level fields, basic JSON types,
    enums, string minLength, nested array items and object properties, and
    the ``date-time`` string format.

    Raises:
        ValidationError: If the tool is unknown or an argument is invalid
    """
    if tool_name not in TOOL_METADATA:
        raise ValidationError(
            f"Unknown tool: {tool_name}",
            hint=f"Available tools: {', '.join(sorted(TOOL_METADATA))}",
        )

    schema = TOOL_METADATA[tool_name]["inputSchema"]
    props: dict[str, Any] = schema.get("properties", {})
    required = set(schema.get("required", []))

    validate_required_params(arguments, required)
    if schema.get("additionalProperties") is False:
        validate_unknown_params(arguments, set(props))

    for key, spec in props.items():
        if key in arguments:
            _validate_value(arguments[key], spec, key, required=key in required)


def to_jsonable(value: Any) -> Any:
    """Render dates as ISO-8601 strings, recursing into lists and dicts."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    return value


def _spreadsheet_args(arguments: dict[str, Any]) -> tuple[str, FileKind, str | None]:
    file_path = validate_file_path(arguments["filePath"])
    kind = FileKind.coerce(arguments["fileType"])
    sheet = arguments.get("sheet")
    if kind is FileKind.WORKBOOK and sheet:
        sheet = validate_sheet_name(sheet)
    else:
        sheet = None
    return file_path, kind, sheet


async def _tool_parse_spreadsheet(runtime: Runtime, arguments: dict[str, Any]) -> dict[str, Any]:
    file_path, kind, sheet = _spreadsheet_args(arguments)
    rows = await runtime.ingestor.ingest(file_path, kind, sheet_name=sheet)
    return success_response(to_jsonable(rows), row_count=len(rows))


async def _tool_inspect_spreadsheet(runtime: Runtime, arguments: dict[str, Any]) -> dict[str, Any]:
    file_path, kind, sheet = _spreadsheet_args(arguments)
    rows = await runtime.ingestor.ingest(file_path, kind, sheet_name=sheet)
    stats = summarize_rows(rows)

    result: dict[str, Any] = {
        "file_type": kind.value,
        "columns": stats["column_names"],
        "row_count": len(rows),
        "statistics": to_jsonable(stats),
    }
    if kind is FileKind.WORKBOOK:
        result["sheet_names"] = await runtime.ingestor.sheet_names(file_path)
    return success_response(result)


def _not_implemented(tool_name: str) -> Callable[[Runtime, dict[str, Any]], Awaitable[dict[str, Any]]]:
    async def handler(_runtime: Runtime, _arguments: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedToolError(
            f"Tool '{tool_name}' is declared but not implemented",
            hint="parse_spreadsheet and inspect_spreadsheet are available",
        )

    return handler


_TOOL_FUNCS: dict[str, Callable[[Runtime, dict[str, Any]], Awaitable[dict[str, Any]]]] = {
    "parse_spreadsheet": _tool_parse_spreadsheet,
    "inspect_spreadsheet": _tool_inspect_spreadsheet,
    "create_template": _not_implemented("create_template"),
    "generate_content": _not_implemented("generate_content"),
    "export_designs": _not_implemented("export_designs"),
    "schedule_posts": _not_implemented("schedule_posts"),
}


async def dispatch_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Dispatch a tool call.

    Always returns an envelope that includes correlation_id; exceptions never escape.
    """
    correlation_id = new_correlation_id()
    logger.info("Tool called: %s correlation_id=%s", name, correlation_id)

    try:
        runtime = initialize_runtime_from_env()
        validate_tool_arguments(name, arguments)

        func = _TOOL_FUNCS.get(name)
        if func is None:
            raise NotImplementedToolError(f"Tool not implemented: {name}")

        out = await func(runtime, arguments)

    except BulkContentError as err:
        logger.warning("Tool %s failed code=%s: %s", name, err.code, err.message)
        out = err.to_result()

    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.exception("Tool %s failed with unexpected exception", name)
        out = internal_error("Tool execution failed", detail=str(exc))

    out["correlation_id"] = correlation_id
    logger.info("Tool %s completed ok=%s code=%s", name, out.get("ok"), out.get("code", ""))
    return out
