"""Configuration loading for bulk-content-mcp.

Configuration is supplied by the host environment (the MCP client config), not by
the agent calling tools.
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_MAX_FILE_BYTES = 200 * 1024 * 1024  # 200MB
DEFAULT_TEXT_ENCODING = "utf-8"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Host-controlled server settings."""

    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    text_encoding: str = DEFAULT_TEXT_ENCODING
    debug: bool = False


def parse_bool(value: str | None) -> bool:
    if value is None:
        return False
    normalized = value.strip().lower()
    return normalized in {"1", "true", "yes", "on"}


def _parse_max_bytes(value: str | None) -> int:
    if value is None or not value.strip():
        return DEFAULT_MAX_FILE_BYTES
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ConfigError("BULK_CONTENT_MCP_MAX_FILE_BYTES must be an integer") from exc
    if parsed <= 0:
        raise ConfigError("BULK_CONTENT_MCP_MAX_FILE_BYTES must be greater than zero")
    return parsed


def _parse_encoding(value: str | None) -> str:
    if value is None or not value.strip():
        return DEFAULT_TEXT_ENCODING
    name = value.strip()
    try:
        codecs.lookup(name)
    except LookupError as exc:
        raise ConfigError(
            f"Unknown text encoding: {name}",
            hint="Use a Python codec name such as utf-8 or latin-1",
        ) from exc
    return name


def load_config_from_env() -> AppConfig:
    """Load and validate configuration from environment variables.

    Raises:
        ConfigError: If a variable is set to an invalid value.
    """
    return AppConfig(
        max_file_bytes=_parse_max_bytes(os.getenv("BULK_CONTENT_MCP_MAX_FILE_BYTES")),
        text_encoding=_parse_encoding(os.getenv("BULK_CONTENT_MCP_TEXT_ENCODING")),
        debug=parse_bool(os.getenv("BULK_CONTENT_MCP_DEBUG")),
    )
