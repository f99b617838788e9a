"""Utility modules for the bulk content MCP server."""

from .validation import (
    validate_choice_param,
    validate_datetime_param,
    validate_dict_param,
    validate_list_param,
    validate_required_params,
    validate_string_param,
    validate_unknown_params,
)

__all__ = [
    "validate_required_params",
    "validate_unknown_params",
    "validate_string_param",
    "validate_list_param",
    "validate_choice_param",
    "validate_dict_param",
    "validate_datetime_param",
]
