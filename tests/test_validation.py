from __future__ import annotations

import pytest

from bulk_content_mcp import safety
from bulk_content_mcp.errors import FileReadError, ValidationError
from bulk_content_mcp.utils import validation as v


def test_validation_helpers_cover_common_paths():
    v.validate_required_params({"a": 1}, {"a"})
    with pytest.raises(ValidationError) as exc:
        v.validate_required_params({"a": 1}, {"a", "b"})
    assert exc.value.hint == "Required parameters are: a, b"

    v.validate_unknown_params({"a": 1}, {"a"})
    with pytest.raises(ValidationError):
        v.validate_unknown_params({"a": 1, "x": 2}, {"a"})

    assert v.validate_string_param("ok", "s") == "ok"
    assert v.validate_list_param(["a", "b"], "l", item_type=str) == ["a", "b"]
    assert v.validate_choice_param("x", "c", ["x", "y"]) == "x"
    assert v.validate_dict_param({"k": 1}, "d", required_keys={"k"}, allowed_keys={"k"}) == {"k": 1}
    assert v.validate_datetime_param("2024-05-01T09:00:00Z", "when") == "2024-05-01T09:00:00Z"


def test_validation_more_branches():
    with pytest.raises(ValidationError):
        v.validate_string_param(None, "s", required=True)
    assert v.validate_string_param(None, "s", required=False) is None
    with pytest.raises(ValidationError):
        v.validate_string_param("xxx", "s", max_length=2)

    assert v.validate_list_param(None, "l", required=False) is None
    with pytest.raises(ValidationError):
        v.validate_list_param([], "l", min_length=1)
    with pytest.raises(ValidationError):
        v.validate_list_param(["a", "b"], "l", max_length=1)
    with pytest.raises(ValidationError):
        v.validate_list_param(["a", 2], "l", item_type=str)

    assert v.validate_choice_param(None, "c", ["a"], required=False, default="a") == "a"
    with pytest.raises(ValidationError):
        v.validate_choice_param("x", "c", ["a", "b"])

    with pytest.raises(ValidationError):
        v.validate_dict_param([], "d")
    with pytest.raises(ValidationError):
        v.validate_dict_param({"x": 1}, "d", required_keys={"k"})
    with pytest.raises(ValidationError):
        v.validate_dict_param({"x": 1}, "d", allowed_keys={"k"})

    assert v.validate_datetime_param(None, "when", required=False) is None
    with pytest.raises(ValidationError):
        v.validate_datetime_param("05/01/2024", "when")


def test_safety_checks():
    assert safety.validate_file_path("data.csv") == "data.csv"
    with pytest.raises(ValidationError):
        safety.validate_file_path("")
    with pytest.raises(ValidationError):
        safety.validate_file_path("a\x00b")

    safety.validate_file_size(10, max_size=10)
    with pytest.raises(FileReadError):
        safety.validate_file_size(11, max_size=10)

    assert safety.validate_sheet_name("Sheet 1") == "Sheet 1"
    with pytest.raises(ValidationError):
        safety.validate_sheet_name("x" * 32)
    with pytest.raises(ValidationError):
        safety.validate_sheet_name("a:b")


@pytest.mark.asyncio
async def test_local_file_access_reads_bytes(tmp_path):
    path = tmp_path / "f.bin"
    path.write_bytes(b"\x00\x01")

    assert await safety.LocalFileAccess().read_bytes(str(path)) == b"\x00\x01"
