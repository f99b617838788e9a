"""Entry point scaffolding for bulk-content-mcp."""

from __future__ import annotations

import sys

import pytest

import bulk_content_mcp.__main__ as entry


def test_parse_args_defaults() -> None:
    args = entry.parse_args([])

    assert args.debug is False
    assert args.test is False


def test_parse_args_flags() -> None:
    args = entry.parse_args(["--debug", "--test"])

    assert args.debug is True
    assert args.test is True


def test_main_test_flag_runs_self_test(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    async def fake_test_server() -> None:
        calls.append("test")

    async def fake_run_server() -> None:
        calls.append("run")

    monkeypatch.setattr(entry, "test_server", fake_test_server)
    monkeypatch.setattr(entry, "run_server", fake_run_server)
    monkeypatch.setattr(sys, "argv", ["bulk_content_mcp", "--test"])

    entry.main()

    assert calls == ["test"]


def test_main_exits_nonzero_when_server_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    async def failing_run_server() -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(entry, "run_server", failing_run_server)
    monkeypatch.setattr(sys, "argv", ["bulk_content_mcp"])

    with pytest.raises(SystemExit) as exc:
        entry.main()

    assert exc.value.code == 1


@pytest.mark.asyncio
async def test_real_self_test_completes() -> None:
    await entry.test_server()
