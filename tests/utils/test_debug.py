"""Tests for the CHIP8_DEBUG logging helpers."""

from __future__ import annotations

import pytest

from pychip8.utils import debug, debug_enabled, debug_log


@pytest.fixture(autouse=True)
def _reset_categories(monkeypatch):
    monkeypatch.setattr(debug, "_CATEGORIES", None)


def test_disabled_without_environment(monkeypatch, capsys) -> None:
    monkeypatch.delenv("CHIP8_DEBUG", raising=False)

    assert debug_enabled("cpu") is False
    debug_log("cpu", "pc=%03x", 0x200)
    assert capsys.readouterr().out == ""


def test_selected_categories(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "CPU, loader")

    assert debug_enabled("cpu")
    assert debug_enabled("loader")
    assert not debug_enabled("input")

    debug_log("cpu", "pc=%03x", 0x200)
    assert capsys.readouterr().out.strip() == "[CHIP8][cpu] pc=200"


def test_all_category(monkeypatch) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "all")

    assert debug_enabled("perf")
    assert debug_enabled()


def test_bad_format_arguments_are_appended(monkeypatch, capsys) -> None:
    monkeypatch.setenv("CHIP8_DEBUG", "cpu")

    debug_log("cpu", "value=%d", "x")

    assert "value=%d ('x',)" in capsys.readouterr().out
