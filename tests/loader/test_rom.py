"""Tests for the raw ROM loader."""

from __future__ import annotations

import io

import pytest

from pychip8.bus import Memory, PROGRAM_START
from pychip8.loader import (
    MAX_ROM_SIZE,
    RomFormatError,
    load_rom,
    load_rom_from_path,
    load_rom_from_stream,
)


def test_load_rom_places_bytes_at_program_start() -> None:
    memory = Memory()
    payload = bytes([0xA2, 0x2A, 0x60, 0x0C, 0x61, 0x08])

    loaded = load_rom(payload, memory)

    assert loaded == payload
    assert memory.load_block(PROGRAM_START, len(payload)) == payload
    assert memory.load8(PROGRAM_START - 1) == 0x00
    assert memory.load8(PROGRAM_START + len(payload)) == 0x00


def test_load_rom_accepts_largest_image() -> None:
    memory = Memory()
    payload = bytes(range(256)) * (MAX_ROM_SIZE // 256)

    load_rom(payload, memory)

    assert MAX_ROM_SIZE == 0xE00
    assert memory.load8(0xFFF) == 0xFF


def test_oversized_rom_is_rejected_without_writing() -> None:
    memory = Memory()

    with pytest.raises(RomFormatError):
        load_rom(b"\x11" * (MAX_ROM_SIZE + 1), memory)

    assert memory.load8(PROGRAM_START) == 0x00


def test_empty_rom_loads_nothing() -> None:
    memory = Memory()

    loaded = load_rom(b"", memory)

    assert loaded == b""
    assert memory.load_block(PROGRAM_START, MAX_ROM_SIZE) == bytes(MAX_ROM_SIZE)



def test_load_rom_from_stream() -> None:
    memory = Memory()

    loaded = load_rom_from_stream(io.BytesIO(b"\x00\xE0"), memory)

    assert loaded == b"\x00\xE0"
    assert memory.load16(PROGRAM_START) == 0x00E0


def test_load_rom_from_path(tmp_path) -> None:
    rom_path = tmp_path / "pong.ch8"
    rom_path.write_bytes(b"\x6A\x02\x6B\x0C")
    memory = Memory()

    loaded = load_rom_from_path(rom_path, memory)

    assert loaded == b"\x6A\x02\x6B\x0C"
    assert memory.load16(PROGRAM_START + 2) == 0x6B0C


def test_missing_rom_file_raises_os_error(tmp_path) -> None:
    memory = Memory()

    with pytest.raises(OSError):
        load_rom_from_path(tmp_path / "missing.ch8", memory)

    assert memory.load8(PROGRAM_START) == 0x00
