"""Raw ROM loader for CHIP-8 program images."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MEMORY_SIZE, PROGRAM_START, Memory
from pychip8.utils import debug_enabled, debug_log


class RomFormatError(RuntimeError):
    """Raised when a ROM image cannot be placed in program memory."""


MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START


def load_rom(data: bytes, memory: Memory, *, start: int = PROGRAM_START) -> bytes:
    """Copy ``data`` verbatim into ``memory`` at ``start`` and return it.

    The image is validated before anything is written, so a rejected ROM
    leaves memory untouched.
    """

    payload = bytes(data)
    capacity = len(memory) - start
    if len(payload) > capacity:
        raise RomFormatError(
            f"ROM image is {len(payload)} bytes; at most {capacity} fit above {start:#05x}"
        )
    memory.store_block(start, payload)
    if debug_enabled("loader"):
        debug_log("loader", "rom_loaded start=%03x length=%d", start, len(payload))
    return payload


def load_rom_from_stream(stream: BinaryIO, memory: Memory, *, start: int = PROGRAM_START) -> bytes:
    """Read a ROM image from ``stream`` and load it into ``memory``."""

    return load_rom(stream.read(), memory, start=start)


def load_rom_from_path(path: Path, memory: Memory, *, start: int = PROGRAM_START) -> bytes:
    """Load a ROM image from the filesystem."""

    with Path(path).open("rb") as handle:
        return load_rom_from_stream(handle, memory, start=start)
