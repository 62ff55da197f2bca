"""Memory for the CHIP-8 interpreter.

The CHIP-8 address space is a flat 4 KiB array. The interpreter area below
``0x200`` is unused apart from the hexadecimal font table, and programs are
loaded from ``PROGRAM_START`` upwards. Unlike real hardware, accesses outside
``0x000``-``0xFFF`` do not wrap: they raise :class:`MemoryError` so that a
runaway program is reported instead of silently corrupting state.
"""

from __future__ import annotations

from typing import Final, Iterable

MEMORY_SIZE: Final[int] = 0x1000
PROGRAM_START: Final[int] = 0x200
FONT_START: Final[int] = 0x050
FONT_GLYPH_BYTES: Final[int] = 5

FONT_SET: Final[bytes] = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)

FONT_END: Final[int] = FONT_START + len(FONT_SET)


class MemoryError(Exception):
    """Raised when the memory is accessed outside of its address range."""


class Memory:
    """Fixed-size byte-addressable CHIP-8 memory."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size <= 0:
            raise MemoryError("memory must have a positive size")
        self._data = bytearray(size)

    def __len__(self) -> int:
        return len(self._data)

    def _check(self, address: int, length: int = 1) -> None:
        if address < 0 or address + length > len(self._data):
            raise MemoryError(
                f"address {address:#05x} (+{length}) outside memory 0x000-{len(self._data) - 1:#05x}"
            )

    def load8(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word, high byte first."""

        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def store16(self, address: int, value: int) -> None:
        self.store8(address, (value >> 8) & 0xFF)
        self.store8(address + 1, value & 0xFF)

    def load_block(self, address: int, length: int) -> bytes:
        self._check(address, length)
        return bytes(self._data[address : address + length])

    def store_block(self, address: int, data: Iterable[int]) -> None:
        payload = bytes(data)
        self._check(address, len(payload))
        self._data[address : address + len(payload)] = payload

    def clear(self) -> None:
        self._data[:] = bytes(len(self._data))

    def install_font(self) -> None:
        """Burn the hexadecimal font table into the interpreter area."""

        self.store_block(FONT_START, FONT_SET)

    def font_address(self, digit: int) -> int:
        return FONT_START + FONT_GLYPH_BYTES * (digit & 0x0F)

    def snapshot(self) -> bytes:
        return bytes(self._data)
