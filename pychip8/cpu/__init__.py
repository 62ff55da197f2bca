"""CPU package for the CHIP-8 interpreter."""

from .core import (
    Chip8,
    CPUError,
    CPUState,
    IllegalOpcodeError,
    Quirks,
    StackOverflowError,
    StackUnderflowError,
)
from . import opcodes

__all__ = [
    "Chip8",
    "CPUState",
    "Quirks",
    "CPUError",
    "IllegalOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "opcodes",
]
