"""Tests for the CHIP-8 opcode table."""

from __future__ import annotations

import pytest

from pychip8.cpu import Chip8
from pychip8.cpu.opcodes import (
    DEFAULT_INSTRUCTIONS,
    Instruction,
    OpcodeTable,
    decode,
)


def test_instruction_set_size() -> None:
    assert len(DEFAULT_INSTRUCTIONS) == 35


def test_every_handler_exists() -> None:
    cpu = Chip8()
    for instruction in DEFAULT_INSTRUCTIONS:
        assert callable(getattr(cpu, instruction.handler, None)), instruction.handler


@pytest.mark.parametrize(
    ("opcode", "handler"),
    [
        (0x00E0, "op_cls"),
        (0x00EE, "op_ret"),
        (0x0ABC, "op_sys"),
        (0x1ABC, "op_jp"),
        (0x2ABC, "op_call"),
        (0x5AB0, "op_se_register"),
        (0x8AB4, "op_add_register"),
        (0x8ABE, "op_shl"),
        (0x9AB0, "op_sne_register"),
        (0xDAB5, "op_drw"),
        (0xEA9E, "op_skp"),
        (0xEAA1, "op_sknp"),
        (0xFA0A, "op_wait_key"),
        (0xFA33, "op_bcd"),
        (0xFA65, "op_load_registers"),
    ],
)
def test_decode(opcode: int, handler: str) -> None:
    instruction = decode(opcode)

    assert instruction is not None
    assert instruction.handler == handler


@pytest.mark.parametrize("opcode", [0x5AB1, 0x8AB8, 0x9AB1, 0xEA00, 0xFAFF])
def test_decode_unknown(opcode: int) -> None:
    assert decode(opcode) is None


def test_table_rejects_duplicates() -> None:
    table = OpcodeTable()
    table.register(Instruction(0x1000, 0xF000, "JP", "op_jp"))

    with pytest.raises(ValueError):
        table.register(Instruction(0x1000, 0xF000, "JMP", "op_jump"))


def test_instruction_validation() -> None:
    with pytest.raises(ValueError):
        Instruction(0x1001, 0xF000, "JP", "op_jp")
    with pytest.raises(ValueError):
        Instruction(0x0001, 0x000F, "X", "op_x")
