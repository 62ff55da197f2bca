"""Opcode metadata for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, List, Sequence


@dataclass(frozen=True)
class Instruction:
    """Metadata describing one CHIP-8 instruction pattern.

    An opcode matches when ``opcode & mask == pattern``. Operand nibbles are
    the bits cleared in ``mask``.
    """

    pattern: int
    mask: int
    mnemonic: str
    handler: str

    def __post_init__(self) -> None:
        if not 0 <= self.pattern <= 0xFFFF or not 0 <= self.mask <= 0xFFFF:
            raise ValueError(f"pattern out of range: {self.pattern:#06x}/{self.mask:#06x}")
        if self.pattern & ~self.mask & 0xFFFF:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")
        if self.mask & 0xF000 != 0xF000:
            raise ValueError("mask must cover the leading nibble")

    @property
    def group(self) -> int:
        return self.pattern >> 12

    def matches(self, opcode: int) -> bool:
        return opcode & self.mask == self.pattern


class OpcodeTable:
    """Mutable builder for the 16-group instruction lookup table."""

    _GROUP_COUNT: Final[int] = 0x10

    def __init__(self) -> None:
        self._groups: List[List[Instruction]] = [[] for _ in range(self._GROUP_COUNT)]

    def register(self, instruction: Instruction) -> None:
        group = self._groups[instruction.group]
        for existing in group:
            if existing.pattern == instruction.pattern and existing.mask == instruction.mask:
                raise ValueError(
                    f"pattern {instruction.pattern:#06x} already registered as {existing.mnemonic}")
        group.append(instruction)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Sequence[Instruction]]:
        # Most specific masks first so 00E0/00EE win over 0nnn.
        return tuple(
            tuple(sorted(group, key=lambda entry: bin(entry.mask).count("1"), reverse=True))
            for group in self._groups
        )


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Sequence[Instruction]]:
    """Build the per-leading-nibble instruction lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


def decode(opcode: int, table: Sequence[Sequence[Instruction]] | None = None) -> Instruction | None:
    """Return the instruction matching ``opcode`` or ``None`` if unrecognised."""

    lookup = OPCODE_TABLE if table is None else table
    for instruction in lookup[(opcode >> 12) & 0x0F]:
        if instruction.matches(opcode):
            return instruction
    return None


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0x00E0, 0xFFFF, "CLS", "op_cls"),
    Instruction(0x00EE, 0xFFFF, "RET", "op_ret"),
    Instruction(0x0000, 0xF000, "SYS", "op_sys"),
    Instruction(0x1000, 0xF000, "JP", "op_jp"),
    Instruction(0x2000, 0xF000, "CALL", "op_call"),
    Instruction(0x3000, 0xF000, "SE", "op_se_immediate"),
    Instruction(0x4000, 0xF000, "SNE", "op_sne_immediate"),
    Instruction(0x5000, 0xF00F, "SE", "op_se_register"),
    Instruction(0x6000, 0xF000, "LD", "op_ld_immediate"),
    Instruction(0x7000, 0xF000, "ADD", "op_add_immediate"),
    Instruction(0x8000, 0xF00F, "LD", "op_ld_register"),
    Instruction(0x8001, 0xF00F, "OR", "op_or"),
    Instruction(0x8002, 0xF00F, "AND", "op_and"),
    Instruction(0x8003, 0xF00F, "XOR", "op_xor"),
    Instruction(0x8004, 0xF00F, "ADD", "op_add_register"),
    Instruction(0x8005, 0xF00F, "SUB", "op_sub"),
    Instruction(0x8006, 0xF00F, "SHR", "op_shr"),
    Instruction(0x8007, 0xF00F, "SUBN", "op_subn"),
    Instruction(0x800E, 0xF00F, "SHL", "op_shl"),
    Instruction(0x9000, 0xF00F, "SNE", "op_sne_register"),
    Instruction(0xA000, 0xF000, "LD", "op_ld_index"),
    Instruction(0xB000, 0xF000, "JP", "op_jp_offset"),
    Instruction(0xC000, 0xF000, "RND", "op_rnd"),
    Instruction(0xD000, 0xF000, "DRW", "op_drw"),
    Instruction(0xE09E, 0xF0FF, "SKP", "op_skp"),
    Instruction(0xE0A1, 0xF0FF, "SKNP", "op_sknp"),
    Instruction(0xF007, 0xF0FF, "LD", "op_ld_from_delay"),
    Instruction(0xF00A, 0xF0FF, "LD", "op_wait_key"),
    Instruction(0xF015, 0xF0FF, "LD", "op_ld_delay"),
    Instruction(0xF018, 0xF0FF, "LD", "op_ld_sound"),
    Instruction(0xF01E, 0xF0FF, "ADD", "op_add_index"),
    Instruction(0xF029, 0xF0FF, "LD", "op_ld_font"),
    Instruction(0xF033, 0xF0FF, "LD", "op_bcd"),
    Instruction(0xF055, 0xF0FF, "LD", "op_store_registers"),
    Instruction(0xF065, 0xF0FF, "LD", "op_load_registers"),
)


OPCODE_TABLE: Sequence[Sequence[Instruction]] = build_instruction_table(DEFAULT_INSTRUCTIONS)


__all__ = [
    "Instruction",
    "OpcodeTable",
    "DEFAULT_INSTRUCTIONS",
    "OPCODE_TABLE",
    "build_instruction_table",
    "decode",
]
