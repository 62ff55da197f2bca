"""CHIP-8 interpreter core."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from pychip8.bus import PROGRAM_START, Memory
from pychip8.io import Keypad
from pychip8.loader import load_rom
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer

from .opcodes import OPCODE_TABLE, Instruction, decode


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised in strict mode when an opcode matches no instruction."""


class StackOverflowError(CPUError):
    """Raised when CALL is executed with all 16 stack slots in use."""


class StackUnderflowError(CPUError):
    """Raised when RET is executed with an empty call stack."""


REGISTER_COUNT = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF
SPRITE_WIDTH = 8


@dataclass
class Quirks:
    """Behaviour switches for instructions whose reference semantics are disputed.

    ``compare_register_indices``: ``9xy0`` compares the indices ``x`` and ``y``
    instead of the values of ``Vx`` and ``Vy``.

    ``collision_low_bit_only``: ``Dxyn`` only reports a collision for sprite
    bits that equal literally 1, i.e. the rightmost column of each row.
    """

    compare_register_indices: bool = False
    collision_low_bit_only: bool = False


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: list[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    index: int = 0x000
    pc: int = PROGRAM_START
    sp: int = 0
    stack: list[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0

    def clone(self) -> "CPUState":
        return CPUState(
            list(self.v),
            self.index,
            self.pc,
            self.sp,
            list(self.stack),
            self.delay_timer,
            self.sound_timer,
        )


@dataclass
class Chip8:
    """The CHIP-8 interpreter: memory, registers, stack, timers and display.

    The host drives two independent clocks: :meth:`step` executes one
    instruction and :meth:`tick_timers` must be called at 60 Hz.
    """

    memory: Memory = field(default_factory=Memory)
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    quirks: Quirks = field(default_factory=Quirks)
    rng: random.Random = field(default_factory=random.Random)
    strict_illegal: bool = False
    instruction_table: Sequence[Sequence[Instruction]] = field(default=OPCODE_TABLE)
    trace: TraceRecorder | None = None

    state: CPUState = field(default_factory=CPUState)
    cycle_count: int = 0

    def __post_init__(self) -> None:
        self.memory.install_font()

    def reset(self) -> None:
        """Return to the power-on state. Loaded programs are discarded."""

        self.memory.clear()
        self.memory.install_font()
        self.framebuffer.clear()
        self.framebuffer.redraw = False
        self.keypad.reset()
        self.state = CPUState()
        self.cycle_count = 0
        if self.trace is not None:
            self.trace.clear()

    def load_rom(self, data: bytes) -> bytes:
        """Copy ``data`` into program memory; see :func:`pychip8.loader.load_rom`."""

        return load_rom(data, self.memory)

    def step(self) -> int:
        """Execute a single instruction and return its opcode."""

        pc_before = self.state.pc
        opcode: int | None = None
        instruction: Instruction | None = None
        try:
            opcode = self._fetch_word()
            instruction = self._decode(opcode)
            if instruction is None:
                if debug_enabled("cpu"):
                    debug_log("cpu", "pc=%03x opcode=%04x ignored", pc_before, opcode)
            else:
                if debug_enabled("cpu"):
                    debug_log("cpu", "pc=%03x opcode=%04x %s", pc_before, opcode, instruction.mnemonic)
                handler = getattr(self, instruction.handler, None)
                if handler is None:
                    raise CPUError(f"handler '{instruction.handler}' not implemented")
                handler(opcode)
        except Exception:
            self._record_trace(pc_before, opcode, instruction, note="fault")
            raise

        self.cycle_count += 1
        self._record_trace(pc_before, opcode, instruction)
        return opcode

    def tick_timers(self) -> None:
        """Decrement the delay and sound timers; call at 60 Hz."""

        if self.state.delay_timer > 0:
            self.state.delay_timer -= 1
        if self.state.sound_timer > 0:
            self.state.sound_timer -= 1

    @property
    def sound_active(self) -> bool:
        return self.state.sound_timer > 0

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_sys(self, opcode: int) -> None:
        """Machine-code routine call; not supported by interpreters, ignored."""

        if debug_enabled("cpu"):
            debug_log("cpu", "sys %03x ignored", opcode & 0x0FFF)

    def op_cls(self, _: int) -> None:
        self.framebuffer.clear()

    def op_ret(self, _: int) -> None:
        self.state.pc = self._pop()

    def op_jp(self, opcode: int) -> None:
        self.state.pc = _nnn(opcode)

    def op_call(self, opcode: int) -> None:
        self._push(self.state.pc)
        self.state.pc = _nnn(opcode)

    def op_se_immediate(self, opcode: int) -> None:
        if self.state.v[_x(opcode)] == _kk(opcode):
            self._skip()

    def op_sne_immediate(self, opcode: int) -> None:
        if self.state.v[_x(opcode)] != _kk(opcode):
            self._skip()

    def op_se_register(self, opcode: int) -> None:
        if self.state.v[_x(opcode)] == self.state.v[_y(opcode)]:
            self._skip()

    def op_ld_immediate(self, opcode: int) -> None:
        self._set_register(_x(opcode), _kk(opcode))

    def op_add_immediate(self, opcode: int) -> None:
        x = _x(opcode)
        self._set_register(x, self.state.v[x] + _kk(opcode))

    def op_ld_register(self, opcode: int) -> None:
        self._set_register(_x(opcode), self.state.v[_y(opcode)])

    def op_or(self, opcode: int) -> None:
        x = _x(opcode)
        self._set_register(x, self.state.v[x] | self.state.v[_y(opcode)])

    def op_and(self, opcode: int) -> None:
        x = _x(opcode)
        self._set_register(x, self.state.v[x] & self.state.v[_y(opcode)])

    def op_xor(self, opcode: int) -> None:
        x = _x(opcode)
        self._set_register(x, self.state.v[x] ^ self.state.v[_y(opcode)])

    def op_add_register(self, opcode: int) -> None:
        x = _x(opcode)
        total = self.state.v[x] + self.state.v[_y(opcode)]
        self._set_register(x, total)
        self._set_flag(total > 0xFF)

    def op_sub(self, opcode: int) -> None:
        x = _x(opcode)
        minuend = self.state.v[x]
        subtrahend = self.state.v[_y(opcode)]
        self._set_register(x, minuend - subtrahend)
        self._set_flag(minuend >= subtrahend)

    def op_subn(self, opcode: int) -> None:
        x = _x(opcode)
        minuend = self.state.v[_y(opcode)]
        subtrahend = self.state.v[x]
        self._set_register(x, minuend - subtrahend)
        self._set_flag(minuend >= subtrahend)

    def op_shr(self, opcode: int) -> None:
        x = _x(opcode)
        value = self.state.v[x]
        self._set_register(x, value >> 1)
        self._set_flag(value & 0x01)

    def op_shl(self, opcode: int) -> None:
        x = _x(opcode)
        value = self.state.v[x]
        self._set_register(x, value << 1)
        self._set_flag(value & 0x80)

    def op_sne_register(self, opcode: int) -> None:
        x = _x(opcode)
        y = _y(opcode)
        if self.quirks.compare_register_indices:
            differ = x != y
        else:
            differ = self.state.v[x] != self.state.v[y]
        if differ:
            self._skip()

    def op_ld_index(self, opcode: int) -> None:
        self.state.index = _nnn(opcode)

    def op_jp_offset(self, opcode: int) -> None:
        self.state.pc = (self.state.v[0] + _nnn(opcode)) & 0xFFFF

    def op_rnd(self, opcode: int) -> None:
        self._set_register(_x(opcode), self.rng.randrange(0x100) & _kk(opcode))

    def op_drw(self, opcode: int) -> None:
        origin_x = self.state.v[_x(opcode)] % DISPLAY_WIDTH
        origin_y = self.state.v[_y(opcode)] % DISPLAY_HEIGHT
        height = opcode & 0x000F
        low_bit_only = self.quirks.collision_low_bit_only
        # Rows below the bottom edge are clipped and never read.
        rows = self.memory.load_block(self.state.index, min(height, DISPLAY_HEIGHT - origin_y))

        collision = False
        for row, sprite in enumerate(rows):
            y = origin_y + row
            for column in range(SPRITE_WIDTH):
                x = origin_x + column
                if x >= DISPLAY_WIDTH:
                    break
                bit = sprite & (0x80 >> column)
                if not bit:
                    continue
                if self.framebuffer.xor_pixel(x, y) and (not low_bit_only or bit == 1):
                    collision = True
        self._set_flag(collision)

    def op_skp(self, opcode: int) -> None:
        if self.keypad.is_pressed(self.state.v[_x(opcode)] & 0x0F):
            self._skip()

    def op_sknp(self, opcode: int) -> None:
        if not self.keypad.is_pressed(self.state.v[_x(opcode)] & 0x0F):
            self._skip()

    def op_ld_from_delay(self, opcode: int) -> None:
        self._set_register(_x(opcode), self.state.delay_timer)

    def op_wait_key(self, opcode: int) -> None:
        key = self.keypad.first_pressed()
        if key is None:
            # Re-issue this instruction on the next step.
            self.state.pc = (self.state.pc - 2) & 0xFFFF
            return
        self._set_register(_x(opcode), key)

    def op_ld_delay(self, opcode: int) -> None:
        self.state.delay_timer = self.state.v[_x(opcode)]

    def op_ld_sound(self, opcode: int) -> None:
        self.state.sound_timer = self.state.v[_x(opcode)]

    def op_add_index(self, opcode: int) -> None:
        self.state.index = (self.state.index + self.state.v[_x(opcode)]) & 0xFFFF

    def op_ld_font(self, opcode: int) -> None:
        self.state.index = self.memory.font_address(self.state.v[_x(opcode)])

    def op_bcd(self, opcode: int) -> None:
        value = self.state.v[_x(opcode)]
        self.memory.store_block(self.state.index, (value // 100, (value // 10) % 10, value % 10))

    # Block transfers validate the whole range before touching memory or V.

    def op_store_registers(self, opcode: int) -> None:
        self.memory.store_block(self.state.index, self.state.v[: _x(opcode) + 1])

    def op_load_registers(self, opcode: int) -> None:
        count = _x(opcode) + 1
        self.state.v[:count] = self.memory.load_block(self.state.index, count)

    # ------------------------------------------------------------------
    # Fetch helpers

    def _fetch_word(self) -> int:
        value = self.memory.load16(self.state.pc)
        self.state.pc = (self.state.pc + 2) & 0xFFFF
        return value

    def _decode(self, opcode: int) -> Instruction | None:
        instruction = decode(opcode, self.instruction_table)
        if instruction is None and self.strict_illegal:
            raise IllegalOpcodeError(f"illegal opcode {opcode:#06x} at {self.state.pc - 2:#05x}")
        return instruction

    def _record_trace(
        self,
        pc: int,
        opcode: int | None,
        instruction: Instruction | None,
        *,
        note: str = "",
    ) -> None:
        if self.trace is None:
            return
        self.trace.record_step(
            self.state,
            opcode,
            pc=pc,
            mnemonic="" if instruction is None else instruction.mnemonic,
            note=note,
        )

    # ------------------------------------------------------------------
    # Register helpers

    def _set_register(self, register: int, value: int) -> None:
        self.state.v[register] = value & 0xFF

    def _set_flag(self, enabled) -> None:
        self.state.v[FLAG_REGISTER] = 1 if enabled else 0

    def _skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    # ------------------------------------------------------------------
    # Stack helpers

    def _push(self, address: int) -> None:
        if self.state.sp >= STACK_DEPTH:
            raise StackOverflowError(f"call stack overflow at pc={self.state.pc - 2:#05x}")
        self.state.stack[self.state.sp] = address & 0xFFFF
        self.state.sp += 1

    def _pop(self) -> int:
        if self.state.sp <= 0:
            raise StackUnderflowError(f"return with empty stack at pc={self.state.pc - 2:#05x}")
        self.state.sp -= 1
        return self.state.stack[self.state.sp]


def _x(opcode: int) -> int:
    return (opcode >> 8) & 0x0F


def _y(opcode: int) -> int:
    return (opcode >> 4) & 0x0F


def _kk(opcode: int) -> int:
    return opcode & 0x00FF


def _nnn(opcode: int) -> int:
    return opcode & 0x0FFF
