"""CHIP-8 machine assembly and frame pacing."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from pychip8.cpu import Chip8, Quirks
from pychip8.io import Keypad
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import Framebuffer

DEFAULT_CPU_HZ = 500
DEFAULT_TIMER_HZ = 60


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 session."""

    rom_image: Optional[bytes] = None
    cpu_hz: int = DEFAULT_CPU_HZ
    timer_hz: int = DEFAULT_TIMER_HZ
    quirks: Quirks = field(default_factory=Quirks)
    strict_illegal: bool = False
    seed: Optional[int] = None
    trace_capacity: int = 0

    def __post_init__(self) -> None:
        if self.cpu_hz <= 0:
            raise ValueError("cpu_hz must be positive")
        if self.timer_hz <= 0:
            raise ValueError("timer_hz must be positive")
        if self.trace_capacity < 0:
            raise ValueError("trace_capacity must not be negative")

    @property
    def cycles_per_frame(self) -> int:
        """Whole instructions per timer period; the fraction is carried by ``Machine``."""

        return self.cpu_hz // self.timer_hz


@dataclass
class Machine:
    """Aggregates the interpreter with the host-facing devices."""

    cpu: Chip8
    config: MachineConfig
    rom: bytes = b""
    frame_count: int = 0
    _cycle_remainder: int = field(default=0, repr=False)

    @property
    def keypad(self) -> Keypad:
        return self.cpu.keypad

    @property
    def framebuffer(self) -> Framebuffer:
        return self.cpu.framebuffer

    @property
    def trace(self) -> TraceRecorder | None:
        return self.cpu.trace

    def run_frame(self) -> int:
        """Run one timer period worth of instructions, then tick the timers.

        The fractional part of ``cpu_hz / timer_hz`` is carried into the next
        frame, so over one second exactly ``cpu_hz`` instructions run.
        Returns the number of instructions executed.
        """

        cycles, self._cycle_remainder = divmod(
            self._cycle_remainder + self.config.cpu_hz, self.config.timer_hz
        )
        for _ in range(cycles):
            self.cpu.step()
        self.cpu.tick_timers()
        self.frame_count += 1
        if debug_enabled("perf"):
            debug_log(
                "perf",
                "frame=%d cycles=%d total=%d",
                self.frame_count,
                cycles,
                self.cpu.cycle_count,
            )
        return cycles

    def reset(self) -> None:
        """Reset the interpreter and reload the ROM this machine was built with."""

        self.cpu.reset()
        self.frame_count = 0
        self._cycle_remainder = 0
        if self.rom:
            self.cpu.load_rom(self.rom)


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity > 0 else None
    cpu = Chip8(
        quirks=config.quirks,
        rng=random.Random(config.seed),
        strict_illegal=config.strict_illegal,
        trace=trace,
    )

    rom = b""
    if config.rom_image:
        rom = cpu.load_rom(config.rom_image)

    return Machine(cpu=cpu, config=config, rom=rom)
