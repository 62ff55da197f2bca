"""Pygame driver loop for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.cpu import CPUError, Quirks
from pychip8.bus import MemoryError
from pychip8.loader import RomFormatError
from pychip8.system import DEFAULT_CPU_HZ, Machine, MachineConfig, create_machine
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import MONOCHROME, Renderer
from pychip8.video.palette import RGBColor

_FRAME_RATE = 60
_TRACE_CAPACITY = 512


@dataclass
class AppConfig:
    """Configuration for the pygame frontend."""

    rom_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    cpu_hz: int = DEFAULT_CPU_HZ
    seed: Optional[int] = None
    quirks: Optional[Quirks] = None
    palette: tuple[RGBColor, RGBColor] = MONOCHROME


class Chip8App:
    """Thin wrapper around the pygame event loop.

    Each display frame runs ``cpu_hz / 60`` instructions followed by one timer
    tick, then blits the framebuffer if it changed.
    """

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._renderer = Renderer(config.palette)

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        if not self._config.rom_path:
            raise RuntimeError("ROM image is required; usage: run.py ROM [options]")

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        machine = self._create_machine(self._config.rom_path)
        self._machine = machine

        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.rom_path.name}")
        size = (
            machine.framebuffer.width * self._config.scale,
            machine.framebuffer.height * self._config.scale,
        )
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode(size, flags)
        clock = pygame.time.Clock()

        self._running = True
        machine.framebuffer.redraw = True
        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame.key.name(event.key), pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame.key.name(event.key), pressed=False)

                self._step_frame(machine)

                if machine.framebuffer.consume_redraw():
                    frame = self._renderer.render(machine.framebuffer, scale=self._config.scale)
                    screen.blit(frame.to_surface(), (0, 0))
                    pygame.display.flip()

                clock.tick(_FRAME_RATE)
        finally:
            pygame.quit()

    def _create_machine(self, rom_path: Path) -> Machine:
        try:
            rom_image = rom_path.read_bytes()
        except OSError as exc:
            raise RuntimeError(f"Failed to read ROM {rom_path}: {exc}") from exc

        trace_capacity = _TRACE_CAPACITY if debug_enabled("trace") else 0
        try:
            return create_machine(
                MachineConfig(
                    rom_image=rom_image,
                    cpu_hz=self._config.cpu_hz,
                    timer_hz=_FRAME_RATE,
                    quirks=self._config.quirks or Quirks(),
                    seed=self._config.seed,
                    trace_capacity=trace_capacity,
                )
            )
        except RomFormatError as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

    def _step_frame(self, machine: Machine) -> None:
        try:
            machine.run_frame()
        except (CPUError, MemoryError) as exc:
            if machine.trace is not None:
                machine.trace.dump("trace")
            raise RuntimeError(f"CHIP-8 program halted: {exc}") from exc

    def _handle_key_event(self, key_name: str, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", key_name, pressed)
        if pressed:
            machine.keypad.press_name(key_name)
        else:
            machine.keypad.release_name(key_name)
