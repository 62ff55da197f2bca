"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .machine import DEFAULT_CPU_HZ, DEFAULT_TIMER_HZ, Machine, MachineConfig, create_machine

__all__ = [
    "DEFAULT_CPU_HZ",
    "DEFAULT_TIMER_HZ",
    "MachineConfig",
    "Machine",
    "create_machine",
]
