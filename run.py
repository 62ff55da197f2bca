"""Command-line entry point for the Python CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.cpu import Quirks
from pychip8.system import DEFAULT_CPU_HZ
from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import PALETTES


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter (Python)",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the CHIP-8 ROM image",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--cpu-hz",
        type=int,
        default=DEFAULT_CPU_HZ,
        help=f"Instructions executed per second (default: {DEFAULT_CPU_HZ})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the RND instruction, for reproducible runs",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="mono",
        help="Display colours (default: mono)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    parser.add_argument(
        "--quirk-index-compare",
        action="store_true",
        help="9xy0 compares register indices instead of register values",
    )
    parser.add_argument(
        "--quirk-low-bit-collision",
        action="store_true",
        help="DRW only reports collisions for sprite bits equal to 1",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.cpu_hz <= 0:
        parser.error("--cpu-hz must be positive")

    config = AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        fullscreen=args.fullscreen,
        cpu_hz=args.cpu_hz,
        seed=args.seed,
        palette=PALETTES[args.palette],
        quirks=Quirks(
            compare_register_indices=args.quirk_index_compare,
            collision_low_bit_only=args.quirk_low_bit_collision,
        ),
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
