"""CHIP-8 hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Host keyboard layout mapped onto the COSMAC VIP keypad:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   q w e r
#   7 8 9 E        a s d f
#   A 0 B F        z x c v
KEY_NAME_TEMPLATE: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


@dataclass
class Keypad:
    """State of the 16 CHIP-8 keys, written by the host before each cycle."""

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)

    def press(self, key: int) -> None:
        self.set(key, True)

    def release(self, key: int) -> None:
        self.set(key, False)

    def set(self, key: int, pressed: bool) -> None:
        self._keys[self._check(key)] = bool(pressed)

    def is_pressed(self, key: int) -> bool:
        return self._keys[self._check(key)]

    def first_pressed(self) -> int | None:
        """Return the lowest pressed key, or ``None`` when none is held."""

        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def press_name(self, key_name: str) -> bool:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return False
        self.press(key)
        if debug_enabled("input"):
            debug_log("input", "keypad_press key=%X", key)
        return True

    def release_name(self, key_name: str) -> bool:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return False
        self.release(key)
        if debug_enabled("input"):
            debug_log("input", "keypad_release key=%X", key)
        return True

    def reset(self) -> None:
        self._keys[:] = [False] * KEY_COUNT

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    @staticmethod
    def lookup(key_name: str) -> int | None:
        return KEY_NAME_TEMPLATE.get(key_name.lower())

    @staticmethod
    def _check(key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key out of range: {key}")
        return key
