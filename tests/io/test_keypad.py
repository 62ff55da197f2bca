"""Tests for the CHIP-8 keypad state."""

from __future__ import annotations

import pytest

from pychip8.io import KEY_NAME_TEMPLATE, Keypad


def test_press_and_release() -> None:
    keypad = Keypad()

    keypad.press(0xA)
    assert keypad.is_pressed(0xA)
    assert keypad.first_pressed() == 0xA

    keypad.release(0xA)
    assert not keypad.is_pressed(0xA)
    assert keypad.first_pressed() is None


def test_first_pressed_returns_lowest_key() -> None:
    keypad = Keypad()
    keypad.set(0xE, True)
    keypad.set(0x3, True)

    assert keypad.first_pressed() == 0x3


def test_key_range_is_checked() -> None:
    keypad = Keypad()

    with pytest.raises(ValueError):
        keypad.press(16)
    with pytest.raises(ValueError):
        keypad.is_pressed(-1)


def test_host_key_names() -> None:
    keypad = Keypad()

    assert keypad.press_name("Q") is True
    assert keypad.is_pressed(0x4)
    assert keypad.press_name("x") is True
    assert keypad.is_pressed(0x0)
    assert keypad.press_name("space") is False

    assert keypad.release_name("q") is True
    assert not keypad.is_pressed(0x4)


def test_layout_covers_every_key() -> None:
    assert sorted(KEY_NAME_TEMPLATE.values()) == list(range(16))


def test_reset_clears_state() -> None:
    keypad = Keypad()
    keypad.press(1)
    keypad.press(15)

    keypad.reset()

    assert keypad.snapshot() == (False,) * 16
