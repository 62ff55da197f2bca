"""Unit tests for the CHIP-8 framebuffer."""

from __future__ import annotations

import pytest

from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, PIXEL_OFF, PIXEL_ON, Framebuffer


def test_new_framebuffer_is_blank() -> None:
    fb = Framebuffer()

    assert (fb.width, fb.height) == (DISPLAY_WIDTH, DISPLAY_HEIGHT) == (64, 32)
    assert len(fb.snapshot()) == 64 * 32
    assert fb.lit_count() == 0
    assert fb.redraw is False


def test_xor_pixel_toggles_and_reports_collision() -> None:
    fb = Framebuffer()

    assert fb.xor_pixel(63, 31) is False
    assert fb.get_pixel(63, 31) == PIXEL_ON
    assert fb.xor_pixel(63, 31) is True
    assert fb.get_pixel(63, 31) == PIXEL_OFF


def test_pixels_only_hold_on_or_off() -> None:
    fb = Framebuffer()
    for x in range(0, 64, 3):
        fb.xor_pixel(x, x % 32)
        fb.xor_pixel(x, (x + 1) % 32)
    fb.xor_pixel(0, 0)

    assert set(fb.snapshot()) <= {PIXEL_OFF, PIXEL_ON}


def test_redraw_flag_is_consumed() -> None:
    fb = Framebuffer()
    fb.xor_pixel(1, 1)

    assert fb.consume_redraw() is True
    assert fb.consume_redraw() is False

    fb.clear()
    assert fb.redraw is True
    assert fb.lit_count() == 0


def test_rows_are_row_major() -> None:
    fb = Framebuffer()
    fb.xor_pixel(2, 1)

    rows = list(fb.rows())

    assert len(rows) == 32
    assert rows[1][2] == PIXEL_ON
    assert rows[0][2] == PIXEL_OFF


def test_out_of_range_pixel() -> None:
    fb = Framebuffer()

    with pytest.raises(IndexError):
        fb.get_pixel(64, 0)
    with pytest.raises(IndexError):
        fb.xor_pixel(0, 32)
