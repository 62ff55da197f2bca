"""Unit tests for the CHIP-8 video renderer."""

from __future__ import annotations

import pytest

from pychip8.video import MONOCHROME, PHOSPHOR, Framebuffer, Renderer, validate_palette


def test_render_single_pixel() -> None:
    fb = Framebuffer()
    fb.xor_pixel(1, 0)
    result = Renderer().render(fb)

    assert result.width == 64
    assert result.height == 32
    assert len(result.pixels) == 64 * 32 * 3

    white = (255, 255, 255)
    black = (0, 0, 0)
    assert result.get_pixel(0, 0) == black
    assert result.get_pixel(1, 0) == white
    assert result.get_pixel(1, 1) == black


def test_render_scale_factor() -> None:
    fb = Framebuffer()
    fb.xor_pixel(0, 0)
    result = Renderer().render(fb, scale=4)

    assert result.width == 256
    assert result.height == 128
    assert result.get_pixel(3, 3) == (255, 255, 255)
    assert result.get_pixel(4, 0) == (0, 0, 0)
    assert result.get_pixel(0, 4) == (0, 0, 0)


def test_render_with_palette() -> None:
    fb = Framebuffer()
    fb.xor_pixel(5, 5)
    result = Renderer(PHOSPHOR).render(fb)

    assert result.get_pixel(5, 5) == PHOSPHOR[1]
    assert result.get_pixel(0, 0) == PHOSPHOR[0]


def test_render_rejects_bad_scale() -> None:
    with pytest.raises(ValueError):
        Renderer().render(Framebuffer(), scale=0)


def test_validate_palette() -> None:
    assert validate_palette(MONOCHROME) == MONOCHROME
    assert validate_palette([(256, 1, 2), (3, 4, 5)]) == ((0, 1, 2), (3, 4, 5))
    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0)])
    with pytest.raises(ValueError):
        validate_palette([(0, 0), (1, 1, 1)])
