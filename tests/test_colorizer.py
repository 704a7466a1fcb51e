# -*- coding: utf-8 -*-

import numpy as np
import pytest

from newton_fractal.newton_common import get_color, hsv_to_rgb


@pytest.mark.parametrize("iters", [0, 1, 50, 99, 100])
def test_unconverged_is_black(iters):
    assert get_color(-1, iters, 5, 100, 4.0) == (0, 0, 0)


def test_red_at_full_brightness():
    assert hsv_to_rgb(0.0, 0.9, 1.0) == (255, 25, 25)


def test_sectors():
    assert hsv_to_rgb(1.0 / 3.0, 0.9, 1.0) == (25, 255, 25)
    assert hsv_to_rgb(2.0 / 3.0, 0.9, 1.0) == (25, 25, 255)
    assert hsv_to_rgb(0.5, 0.9, 1.0) == (25, 255, 255)


@pytest.mark.parametrize("h", [0.0, 0.25, 0.7])
def test_zero_saturation_is_gray(h):
    r, g, b = hsv_to_rgb(h, 0.0, 0.5)

    assert r == g == b == 127


def test_value_scales_channels():
    assert hsv_to_rgb(0.0, 0.9, 0.0) == (0, 0, 0)
    assert max(hsv_to_rgb(0.4, 0.9, 0.5)) == 127


def test_fastest_convergence_is_brightest():
    assert get_color(0, 0, 5, 100, 4.0) == (255, 25, 25)
    assert get_color(2, 100, 5, 100, 4.0) == (0, 0, 0)


def test_hue_by_root():
    colors = {get_color(k, 0, 6, 100, 1.0) for k in range(6)}

    assert len(colors) == 6
    assert get_color(2, 0, 6, 100, 1.0) == (25, 255, 25)


def test_brightness_is_monotonic():
    values = [max(get_color(3, iters, 5, 100, 1.0)) for iters in range(101)]

    assert all(a >= b for a, b in zip(values, values[1:]))
    assert values[0] == 255
    assert values[-1] == 0


def test_gamma_darkens_slow_pixels():
    linear = max(get_color(1, 40, 5, 100, 1.0))
    steep = max(get_color(1, 40, 5, 100, 4.0))
    flat = max(get_color(1, 40, 5, 100, 0.5))

    assert steep < linear < flat


def test_sector_picked_in_single_precision():
    # float32(5/6) * 6 rounds to exactly 5.0, the start of the last sector
    assert get_color(5, 0, 6, 100, 1.0) == (255, 25, 255)
    assert get_color(1, 0, 6, 100, 1.0) == (255, 255, 25)
    assert hsv_to_rgb(np.float32(5.0 / 6.0), 0.9, 1.0) == (255, 25, 255)
