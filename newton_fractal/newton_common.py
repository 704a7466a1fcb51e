# -*- coding: utf-8 -*-
"""
Common functions for newton_for and newton_parfor.

Root solver:
  pixel_to_complex, find_root

Colorizer:
  hsv_to_rgb, get_color
"""

__all__ = ["pixel_to_complex", "find_root", "hsv_to_rgb", "get_color"]

import math
import numpy as np

from .base import BLACK, DERIV_EPSILON, SATURATION
from numba import njit, float32, int32, uint8

DERIV_EPSILON_2 = DERIV_EPSILON * DERIV_EPSILON
ONE = np.float32(1.0)
F255 = np.float32(255.0)


def _pixel_to_complex(px, py, width, height, min_x, max_x, min_y, max_y):

    # Edge pixels land exactly on the bounds.
    if width > 1:
        zreal = min_x + px / (width - 1) * (max_x - min_x)
    else:
        zreal = min_x

    if height > 1:
        zimag = min_y + py / (height - 1) * (max_y - min_y)
    else:
        zimag = min_y

    return (float32(zreal), float32(zimag))

pixel_to_complex = \
    njit('UniTuple(f4,2)(i4, i4, i4, i4, f8, f8, f8, f8)', nogil=True)(_pixel_to_complex)


def _find_root(zreal, zimag, roots, max_iters, tol_sq):

    n = roots.shape[0]
    deg = float32(n)

    for it in range(max_iters):
        # z^(n-1) by repeated multiplication.
        preal = float32(1.0)
        pimag = float32(0.0)
        for _ in range(n - 1):
            t = float32(preal * zreal - pimag * zimag)
            pimag = float32(preal * zimag + pimag * zreal)
            preal = t

        # f(z) = z^n - 1, f'(z) = n * z^(n-1)
        freal = float32(preal * zreal - pimag * zimag - float32(1.0))
        fimag = float32(preal * zimag + pimag * zreal)
        dreal = float32(deg * preal)
        dimag = float32(deg * pimag)

        denom = float32(dreal * dreal + dimag * dimag)
        if denom < DERIV_EPSILON_2:
            # Critical point, no Newton update possible.
            return (int32(-1), int32(max_iters))

        # z = z - f(z) / f'(z)
        zreal = float32(zreal - (freal * dreal + fimag * dimag) / denom)
        zimag = float32(zimag - (fimag * dreal - freal * dimag) / denom)

        # Lowest index wins if several roots are within tolerance.
        for k in range(n):
            dx = zreal - roots[k, 0]
            dy = zimag - roots[k, 1]
            if dx * dx + dy * dy < tol_sq:
                return (int32(k), int32(it))

    return (int32(-1), int32(max_iters))

find_root = \
    njit('UniTuple(i4,2)(f4, f4, f4[:,:], i4, f4)', nogil=True)(_find_root)


def _hsv_to_rgb(h, s, v):

    # No saturation, the result is a shade of gray and hue is meaningless.
    if s == 0.0:
        c = uint8(v * F255)
        return (c, c, c)

    # Six sectors; i is the sector and f how far into it the hue lies.
    # Single precision throughout, the sector of k/n depends on it.
    hh = float32(h * float32(6.0))
    i = int(hh)
    f = float32(hh - float32(i))

    p = float32(v * (ONE - s))
    q = float32(v * (ONE - s * f))
    t = float32(v * (ONE - s * (ONE - f)))

    i %= 6

    v = float32(v * F255)
    p = float32(p * F255)
    q = float32(q * F255)
    t = float32(t * F255)

    if i == 0:
        return (uint8(v), uint8(t), uint8(p))
    if i == 1:
        return (uint8(q), uint8(v), uint8(p))
    if i == 2:
        return (uint8(p), uint8(v), uint8(t))
    if i == 3:
        return (uint8(p), uint8(q), uint8(v))
    if i == 4:
        return (uint8(t), uint8(p), uint8(v))

    return (uint8(v), uint8(p), uint8(q))

hsv_to_rgb = \
    njit('UniTuple(u1,3)(f4, f4, f4)', nogil=True)(_hsv_to_rgb)


def _get_color(root, iters, n, max_iters, gamma):

    # Unconverged pixels are black.
    if root == -1:
        return BLACK

    # Hue by root, brightness by convergence speed.
    hue = float32(root) / float32(n)
    value = float32(1.0) - float32(iters) / float32(max_iters)
    value = math.pow(value, gamma)

    return hsv_to_rgb(float32(hue), float32(SATURATION), float32(value))

get_color = \
    njit('UniTuple(u1,3)(i4, i4, i4, i4, f4)', nogil=True)(_get_color)
