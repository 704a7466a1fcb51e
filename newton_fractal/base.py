# -*- coding: utf-8 -*-
"""
Provides the render configuration, the roots of unity, and the base class.
"""

__all__ = [
    "BLACK", "DEFAULTS", "DERIV_EPSILON", "SATURATION", "VIEWPORT",
    "RenderConfig", "compute_roots", "Base"]

import math, sys
from collections import namedtuple
from timeit import default_timer as timer

import numpy as np
from PIL import Image

BLACK = (np.uint8(0x00),np.uint8(0x00),np.uint8(0x00))
SATURATION = 0.9

# |f'(z)| below this is treated as zero; the pixel is marked unconverged.
DERIV_EPSILON = 1.0e-6

VIEWPORT = (-5.0, 5.0, -5.0, 5.0)

DEFAULTS = dict(
    n=5, width=1655, height=1655, max_iters=100, tolerance=1e-6, gamma=4.0)


class RenderConfig(namedtuple('RenderConfig', [
        'n', 'width', 'height', 'max_iters', 'tolerance', 'gamma',
        'min_x', 'max_x', 'min_y', 'max_y'])):
    """
    Immutable render parameters. Values are expected to be validated
    already, see option.py.
    """
    __slots__ = ()

    def __new__(cls, n=DEFAULTS['n'], width=DEFAULTS['width'],
                height=DEFAULTS['height'], max_iters=DEFAULTS['max_iters'],
                tolerance=DEFAULTS['tolerance'], gamma=DEFAULTS['gamma'],
                min_x=VIEWPORT[0], max_x=VIEWPORT[1],
                min_y=VIEWPORT[2], max_y=VIEWPORT[3]):
        return super().__new__(
            cls, int(n), int(width), int(height), int(max_iters),
            float(tolerance), float(gamma),
            float(min_x), float(max_x), float(min_y), float(max_y))

    @property
    def tolerance_sq(self):
        return np.float32(self.tolerance * self.tolerance)


def compute_roots(n):
    """
    Returns the n-th roots of unity as a float32 (n, 2) array of
    (real, imag) pairs. Angles are computed in double precision.
    """
    roots = np.empty((n, 2), dtype=np.float32)

    for k in range(n):
        angle = 2.0 * math.pi * k / n
        roots[k] = (math.cos(angle), math.sin(angle))

    return roots


class Base(object):

    def __init__(self, config):

        self.config = config
        self.n = config.n
        self.width = config.width
        self.height = config.height
        self.max_iters = config.max_iters
        self.gamma = np.float32(config.gamma)
        self.min_x, self.max_x = config.min_x, config.max_x
        self.min_y, self.max_y = config.min_y, config.max_y

        # squared once, the kernels never take a square root
        self.tolerance_sq = config.tolerance_sq
        self.roots = compute_roots(self.n)

        # allocated by the subclass
        self.output_root = None
        self.output_iters = None
        self.image = None

    @staticmethod
    def divide_up(dividend, divisor):
        """
        Helper funtion to get the next up value for integer division.
        """
        return dividend // divisor + 1 if dividend % divisor else dividend // divisor


    def print_info(self):

        print("Generating Newton fractal for z^{}-1 = 0".format(self.n))
        print("Image size: {}x{}".format(self.width, self.height))
        print("Max iterations: {}".format(self.max_iters))
        print("Newton method tolerance: {}".format(self.config.tolerance))
        print("Gamma (higher value decays colors based on iterations more "
              "abruptly): {}".format(self.config.gamma))
        sys.stdout.flush()


    def compute(self):
        """
        Fill output_root, output_iters, and image. Implemented by the engine.
        """
        raise NotImplementedError


    def render(self):

        s = timer()
        self.compute()
        print("[CPU] computation finished in {:.3f} seconds".format(timer() - s))

        return self.image


    def save_image(self, filename):

        height, width, dim = self.image.shape
        pixels = self.image.reshape((height * width * dim,))

        # stride 0 selects the packed row length, width * 3
        img = Image.frombuffer("RGB", (width, height), pixels, "raw", "RGB", 0, 1)
        img.save(filename)
        print("image saved as {}".format(filename))
