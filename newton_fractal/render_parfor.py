# -*- coding: utf-8 -*-
"""
Render the Newton fractal on the CPU using Numba's parfor loop.
"""

__all__ = ["App"]

import numba as nb
import numpy as np

from .base import Base
from .newton_parfor import newton_fractal, colorize

class App(Base):

    def __init__(self, config, num_threads):
        super().__init__(config)

        # Silently limit the number of threads to what Numba was started with.
        self.num_threads = max(1, min(num_threads, nb.config.NUMBA_NUM_THREADS))
        nb.set_num_threads(self.num_threads)
        print("[CPU] number of threads {}".format(self.num_threads))

        # Construct memory objects.
        h, w = self.height, self.width
        self.output_root = np.empty((h, w), dtype=np.ctypeslib.ctypes.c_int32)
        self.output_iters = np.empty((h, w), dtype=np.ctypeslib.ctypes.c_int32)
        self.image = np.empty((h, w, 3), dtype=np.ctypeslib.ctypes.c_uint8)

        # Set chunksize for coloring; solving goes row by row.
        self.chunksize_h = max(1, self.divide_up(h, self.num_threads * 4))

    def compute(self):

        seqH = (0, self.height, 1)

        newton_fractal(
            self.roots, seqH, self.min_x, self.max_x, self.min_y, self.max_y,
            self.max_iters, self.tolerance_sq, self.output_root,
            self.output_iters )

        seqH = (0, self.height, self.chunksize_h)

        colorize(
            self.output_root, self.output_iters, seqH, self.n, self.max_iters,
            self.gamma, self.image )

    def exit(self):

        del self.output_root, self.output_iters, self.image
