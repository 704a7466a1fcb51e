#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Render the Newton fractal for z^n - 1 on the CPU using Numba's parfor loop.
"""

import os

from newton_fractal.option import Option

OPT = Option()

# Silently limit the number of threads to os.cpu_count() - 1.
NUM_THREADS = min(max(1, (os.cpu_count() or 2) - 1), OPT.num_threads)
os.environ['NUMBA_NUM_THREADS'] = str(NUM_THREADS)

from newton_fractal.render_parfor import App

if __name__ == '__main__':

    newton = App(OPT.render_config(), NUM_THREADS)
    newton.print_info()
    newton.render()
    newton.save_image(OPT.output)
    newton.exit()
