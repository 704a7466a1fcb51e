#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Render the Newton fractal for z^n - 1 on the CPU using queues for IPC.

Workers are forked processes on Linux and threads elsewhere.
See newton_fractal/parallel.py.
"""

from newton_fractal.option import Option
from newton_fractal.render_queue import App

if __name__ == '__main__':

    OPT = Option()
    newton = App(OPT.render_config(), OPT.num_threads)
    try:
        newton.print_info()
        newton.render()
        newton.save_image(OPT.output)
        newton.exit()
    except KeyboardInterrupt:
        newton.exit()
