# -*- coding: utf-8 -*-
"""
Provides auto-selection of the worker classes for multi-platform support.
"""

__all__ = ['USE_FORK', 'get_context']

import os, sys

# By default use threading on macOS and Windows. Use fork otherwise.
# On UNIX platforms, one may set an environment variable to override
# USE_FORK=0 or USE_FORK=1.

if sys.platform == 'win32':
    USE_FORK = 0
else:
    val = os.getenv('USE_FORK')
    if val is None or val == 'auto':
        USE_FORK = 0 if sys.platform == 'darwin' else 1
    else:
        USE_FORK = int(val)


def get_context(use_fork=None):
    """
    Returns the (Barrier, Queue, Thread) classes for forked processes
    or for threads. The kernels release the GIL, so threads run in parallel.
    """
    if use_fork is None:
        use_fork = USE_FORK

    if use_fork:
        import multiprocessing
        ctx = multiprocessing.get_context('fork')
        return ctx.Barrier, ctx.SimpleQueue, ctx.Process

    import threading
    import queue
    return threading.Barrier, queue.SimpleQueue, threading.Thread
