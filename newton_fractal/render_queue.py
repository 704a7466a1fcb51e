# -*- coding: utf-8 -*-
"""
Render the Newton fractal on the CPU using queues for IPC.

Preferably use Python 3.7 or later for better performance.
SimpleQueue has noticeably lesser overhead compared to Queue.
See parallel.py.
"""

__all__ = ["App"]

import math
import numpy as np

from multiprocessing import RawArray

from .base import Base
from .parallel import get_context
from .newton_for import newton_fractal, colorize

class App(Base):

    def __init__(self, config, num_threads, use_fork=None):
        super().__init__(config)

        Barrier, Queue, Thread = get_context(use_fork)

        self.num_threads = max(1, min(num_threads, self.height))
        print("[CPU] number of threads {}".format(self.num_threads))

        # Construct shared-memory objects.
        n, h, w = self.n, self.height, self.width

        shm_roots = RawArray(np.ctypeslib.ctypes.c_float, int(n*2))
        roots = np.ctypeslib.as_array(shm_roots).reshape((n, 2))
        roots[:] = self.roots
        self.roots = roots

        shm_root = RawArray(np.ctypeslib.ctypes.c_int32, int(h*w))
        self.output_root = np.ctypeslib.as_array(shm_root)
        self.output_root = self.output_root.reshape((h, w))

        shm_iters = RawArray(np.ctypeslib.ctypes.c_int32, int(h*w))
        self.output_iters = np.ctypeslib.as_array(shm_iters)
        self.output_iters = self.output_iters.reshape((h, w))

        shm_image = RawArray(np.ctypeslib.ctypes.c_uint8, int(h*w*3))
        self.image = np.ctypeslib.as_array(shm_image)
        self.image = self.image.reshape((h, w, 3))

        # Spawn workers.
        self.barrier_chunk = Barrier(self.num_threads + 1)

        self.queue_job = Queue()
        self.queue_data = Queue()

        self.consumers = list()
        for wid in range(1, self.num_threads + 1):
            self.consumers.append(Thread(target=self.cpu_task, args=(wid,)))
            self.consumers[-1].start()

    def __cpu_task(self, wid):

        # Receive job parameters.
        while True:
            args = self.queue_job.get()
            if args is None: break

            num_chunks, max_iters, tol_sq, gamma = args

            # Process chunk data.
            while True:
                chunk_id, seqH = self.queue_data.get()
                if seqH:
                    newton_fractal(
                        self.roots, seqH, self.min_x, self.max_x, self.min_y,
                        self.max_y, max_iters, tol_sq, self.output_root,
                        self.output_iters )
                    colorize(
                        self.output_root, self.output_iters, seqH, self.n,
                        max_iters, gamma, self.image )

                # The last num_threads chunks go to distinct workers, each
                # blocking here until every chunk is done.
                if chunk_id + self.num_threads > num_chunks:
                    self.barrier_chunk.wait()      # sync including manager
                    break

    def cpu_task(self, wid):

        try:
            self.__cpu_task(wid)
        except KeyboardInterrupt:
            pass

    def compute(self):

        chunksize = max(2, int(math.ceil(300 / self.width * 2)))

        # Submit job parameters followed by chunked data.
        num_chunks = self.divide_up(self.height, chunksize)
        args = ( num_chunks, self.max_iters, self.tolerance_sq, self.gamma )

        for _ in range(self.num_threads):
            self.queue_job.put(args)

        for i in range(num_chunks):
            start = i * chunksize
            stop = start + chunksize
            args = (i+1, (start, stop if stop <= self.height else self.height, chunksize))
            self.queue_data.put(args)

        # Notify available threads to wait.
        if num_chunks < self.num_threads:
            for _ in range(self.num_threads - num_chunks):
                self.queue_data.put((num_chunks, None))

        self.barrier_chunk.wait()

    def exit(self):

        for _ in range(len(self.consumers)):
            self.queue_job.put(None)

        for c in self.consumers:
            c.join()

        del self.output_root, self.output_iters, self.image
