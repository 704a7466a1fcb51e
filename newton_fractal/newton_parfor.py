# -*- coding: utf-8 -*-
"""
Newton fractal functions. Loop using Numba's parfor loop.
"""

from .newton_common import pixel_to_complex, find_root, get_color

from numba import njit, prange, set_parallel_chunksize

@njit('void(f4[:,:], UniTuple(i4,3), f8, f8, f8, f8, i4, f4, i4[:,:], i4[:,:])', nogil=True, parallel=True)
def newton_fractal(roots, seq, min_x, max_x, min_y, max_y, max_iters, tol_sq, output_root, output_iters):

    height, width = output_root.shape

    # Iteration counts vary from row to row, keep the chunks small.
    set_parallel_chunksize(seq[2])
    for y in prange(seq[0], seq[1]):
        for x in range(width):
            zreal, zimag = pixel_to_complex(
                x, y, width, height, min_x, max_x, min_y, max_y)
            root, iters = find_root(zreal, zimag, roots, max_iters, tol_sq)
            output_root[y,x] = root
            output_iters[y,x] = iters


@njit('void(i4[:,:], i4[:,:], UniTuple(i4,3), i4, i4, f4, u1[:,:,:])', nogil=True, parallel=True)
def colorize(output_root, output_iters, seq, n, max_iters, gamma, image):

    width = output_root.shape[1]

    set_parallel_chunksize(seq[2])
    for y in prange(seq[0], seq[1]):
        for x in range(width):
            image[y,x] = get_color(
                output_root[y,x], output_iters[y,x], n, max_iters, gamma)
