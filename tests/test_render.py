# -*- coding: utf-8 -*-

import numpy as np
import pytest
from PIL import Image

from newton_fractal.base import RenderConfig
from newton_fractal import render_parfor, render_queue


def render_parfor_app(config, num_threads=2):
    app = render_parfor.App(config, num_threads)
    app.render()
    return app


def render_queue_app(config, num_threads=3):
    app = render_queue.App(config, num_threads, use_fork=False)
    try:
        app.render()
        buffers = (app.output_root.copy(), app.output_iters.copy(), app.image.copy())
    finally:
        app.exit()
    return buffers


def test_output_shapes():
    config = RenderConfig(n=3, width=40, height=30, max_iters=50)
    app = render_parfor_app(config)

    assert app.output_root.shape == (30, 40)
    assert app.output_iters.shape == (30, 40)
    assert app.image.shape == (30, 40, 3)
    assert app.output_root.dtype == np.int32
    assert app.image.dtype == np.uint8
    assert app.image.ravel().shape == (40 * 30 * 3,)


def test_result_ranges():
    config = RenderConfig(n=5, width=48, height=48, max_iters=25)
    app = render_parfor_app(config)

    assert app.output_root.min() >= -1
    assert app.output_root.max() <= 4
    assert app.output_iters.min() >= 0
    assert app.output_iters.max() <= 25
    assert set(np.unique(app.output_root)) >= {0, 1, 2, 3, 4}


def test_unconverged_pixels_are_black():
    config = RenderConfig(n=3, width=41, height=41, max_iters=5)
    app = render_parfor_app(config)

    unconverged = app.output_root == -1
    assert unconverged.any()
    assert not app.image[unconverged].any()


def test_single_root_everywhere():
    # z - 1, the center pixel sits exactly on z = 0
    config = RenderConfig(n=1, width=21, height=21, max_iters=100)
    app = render_parfor_app(config)

    assert (app.output_root == 0).all()
    assert (app.output_iters <= 100).all()


def test_two_roots_generous_tolerance():
    config = RenderConfig(n=2, width=64, height=64, max_iters=1, tolerance=3.0)
    app = render_parfor_app(config)

    converged = app.output_root != -1
    assert converged.mean() > 0.99
    assert set(np.unique(app.output_root[converged])) == {0, 1}
    assert (app.output_iters[converged] == 0).all()


def test_single_pixel_image():
    config = RenderConfig(n=3, width=1, height=1, max_iters=50)
    app = render_parfor_app(config)

    # the only pixel maps to (-5, -5)
    assert app.output_root.shape == (1, 1)
    assert -1 <= app.output_root[0, 0] < 3


def test_deterministic():
    config = RenderConfig(n=4, width=37, height=29, max_iters=40)
    app1 = render_parfor_app(config, num_threads=1)
    app2 = render_parfor_app(config, num_threads=2)

    assert app1.output_root.tobytes() == app2.output_root.tobytes()
    assert app1.output_iters.tobytes() == app2.output_iters.tobytes()
    assert app1.image.tobytes() == app2.image.tobytes()


@pytest.mark.parametrize("width, height", [(32, 4), (400, 64)])
def test_queue_matches_parfor(width, height):
    config = RenderConfig(n=5, width=width, height=height, max_iters=30)
    app = render_parfor_app(config)
    root, iters, image = render_queue_app(config)

    assert root.tobytes() == app.output_root.tobytes()
    assert iters.tobytes() == app.output_iters.tobytes()
    assert image.tobytes() == app.image.tobytes()


def test_queue_renders_repeatedly():
    config = RenderConfig(n=3, width=50, height=20, max_iters=20)
    app = render_queue.App(config, 2, use_fork=False)
    try:
        first = app.render().copy()
        app.image[:] = 0
        second = app.render().copy()
    finally:
        app.exit()

    assert first.tobytes() == second.tobytes()
    assert first.any()


def test_save_image(tmp_path):
    config = RenderConfig(n=3, width=24, height=16, max_iters=20)
    app = render_parfor_app(config)
    filename = tmp_path / "newton.png"

    app.save_image(str(filename))

    with Image.open(filename) as img:
        assert img.mode == "RGB"
        assert img.size == (24, 16)
        assert np.array_equal(np.asarray(img), app.image)


def test_print_info(capsys):
    config = RenderConfig(n=7, width=20, height=10, max_iters=30)
    app = render_parfor.App(config, 1)
    app.print_info()
    app.render()

    out = capsys.readouterr().out
    assert "Generating Newton fractal for z^7-1 = 0" in out
    assert "Image size: 20x10" in out
    assert "Max iterations: 30" in out
    assert "[CPU] computation finished in" in out
