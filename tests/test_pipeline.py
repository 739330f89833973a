import math

import numpy as np
import pytest
from PIL import Image

from mandelview.pipeline import render_pass, render_to_completion, refine, save_snapshot
from mandelview.renderers.escape_time import EscapeTimeEvaluator
from mandelview.renderers.palette import GreenColorMap
from mandelview.state import INITIAL_RESOLUTION, RefinementState, new_pixel_buffer, refinement_schedule
from mandelview.viewport import Viewport, to_plane_x, to_plane_y

def test_schedule_halves_to_one():
    assert refinement_schedule(16) == (16, 8, 4, 2, 1)
    assert refinement_schedule(1) == (1,)
    with pytest.raises(ValueError):
        refinement_schedule(12)

def test_refinement_state_terminal():
    r = RefinementState()
    seen = [r.resolution]
    while not r.complete:
        seen.append(r.advance())
    assert seen == [16, 8, 4, 2, 1, 0]
    assert r.advance() == 0
    r.reset()
    assert r.resolution == INITIAL_RESOLUTION

@pytest.mark.parametrize("r", [16, 8, 4, 2])
def test_block_fill_uniform(r):
    width, height = 100, 70  # not multiples of r: edge blocks are clipped
    buf = new_pixel_buffer(width, height)
    render_pass(Viewport(scale=3.0, offset_x=-0.5), r, buf, EscapeTimeEvaluator(), GreenColorMap())
    for by in range(0, height, r):
        for bx in range(0, width, r):
            block = buf[by:by + r, bx:bx + r]
            assert np.all(block == block[0, 0])

def test_block_sample_is_centered():
    width, height, r = 64, 48, 8
    vp = Viewport(scale=3.0, offset_x=-0.5, offset_y=0.2)
    ev = EscapeTimeEvaluator()
    buf = new_pixel_buffer(width, height)
    render_pass(vp, r, buf, ev, GreenColorMap())
    for by, bx in [(0, 0), (16, 24), (40, 56)]:
        expected = ev.iterate(to_plane_x(bx - r // 2, vp, width), to_plane_y(by - r // 2, vp, width, height)) << 8
        assert buf[by, bx] == expected

def test_full_resolution_matches_per_pixel():
    width, height = 24, 18
    vp = Viewport(scale=2.5, offset_x=-0.6)
    ev = EscapeTimeEvaluator(max_iterations=64)
    buf = new_pixel_buffer(width, height)
    render_pass(vp, 1, buf, ev, GreenColorMap())
    for y in range(height):
        for x in range(width):
            assert buf[y, x] == ev.iterate(to_plane_x(x, vp, width), to_plane_y(y, vp, width, height)) << 8

def test_refine_terminates_after_log2_plus_one_passes(make_state):
    state = make_state(width=64, height=48)
    assert state.dirty
    steps = 0
    while state.dirty:
        assert refine(state)
        steps += 1
    assert steps == int(math.log2(INITIAL_RESOLUTION)) + 1
    assert state.refinement.resolution == 0
    assert not refine(state)

def test_refine_restarts_when_scale_changes_after_completion(make_state):
    state = make_state(width=32, height=32)
    render_to_completion(state)
    state.viewport.scale *= 0.5
    assert state.dirty
    assert refine(state)
    assert state.refinement.resolution == 8

def test_completed_view_colors_center_and_corner(make_state):
    state = make_state(width=50, height=30, initial_scale=4.0, center=[-0.2, 0.0])
    assert render_to_completion(state) == 5
    # center pixel lies inside the main cardioid
    assert state.buffer[15, 25] == 256 << 8
    # top-left corner maps to (-2.2, 1.2), well outside
    assert state.buffer[0, 0] < 256 << 8

def test_snapshot_writes_png(make_state, tmp_path):
    state = make_state(width=40, height=30, coloring="sine")
    path = save_snapshot(state, str(tmp_path / "out" / "view.png"))
    assert not state.dirty
    with Image.open(path) as img:
        assert img.size == (40, 30)
        assert img.mode == "RGB"

def test_buffer_is_reused_across_passes(make_state):
    state = make_state(width=24, height=16)
    buf = state.buffer
    render_to_completion(state)
    assert state.buffer is buf
    state.viewport.scale *= 0.5
    state.refinement.reset()
    render_to_completion(state)
    assert state.buffer is buf
    assert buf.shape == (16, 24)
