from __future__ import annotations

import os
import time

import numpy as np
from PIL import Image

from mandelview.renderers.escape_time import EscapeTimeEvaluator
from mandelview.renderers.palette import ColorMap, unpack_rgb
from mandelview.state import EngineState
from mandelview.util.logging_setup import get_logger
from mandelview.viewport import Viewport, to_plane_x, to_plane_y

def _sample_offset(resolution: int) -> int:
    # sample the middle of each block, not its top-left corner
    return 0 if resolution == 1 else resolution >> 1

def render_pass(
    viewport: Viewport,
    resolution: int,
    buffer: np.ndarray,
    evaluator: EscapeTimeEvaluator,
    color_map: ColorMap,
) -> np.ndarray:
    """
    Fill ``buffer`` with one sample per ``resolution`` x ``resolution`` block.

    Each block is painted with the color of the point sampled at
    ``(sx - r/2, sy - r/2)``; blocks on the right and bottom edges are clipped.
    """
    if resolution < 1:
        raise ValueError("resolution must be >= 1")
    height, width = buffer.shape
    offset = _sample_offset(resolution)

    sx = np.arange(0, width, resolution, dtype=np.float64) - offset
    sy = np.arange(0, height, resolution, dtype=np.float64) - offset
    xs = to_plane_x(sx, viewport, width)
    ys = to_plane_y(sy, viewport, width, height)

    colors = color_map(evaluator.evaluate_grid(xs, ys))

    if resolution == 1:
        buffer[:, :] = colors
    else:
        blocks = np.repeat(np.repeat(colors, resolution, axis=0), resolution, axis=1)
        buffer[:, :] = blocks[:height, :width]
    return buffer

def refine(state: EngineState) -> bool:
    """Run one refinement pass if the state is dirty. Returns whether a pass ran."""
    if not state.dirty:
        return False

    logger = get_logger("pipeline")
    refinement = state.refinement
    if refinement.complete:
        # scale moved without a reset; start the sequence over
        refinement.reset()

    resolution = refinement.resolution
    start = time.perf_counter()
    render_pass(state.viewport, resolution, state.buffer, state.evaluator, state.color_map)
    refinement.last_rendered_scale = state.viewport.scale
    refinement.advance()

    logger.debug("Pass resolution=%s scale=%s done in %.1fms next=%s",
                 resolution, state.viewport.scale, (time.perf_counter() - start) * 1000.0, refinement.resolution)
    return True

def render_to_completion(state: EngineState) -> int:
    passes = 0
    while refine(state):
        passes += 1
    return passes

def buffer_to_image(buffer: np.ndarray) -> Image.Image:
    return Image.fromarray(unpack_rgb(buffer))

def save_snapshot(state: EngineState, path: str) -> str:
    logger = get_logger()
    passes = render_to_completion(state)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    img = buffer_to_image(state.buffer)
    img.save(path, format="PNG", optimize=True)
    logger.info("Snapshot written: %s (%sx%s scale=%s center=(%s, %s) passes=%s)",
                path, state.width, state.height, state.viewport.scale,
                state.viewport.offset_x, state.viewport.offset_y, passes)
    return path
