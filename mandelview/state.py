from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np

from mandelview.renderers.escape_time import EscapeTimeEvaluator, SmoothEscapeTimeEvaluator
from mandelview.renderers.palette import BandedColorMap, ColorMap, GreenColorMap, SineColorMap
from mandelview.viewport import Viewport

INITIAL_RESOLUTION = 1 << 4

def refinement_schedule(initial_resolution: int) -> Tuple[int, ...]:
    """Block sizes for one coarse-to-fine sequence, e.g. 16 -> (16, 8, 4, 2, 1)."""
    if initial_resolution <= 0 or initial_resolution & (initial_resolution - 1):
        raise ValueError("initial_resolution must be a power of two.")
    sizes = []
    r = initial_resolution
    while r >= 1:
        sizes.append(r)
        r >>= 1
    return tuple(sizes)

@dataclass
class RefinementState:
    """
    Position in the coarse-to-fine sequence.

    ``level`` indexes ``schedule``; ``level == len(schedule)`` is the terminal
    complete state, where ``resolution`` reports 0.
    """

    initial_resolution: int = INITIAL_RESOLUTION
    level: int = 0
    last_rendered_scale: Optional[float] = None
    schedule: Tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.schedule = refinement_schedule(self.initial_resolution)

    @property
    def complete(self) -> bool:
        return self.level >= len(self.schedule)

    @property
    def resolution(self) -> int:
        if self.complete:
            return 0
        return self.schedule[self.level]

    def advance(self) -> int:
        if not self.complete:
            self.level += 1
        return self.resolution

    def reset(self) -> None:
        self.level = 0

def new_pixel_buffer(width: int, height: int) -> np.ndarray:
    return np.zeros((height, width), dtype=np.uint32)

@dataclass
class EngineState:
    width: int
    height: int
    viewport: Viewport
    refinement: RefinementState
    evaluator: EscapeTimeEvaluator
    color_map: ColorMap
    buffer: np.ndarray = field(repr=False, default=None)  # type: ignore[assignment]
    min_scale: float = 1e-13

    def __post_init__(self) -> None:
        if self.buffer is None:
            self.buffer = new_pixel_buffer(self.width, self.height)
        if self.buffer.shape != (self.height, self.width):
            raise ValueError("buffer shape must be (height, width).")

    @property
    def dirty(self) -> bool:
        return self.refinement.last_rendered_scale != self.viewport.scale or not self.refinement.complete

def build_strategies(coloring: str, max_iterations: int, escape_radius_squared: float) -> Tuple[EscapeTimeEvaluator, ColorMap]:
    if coloring == "green":
        return EscapeTimeEvaluator(max_iterations, escape_radius_squared), GreenColorMap()
    if coloring == "banded":
        return SmoothEscapeTimeEvaluator(max_iterations), BandedColorMap()
    if coloring == "sine":
        return SmoothEscapeTimeEvaluator(max_iterations), SineColorMap(max_iterations)
    raise ValueError(f"Unknown coloring: {coloring}")

def create_engine_state(cfg: Dict[str, Any]) -> EngineState:
    """Build the engine from a normalised config dict."""
    evaluator, color_map = build_strategies(
        cfg["coloring"], int(cfg["max_iterations"]), float(cfg["escape_radius_squared"])
    )
    center = cfg["center"]
    return EngineState(
        width=int(cfg["width"]),
        height=int(cfg["height"]),
        viewport=Viewport(scale=float(cfg["initial_scale"]), offset_x=float(center[0]), offset_y=float(center[1])),
        refinement=RefinementState(initial_resolution=int(cfg["initial_resolution"])),
        evaluator=evaluator,
        color_map=color_map,
        min_scale=float(cfg["min_scale"]),
    )
