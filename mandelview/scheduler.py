from __future__ import annotations

import time
from typing import Callable, Iterable, Optional, Protocol

import numpy as np

from mandelview.interaction import Event, InteractionController, Terminate
from mandelview.pipeline import refine
from mandelview.state import EngineState
from mandelview.util.logging_setup import get_logger

class Platform(Protocol):
    def poll_events(self) -> Iterable[Event]: ...

    def present(self, buffer: np.ndarray) -> None: ...

    def set_status(self, text: str) -> None: ...

    def close(self) -> None: ...

class FrameScheduler:
    """Fixed-rate loop: drain events, refine when dirty, sleep out the budget."""

    def __init__(
        self,
        state: EngineState,
        controller: InteractionController,
        platform: Platform,
        *,
        fps: int = 30,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if fps <= 0:
            raise ValueError("fps must be positive.")
        self.state = state
        self.controller = controller
        self.platform = platform
        self.frame_budget = 1.0 / fps
        self.clock = clock
        self.sleep = sleep
        self.running = True
        self.frames_rendered = 0
        self._logger = get_logger("scheduler")

    def drain_events(self) -> None:
        for event in self.platform.poll_events():
            if isinstance(event, Terminate):
                self.running = False
            else:
                self.controller.handle(event)

    def tick(self) -> bool:
        start = self.clock()
        self.drain_events()

        if self.running and refine(self.state):
            self.platform.present(self.state.buffer)
            self.frames_rendered += 1

        elapsed = self.clock() - start
        delay = self.frame_budget - elapsed
        if delay < 0:
            self._logger.debug("Frame overran budget by %.1fms", -delay * 1000.0)
        self.sleep(max(0.0, delay))
        return self.running

    def run(self, max_frames: Optional[int] = None) -> int:
        ticks = 0
        while self.running:
            if max_frames is not None and ticks >= max_frames:
                break
            self.tick()
            ticks += 1
        return ticks
