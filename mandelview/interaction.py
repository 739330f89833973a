from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional, Union

from mandelview.state import EngineState
from mandelview.util.logging_setup import get_logger
from mandelview.viewport import to_plane

class Button(enum.Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"

@dataclass(frozen=True)
class Terminate:
    pass

@dataclass(frozen=True)
class PointerDown:
    x: int
    y: int
    button: Button

@dataclass(frozen=True)
class PointerUp:
    x: int
    y: int
    button: Button

@dataclass(frozen=True)
class PointerMove:
    x: int
    y: int

Event = Union[Terminate, PointerDown, PointerUp, PointerMove]

StatusSink = Callable[[str], None]

def format_status(x: float, y: float) -> str:
    return "offset x: %f, offset y: %f" % (x, y)

class InteractionController:
    """Turns pointer events into viewport changes.

    Releasing the primary button zooms in on the point under the pointer,
    the secondary button zooms out. Both restart refinement.
    """

    def __init__(
        self,
        state: EngineState,
        *,
        zoom_in_factor: float = 0.5,
        zoom_out_factor: float = 1.5,
        status_sink: Optional[StatusSink] = None,
    ):
        self.state = state
        self.zoom_in_factor = zoom_in_factor
        self.zoom_out_factor = zoom_out_factor
        self.status_sink = status_sink
        self._logger = get_logger("interaction")

    def handle(self, event: Event) -> None:
        if isinstance(event, PointerUp):
            self._on_release(event)
        elif isinstance(event, PointerMove):
            self._on_move(event)

    def plane_point(self, x: int, y: int):
        s = self.state
        return to_plane(x, y, s.viewport, s.width, s.height)

    def _on_release(self, event: PointerUp) -> None:
        if event.button is Button.PRIMARY:
            factor = self.zoom_in_factor
        elif event.button is Button.SECONDARY:
            factor = self.zoom_out_factor
        else:
            return

        viewport = self.state.viewport
        viewport.offset_x, viewport.offset_y = self.plane_point(event.x, event.y)
        # the floor never lifts a scale that is already below it
        viewport.scale = max(viewport.scale * factor, min(self.state.min_scale, viewport.scale))
        self.state.refinement.reset()
        self._logger.debug("Viewport -> scale=%s center=(%s, %s) via %s at (%s, %s)",
                           viewport.scale, viewport.offset_x, viewport.offset_y,
                           event.button.value, event.x, event.y)

    def _on_move(self, event: PointerMove) -> None:
        if self.status_sink is None:
            return
        self.status_sink(format_status(*self.plane_point(event.x, event.y)))
