from __future__ import annotations

from dataclasses import dataclass

@dataclass
class Viewport:
    """Visible window onto the complex plane.

    ``scale`` is the horizontal extent in plane units. The vertical extent is
    ``scale * height / width`` so pixels stay square on any surface.
    """

    scale: float = 2.0
    offset_x: float = 0.0
    offset_y: float = 0.0

def aspect_ratio(width: int, height: int) -> float:
    return height / width

def to_plane_x(sx, viewport: Viewport, width: int):
    return ((sx / width) - 0.5) * viewport.scale + viewport.offset_x

def to_plane_y(sy, viewport: Viewport, width: int, height: int):
    # screen y grows downward, imaginary axis grows upward
    aspect = aspect_ratio(width, height)
    return -((sy / height) * aspect - aspect / 2) * viewport.scale + viewport.offset_y

def to_plane(sx, sy, viewport: Viewport, width: int, height: int):
    return to_plane_x(sx, viewport, width), to_plane_y(sy, viewport, width, height)
