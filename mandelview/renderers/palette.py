# palette.py

from __future__ import annotations

import numpy as np

def pack_rgb(r, g, b) -> np.ndarray:
    r = np.asarray(r, dtype=np.uint32)
    g = np.asarray(g, dtype=np.uint32)
    b = np.asarray(b, dtype=np.uint32)
    return (r << 16) | (g << 8) | b

def unpack_rgb(packed: np.ndarray) -> np.ndarray:
    """Split packed 0x00RRGGBB values into a trailing uint8 RGB axis."""
    packed = np.asarray(packed, dtype=np.uint32)
    return np.stack(
        [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF],
        axis=-1,
    ).astype(np.uint8)

class ColorMap:
    name = "base"

    def __call__(self, iterations) -> np.ndarray:
        raise NotImplementedError

    def color_of(self, iteration) -> int:
        return int(self(np.asarray([iteration]))[0])

class GreenColorMap(ColorMap):
    """Iteration count shifted into the green channel."""

    name = "green"

    def __call__(self, iterations) -> np.ndarray:
        it = np.asarray(iterations).astype(np.uint32)
        return it << 8

class BandedColorMap(ColorMap):
    """Spreads the low bits of the count across all three channels."""

    name = "banded"

    def __call__(self, iterations) -> np.ndarray:
        it = np.asarray(iterations).astype(np.uint32)
        return (it & 0x7) | ((it & 0x38) << 8) | ((it & 0x60) << 16)

class SineColorMap(ColorMap):
    """
    Sine-based palette over a (smooth) count. Points at the cap are black.
    Otherwise t = (mu / max_iter) ** 0.7 and each channel is a sine of t
    phase-shifted by a third of a turn.
    """

    name = "sine"

    def __init__(self, max_iterations: int):
        self.max_iterations = int(max_iterations)

    def __call__(self, iterations) -> np.ndarray:
        mu = np.asarray(iterations, dtype=np.float64)
        inside = mu >= self.max_iterations
        t = np.clip(mu / self.max_iterations, 0.0, 1.0) ** 0.7  # nonlinear stretch for contrast

        r = (255 * (0.5 + 0.5 * np.sin(6 * np.pi * t))).astype(np.uint32)
        g = (255 * (0.5 + 0.5 * np.sin(6 * np.pi * t + 2 * np.pi / 3))).astype(np.uint32)
        b = (255 * (0.5 + 0.5 * np.sin(6 * np.pi * t + 4 * np.pi / 3))).astype(np.uint32)
        packed = pack_rgb(r, g, b)
        return np.where(inside, np.uint32(0), packed).astype(np.uint32)
