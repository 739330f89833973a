from __future__ import annotations

import math
from typing import Union

import numpy as np
from numba import njit

MAX_ITERATIONS = 256
ESCAPE_RADIUS_SQUARED = 4.0
SMOOTH_ESCAPE_RADIUS_SQUARED = float(1 << 16)

# ------------------------------------------------------------
# Kernels: z -> z^2 + c starting from z = 0, stop on escape or cap.
# NaN never satisfies the escape test, so it runs to the cap.
# ------------------------------------------------------------
@njit(cache=True)
def _escape_count(x0, y0, max_iter, r2):
    x = 0.0
    y = 0.0
    n = 0
    while n < max_iter:
        if x * x + y * y > r2:
            break
        xt = x * x - y * y + x0
        y = 2.0 * x * y + y0
        x = xt
        n += 1
    return n

@njit(cache=True)
def _smooth_escape_count(x0, y0, max_iter, r2):
    x = 0.0
    y = 0.0
    n = 0
    while n < max_iter:
        if x * x + y * y > r2:
            break
        xt = x * x - y * y + x0
        y = 2.0 * x * y + y0
        x = xt
        n += 1
    if n >= max_iter:
        return float(max_iter)
    log_zn = math.log(x * x + y * y) / 2.0
    nu = math.log(log_zn / math.log(2.0)) / math.log(2.0)
    mu = n + 1 - nu
    if mu < 0.0:
        return 0.0
    if mu > max_iter:
        return float(max_iter)
    return mu

@njit(cache=True)
def _escape_grid(xs, ys, max_iter, r2, out):
    for j in range(ys.shape[0]):
        for i in range(xs.shape[0]):
            out[j, i] = _escape_count(xs[i], ys[j], max_iter, r2)
    return out

@njit(cache=True)
def _smooth_escape_grid(xs, ys, max_iter, r2, out):
    for j in range(ys.shape[0]):
        for i in range(xs.shape[0]):
            out[j, i] = _smooth_escape_count(xs[i], ys[j], max_iter, r2)
    return out

def iterate(
    x0: float,
    y0: float,
    max_iterations: int = MAX_ITERATIONS,
    escape_radius_squared: float = ESCAPE_RADIUS_SQUARED,
) -> int:
    return int(_escape_count(float(x0), float(y0), int(max_iterations), float(escape_radius_squared)))

def iterate_smooth(
    x0: float,
    y0: float,
    max_iterations: int = MAX_ITERATIONS,
    escape_radius_squared: float = SMOOTH_ESCAPE_RADIUS_SQUARED,
) -> float:
    return float(_smooth_escape_count(float(x0), float(y0), int(max_iterations), float(escape_radius_squared)))

class EscapeTimeEvaluator:
    """Integer escape-time counts in ``[0, max_iterations]``."""

    dtype = np.int32

    def __init__(self, max_iterations: int = MAX_ITERATIONS, escape_radius_squared: float = ESCAPE_RADIUS_SQUARED):
        self.max_iterations = int(max_iterations)
        self.escape_radius_squared = float(escape_radius_squared)

    def iterate(self, x0: float, y0: float) -> Union[int, float]:
        return iterate(x0, y0, self.max_iterations, self.escape_radius_squared)

    def evaluate_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xs = np.ascontiguousarray(xs, dtype=np.float64)
        ys = np.ascontiguousarray(ys, dtype=np.float64)
        out = np.empty((ys.shape[0], xs.shape[0]), dtype=self.dtype)
        return _escape_grid(xs, ys, self.max_iterations, self.escape_radius_squared, out)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_iterations={self.max_iterations}, escape_radius_squared={self.escape_radius_squared})"

class SmoothEscapeTimeEvaluator(EscapeTimeEvaluator):
    """Fractional counts with the log-log correction, for smooth banding."""

    dtype = np.float64

    def __init__(self, max_iterations: int = MAX_ITERATIONS, escape_radius_squared: float = SMOOTH_ESCAPE_RADIUS_SQUARED):
        super().__init__(max_iterations, escape_radius_squared)

    def iterate(self, x0: float, y0: float) -> float:
        return iterate_smooth(x0, y0, self.max_iterations, self.escape_radius_squared)

    def evaluate_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xs = np.ascontiguousarray(xs, dtype=np.float64)
        ys = np.ascontiguousarray(ys, dtype=np.float64)
        out = np.empty((ys.shape[0], xs.shape[0]), dtype=self.dtype)
        return _smooth_escape_grid(xs, ys, self.max_iterations, self.escape_radius_squared, out)
