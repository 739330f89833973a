import json
from typing import Any, Dict, Optional

COLORINGS = ("green", "banded", "sine")

DEFAULT_CONFIG: Dict[str, Any] = {
    "width": 640,
    "height": 480,
    "fps": 30,
    "initial_scale": 2.0,
    "center": [0.0, 0.0],
    "initial_resolution": 16,
    "max_iterations": 256,
    "escape_radius_squared": 4.0,
    "coloring": "green",
    "zoom_in_factor": 0.5,
    "zoom_out_factor": 1.5,
    "min_scale": 1e-13,
    "title": "mandelview",
}

def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if config_path:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
        if not isinstance(cfg, dict):
            raise ValueError("Config JSON must be an object.")
        return cfg
    return dict(DEFAULT_CONFIG)

def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0

def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(DEFAULT_CONFIG)
    merged.update({k: v for k, v in cfg.items() if v is not None})

    width = int(merged["width"])
    height = int(merged["height"])
    if width <= 0 or height <= 0:
        raise ValueError("width/height must be positive.")

    fps = int(merged["fps"])
    if fps <= 0:
        raise ValueError("fps must be positive.")

    initial_scale = float(merged["initial_scale"])
    min_scale = float(merged["min_scale"])
    if initial_scale <= 0 or min_scale <= 0:
        raise ValueError("initial_scale/min_scale must be positive.")
    if initial_scale < min_scale:
        raise ValueError("initial_scale must not be below min_scale.")

    center = merged["center"]
    if not (isinstance(center, (list, tuple)) and len(center) == 2):
        raise ValueError("center must be [re, im].")

    initial_resolution = int(merged["initial_resolution"])
    if not _is_power_of_two(initial_resolution):
        raise ValueError("initial_resolution must be a power of two.")

    max_iterations = int(merged["max_iterations"])
    if max_iterations <= 0:
        raise ValueError("max_iterations must be positive.")

    escape_radius_squared = float(merged["escape_radius_squared"])
    if escape_radius_squared <= 0:
        raise ValueError("escape_radius_squared must be positive.")

    coloring = str(merged["coloring"]).lower()
    if coloring not in COLORINGS:
        raise ValueError(f"coloring must be one of: {', '.join(COLORINGS)}")

    zoom_in = float(merged["zoom_in_factor"])
    zoom_out = float(merged["zoom_out_factor"])
    if not 0 < zoom_in < 1:
        raise ValueError("zoom_in_factor must be in (0, 1).")
    if zoom_out <= 1:
        raise ValueError("zoom_out_factor must be > 1.")

    out = dict(merged)
    out["width"] = width
    out["height"] = height
    out["fps"] = fps
    out["initial_scale"] = initial_scale
    out["min_scale"] = min_scale
    out["center"] = [float(center[0]), float(center[1])]
    out["initial_resolution"] = initial_resolution
    out["max_iterations"] = max_iterations
    out["escape_radius_squared"] = escape_radius_squared
    out["coloring"] = coloring
    out["zoom_in_factor"] = zoom_in
    out["zoom_out_factor"] = zoom_out
    out["title"] = str(merged["title"])
    return out
