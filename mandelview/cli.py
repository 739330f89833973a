from __future__ import annotations

import argparse
from typing import Any, Dict, Optional

from mandelview.config import COLORINGS, load_config, normalise_config
from mandelview.interaction import InteractionController
from mandelview.pipeline import save_snapshot
from mandelview.scheduler import FrameScheduler
from mandelview.state import create_engine_state
from mandelview.util.logging_setup import configure_root_logging, get_logger, shutdown_logging

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandelview", description="Interactive progressive Mandelbrot viewer.")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. If omitted, built-in defaults are used.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG","INFO","WARNING","ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="mandelview.log", help="Log file path (rotating). Set empty to disable file logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_view_options(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--width", type=int, default=None, help="Surface width in pixels.")
        sp.add_argument("--height", type=int, default=None, help="Surface height in pixels.")
        sp.add_argument("--coloring", type=str, default=None, choices=list(COLORINGS), help="Coloring mode.")
        sp.add_argument("--max-iterations", type=int, default=None, help="Iteration cap per point.")

    v = sub.add_parser("view", help="Open the interactive viewer window.")
    add_view_options(v)
    v.add_argument("--fps", type=int, default=None, help="Target frame rate.")

    s = sub.add_parser("snapshot", help="Render a fully refined view to a PNG file.")
    add_view_options(s)
    s.add_argument("--output", type=str, required=True, help="Output PNG path.")
    s.add_argument("--center", type=float, nargs=2, default=None, metavar=("RE", "IM"), help="Plane-space center.")
    s.add_argument("--scale", type=float, default=None, help="Horizontal width of the view in plane units.")

    return p

def _apply_overrides(cfg: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    overrides = {
        "width": args.width,
        "height": args.height,
        "coloring": args.coloring,
        "max_iterations": args.max_iterations,
        "fps": getattr(args, "fps", None),
        "center": getattr(args, "center", None),
        "initial_scale": getattr(args, "scale", None),
    }
    out = dict(cfg)
    out.update({k: v for k, v in overrides.items() if v is not None})
    return out

def run_viewer(cfg: Dict[str, Any]) -> int:
    from mandelview.platform.pygame_window import PygameWindow

    logger = get_logger()
    state = create_engine_state(cfg)
    window = PygameWindow(state.width, state.height, title=cfg["title"])
    try:
        controller = InteractionController(
            state,
            zoom_in_factor=cfg["zoom_in_factor"],
            zoom_out_factor=cfg["zoom_out_factor"],
            status_sink=window.set_status,
        )
        scheduler = FrameScheduler(state, controller, window, fps=cfg["fps"])
        ticks = scheduler.run()
        logger.info("Viewer closed after %s ticks (%s render passes)", ticks, scheduler.frames_rendered)
        return 0
    finally:
        window.close()

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    configure_root_logging(level=args.log_level, console=True, log_file=args.log_file)

    logger = get_logger()

    try:
        cfg = normalise_config(_apply_overrides(load_config(args.config), args))
        logger.info("Config %sx%s coloring=%s max_iterations=%s initial_resolution=%s",
                    cfg["width"], cfg["height"], cfg["coloring"], cfg["max_iterations"], cfg["initial_resolution"])

        if args.cmd == "view":
            return run_viewer(cfg)

        if args.cmd == "snapshot":
            save_snapshot(create_engine_state(cfg), args.output)
            return 0

        raise RuntimeError("Unknown command.")
    except Exception:
        logger.exception("mandelview %s failed", args.cmd)
        return 1
    finally:
        shutdown_logging()
