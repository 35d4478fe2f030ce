from __future__ import annotations

import argparse
import logging
from typing import Optional

from tqdm import tqdm

from mandelreel.config import load_config, normalise_config
from mandelreel.errors import MandelreelError
from mandelreel.iteration import budget_for
from mandelreel.session import SessionListener, ZoomSession
from mandelreel.util.logging_setup import configure_logging, get_logger


class ProgressBar(SessionListener):
    """Shows zoom generation progress as a tqdm bar."""

    def __init__(self, frames_per_zoom: int, disable: bool = False):
        self.frames_per_zoom = frames_per_zoom
        self.disable = disable
        self._bar: Optional[tqdm] = None

    def generating_started(self) -> None:
        self._bar = tqdm(total=self.frames_per_zoom, unit="frame", desc="zoom", disable=self.disable)

    def progress(self, fraction: float) -> None:
        if self._bar is not None:
            self._bar.update(round(fraction * self.frames_per_zoom) - self._bar.n)

    def generating_finished(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandelreel", description="Mandelbrot zoom animation engine (headless driver).")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. If omitted, built-in defaults are used.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="mandelreel.log", help="Log file path (rotating). Set empty to disable file logging.")
    p.add_argument("--frame-log-level", type=str, default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Log level for per-frame records. Defaults to --log-level.")
    sub = p.add_subparsers(dest="cmd", required=True)

    z = sub.add_parser("zoom", help="Run zoom animations in memory and report each step.")
    z.add_argument("--target", type=float, nargs=2, metavar=("RE", "IM"), default=(0.0, 0.0), help="Point to zoom towards.")
    z.add_argument("--zooms", type=int, default=1, help="Number of zoom requests to issue.")
    z.add_argument("--zoom-factor", type=float, default=None, help="Override zoom_factor from config.")
    z.add_argument("--frames-per-zoom", type=int, default=None, help="Override frames_per_zoom from config.")
    z.add_argument("--frame-delay", type=float, default=None, help="Override frame_delay_ms from config.")
    z.add_argument("--width", type=int, default=None, help="Override width from config.")
    z.add_argument("--height", type=int, default=None, help="Override height from config.")
    z.add_argument("--workers", type=int, default=None, help="Override workers from config.")
    z.add_argument("--replay", action="store_true", help="Replay every frame with the frame delay when done.")
    z.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")

    b = sub.add_parser("budget", help="Print the iteration budget for magnifications.")
    b.add_argument("magnifications", type=float, nargs="+", help="Magnification values.")

    return p


def _run_zoom(args: argparse.Namespace, cfg: dict) -> int:
    logger = get_logger()
    overrides = {
        "zoom_factor": args.zoom_factor,
        "frames_per_zoom": args.frames_per_zoom,
        "frame_delay_ms": args.frame_delay,
        "width": args.width,
        "height": args.height,
        "workers": args.workers,
    }
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    cfg = normalise_config(cfg)

    session = ZoomSession.from_config(cfg)
    session.add_listener(ProgressBar(session.frames_per_zoom, disable=args.no_progress))
    session.initialize()

    target_re, target_im = args.target
    for n in range(1, args.zooms + 1):
        if not session.request_zoom(target_re, target_im):
            logger.warning("Stopped after %s zoom(s): magnification %.6g", n - 1, session.magnification)
            break
        w = session.window
        logger.info("Zoom %s/%s magnification=%.6g iter=%s window=[%.12g, %.12g] x [%.12g, %.12g] frames=%s",
                    n, args.zooms, session.magnification, session.max_iterations,
                    w.x_min, w.x_max, w.y_min, w.y_max, session.last_index + 1)

    if args.replay:
        logger.info("Replaying %s frames at %sms", session.last_index, session.frame_delay_ms)
        session.replay_all()
    return 0


def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    frame_level = getattr(logging, args.frame_log_level) if args.frame_log_level else None
    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    configure_logging(log_level, frame_level=frame_level, log_file=log_file)
    logger = get_logger()

    try:
        cfg = load_config(args.config)

        if args.cmd == "zoom":
            return _run_zoom(args, cfg)

        if args.cmd == "budget":
            for m in args.magnifications:
                print(f"{m:g}\t{budget_for(m)}")
            return 0

        raise RuntimeError("Unknown command.")
    except MandelreelError as e:
        logger.error("%s", e)
        return 2
