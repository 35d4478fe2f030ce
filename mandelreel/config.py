import json
from typing import Any, Dict, Optional

from mandelreel.errors import InvalidParameter

DEFAULT_CONFIG: Dict[str, Any] = {
    "width": 1200,
    "height": 600,
    "zoom_factor": 10.0,
    "frame_delay_ms": 100,
    "frames_per_zoom": 10,
    "x_range": 4.0,
    "y_range": 2.0,
    "border_left": 0,
    "border_top": 0,
    "workers": 1,
    "band_height": 32,
    "draw_axes": True,
    "max_zoom": 1e7,
}


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return dict(DEFAULT_CONFIG)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except OSError as e:
        raise InvalidParameter(f"Cannot read config file {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InvalidParameter(f"Config file {config_path} is not valid JSON: {e}") from e
    if not isinstance(cfg, dict):
        raise InvalidParameter("Config JSON must be an object.")
    return cfg


def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    unknown = sorted(set(cfg) - set(DEFAULT_CONFIG))
    if unknown:
        raise InvalidParameter(f"Unknown config field(s): {', '.join(unknown)}")

    merged = dict(DEFAULT_CONFIG)
    merged.update(cfg)

    try:
        out = {
            "width": int(merged["width"]),
            "height": int(merged["height"]),
            "zoom_factor": float(merged["zoom_factor"]),
            "frame_delay_ms": float(merged["frame_delay_ms"]),
            "frames_per_zoom": int(merged["frames_per_zoom"]),
            "x_range": float(merged["x_range"]),
            "y_range": float(merged["y_range"]),
            "border_left": int(merged["border_left"]),
            "border_top": int(merged["border_top"]),
            "workers": int(merged["workers"]),
            "band_height": int(merged["band_height"]),
            "draw_axes": bool(merged["draw_axes"]),
            "max_zoom": float(merged["max_zoom"]),
        }
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"Invalid config value: {e}") from e

    if out["width"] <= 0 or out["height"] <= 0:
        raise InvalidParameter("width/height must be positive.")
    if not out["zoom_factor"] >= 1:
        raise InvalidParameter("zoom_factor must be at least 1.")
    if out["frame_delay_ms"] < 0:
        raise InvalidParameter("frame_delay_ms must not be negative.")
    if out["frames_per_zoom"] <= 0:
        raise InvalidParameter("frames_per_zoom must be positive.")
    if out["x_range"] <= 0 or out["y_range"] <= 0:
        raise InvalidParameter("x_range/y_range must be positive.")
    if out["workers"] <= 0 or out["band_height"] <= 0:
        raise InvalidParameter("workers/band_height must be positive.")
    if out["max_zoom"] < 1:
        raise InvalidParameter("max_zoom must be at least 1.")
    return out
