"""
Settings loading.

Packaged defaults live in settings.json next to this module. A user file
given on the command line is merged over them key by key, then
normalise_settings() coerces and validates the result.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from .viewport import ColorScheme, Viewport


logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


def _read_json(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Settings JSON must be an object: {path}")
    return cfg


def load_settings(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Packaged defaults merged with the optional user file, normalised."""
    cfg = _read_json(DEFAULT_SETTINGS_PATH)
    if config_path:
        user = _read_json(config_path)
        unknown = sorted(set(user) - set(cfg))
        if unknown:
            logger.warning("Ignoring unknown settings in %s: %s", config_path, ", ".join(unknown))
        cfg.update({k: v for k, v in user.items() if k in cfg})
        logger.info("Loaded settings from %s", config_path)
    return normalise_settings(cfg)


def _positive(cfg: Dict[str, Any], key: str, kind) -> Any:
    try:
        value = kind(cfg[key])
    except KeyError:
        raise ValueError(f"Missing settings field: {key}") from None
    except (TypeError, ValueError):
        raise ValueError(f"Settings field {key} must be a number, got {cfg[key]!r}") from None
    if value <= 0:
        raise ValueError(f"Settings field {key} must be positive, got {value!r}")
    return value


def _normalise_landmark(entry: Any) -> Dict[str, Any]:
    if not isinstance(entry, dict) or not {"name", "x", "y", "zoom"} <= set(entry):
        raise ValueError(f"Landmark must have name, x, y and zoom: {entry!r}")
    zoom = float(entry["zoom"])
    if zoom <= 0:
        raise ValueError(f"Landmark zoom must be positive: {entry!r}")
    return {
        "name": str(entry["name"]),
        "x": float(entry["x"]),
        "y": float(entry["y"]),
        "zoom": zoom,
        "desc": str(entry.get("desc", "")),
    }


def normalise_settings(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(cfg)
    out["width"] = _positive(cfg, "width", int)
    out["height"] = _positive(cfg, "height", int)
    out["iteration_min"] = _positive(cfg, "iteration_min", int)
    out["iteration_max"] = _positive(cfg, "iteration_max", int)
    if out["iteration_min"] > out["iteration_max"]:
        raise ValueError("iteration_min must not exceed iteration_max.")

    max_iterations = _positive(cfg, "max_iterations", int)
    out["max_iterations"] = max(out["iteration_min"], min(out["iteration_max"], max_iterations))
    if out["max_iterations"] != max_iterations:
        logger.warning("max_iterations %s clamped to %s", max_iterations, out["max_iterations"])

    out["color_scheme"] = ColorScheme.from_name(cfg.get("color_scheme", "classic"))
    out["zoom_step"] = _positive(cfg, "zoom_step", float)
    out["drag_threshold_px"] = _positive(cfg, "drag_threshold_px", float)
    out["dive_interval_ms"] = _positive(cfg, "dive_interval_ms", int)
    out["dive_zoom_rate"] = _positive(cfg, "dive_zoom_rate", float)
    out["dive_approach"] = _positive(cfg, "dive_approach", float)
    if out["dive_approach"] > 1:
        raise ValueError("dive_approach must be in (0, 1].")

    landmarks = cfg.get("landmarks", [])
    if not isinstance(landmarks, list):
        raise ValueError("landmarks must be a list.")
    out["landmarks"] = [_normalise_landmark(entry) for entry in landmarks]
    return out


def initial_viewport(settings: Dict[str, Any]) -> Viewport:
    """Default view with the configured iteration cap and color scheme."""
    return Viewport(max_iterations=settings["max_iterations"],
                    color_scheme=settings["color_scheme"])
