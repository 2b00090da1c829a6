from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from colorbook.fill import DEFAULT_TOLERANCE, FillMode
from colorbook.raster import BLACK, Color, to_rgba

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "data_root": "/data/colorbook",
    "log_level": "INFO",
    "fill": {
        "mode": "border",
        "tolerance": DEFAULT_TOLERANCE,
        "border_color": list(BLACK),
    },
    "pages": {
        "fit": "letterbox",
        "background": [255, 255, 255],
    },
    "palette": [
        [220, 20, 60],
        [255, 127, 0],
        [255, 215, 0],
        [34, 139, 34],
        [0, 128, 128],
        [30, 144, 255],
        [138, 43, 226],
        [255, 105, 180],
        [210, 105, 30],
        [105, 105, 105],
        [255, 255, 255],
    ],
}


@dataclass
class FillSettings:
    mode: FillMode
    tolerance: float
    border_color: Color


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _candidate_config_paths() -> list[Path]:
    env_path = os.environ.get("COLORBOOK_CONFIG")
    paths = []
    if env_path:
        paths.append(Path(env_path))
    paths.extend([
        Path("config.yaml"),
        Path("/opt/colorbook/config.yaml"),
    ])
    return paths


def load_config() -> Dict[str, Any]:
    config = dict(DEFAULT_CONFIG)
    for path in _candidate_config_paths():
        if path.exists():
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            if isinstance(data, dict):
                config = _deep_merge(config, data)
            else:
                logger.warning("Ignoring %s: top level is not a mapping", path)
            break
    return config


def _coerce_tolerance(value: object, default: float) -> float:
    try:
        tolerance = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return max(0.0, min(1.0, tolerance))


def _coerce_mode(value: object, default: FillMode) -> FillMode:
    try:
        return FillMode(str(value).lower())
    except ValueError:
        logger.warning("Unknown fill mode %r, using %s", value, default.value)
        return default


def _coerce_color(value: object, default: Color) -> Color:
    try:
        return to_rgba(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Invalid color %r, using %s", value, default)
        return default


def fill_settings(config: Dict[str, Any]) -> FillSettings:
    section = config.get("fill", {}) or {}
    return FillSettings(
        mode=_coerce_mode(section.get("mode", "border"), FillMode.BORDER),
        tolerance=_coerce_tolerance(section.get("tolerance", DEFAULT_TOLERANCE), DEFAULT_TOLERANCE),
        border_color=_coerce_color(section.get("border_color", BLACK), BLACK),
    )
