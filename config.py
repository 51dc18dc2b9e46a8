"""
config.py
---------
Settings for the renderer, the CLI and the web app.

Lookup order for the YAML file:
    1. an explicit path
    2. $WOLFRAM_CA_CONFIG
    3. wolfram_ca.yaml next to this module (if present)
    4. built-in defaults

Any key left out of the file keeps its built-in value.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

ROOT = Path(__file__).resolve().parent
DEFAULT_CONFIG = ROOT / "wolfram_ca.yaml"
CONFIG_ENV = "WOLFRAM_CA_CONFIG"


@dataclass(frozen=True)
class Bounds:
    minimum: int
    maximum: int

    def __post_init__(self):
        if self.minimum < 1 or self.minimum > self.maximum:
            raise ValueError(f"invalid bounds [{self.minimum}, {self.maximum}]")

    def clamp(self, value: int) -> int:
        return min(self.maximum, max(self.minimum, value))


@dataclass(frozen=True)
class Settings:
    rule: int = 110
    cells: int = 200
    steps: int = 200
    seed: int = 0
    cells_bounds: Bounds = field(default_factory=lambda: Bounds(1, 1000))
    steps_bounds: Bounds = field(default_factory=lambda: Bounds(1, 1000))
    foreground: Tuple[int, int, int] = (0, 0, 0)
    background: Tuple[int, int, int] = (255, 255, 255)
    host: str = "127.0.0.1"
    port: int = 8000
    threads: int = 4
    log_file: Optional[Path] = Path("logs") / "renders.log"


def _color(value: Any, name: str) -> Tuple[int, int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"{name} must be a list of three integers")
    rgb = tuple(int(v) for v in value)
    if any(not (0 <= v <= 255) for v in rgb):
        raise ValueError(f"{name} components must be in [0, 255]")
    return rgb


def _bounds(value: Any, name: str) -> Bounds:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"bounds.{name} must be [min, max]")
    return Bounds(int(value[0]), int(value[1]))


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    """Overlay a parsed YAML mapping onto the built-in defaults."""
    if not isinstance(data, dict):
        raise ValueError("config root must be a mapping")
    changes: Dict[str, Any] = {}

    defaults = data.get("defaults") or {}
    for key in ("rule", "cells", "steps", "seed"):
        if key in defaults:
            changes[key] = int(defaults[key])

    bounds = data.get("bounds") or {}
    if "cells" in bounds:
        changes["cells_bounds"] = _bounds(bounds["cells"], "cells")
    if "steps" in bounds:
        changes["steps_bounds"] = _bounds(bounds["steps"], "steps")

    colors = data.get("colors") or {}
    if "foreground" in colors:
        changes["foreground"] = _color(colors["foreground"], "colors.foreground")
    if "background" in colors:
        changes["background"] = _color(colors["background"], "colors.background")

    server = data.get("server") or {}
    if "host" in server:
        changes["host"] = str(server["host"])
    if "port" in server:
        changes["port"] = int(server["port"])
    if "threads" in server:
        changes["threads"] = int(server["threads"])

    if "log_file" in data:
        changes["log_file"] = Path(data["log_file"]) if data["log_file"] else None

    return replace(Settings(), **changes)


def load_settings(path: Optional[Path] = None) -> Settings:
    if path is None:
        env_path = os.environ.get(CONFIG_ENV, "")
        if env_path:
            path = Path(env_path)
        elif DEFAULT_CONFIG.exists():
            path = DEFAULT_CONFIG
        else:
            return Settings()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return settings_from_dict(data)
