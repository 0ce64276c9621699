# gridpath/app/config.py
#!/usr/bin/env python3
"""
Viewer settings: defaults, overridden by environment, overridden by CLI.

- ENV: GRIDPATH_CELL_SIZE, GRIDPATH_WAVE_DELAY_MS, GRIDPATH_PATH_DELAY_MS,
       GRIDPATH_MAP, GRIDPATH_SEED
- CLI: --cell-size=, --wave-delay=, --path-delay=, --map=, --seed=
"""

import math
import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

CELL_SIZE_DEFAULT = 20
WAVE_DELAY_MS_DEFAULT = 50
PATH_DELAY_MS_DEFAULT = 5

_KEYS = {
    "cell-size":  "GRIDPATH_CELL_SIZE",
    "wave-delay": "GRIDPATH_WAVE_DELAY_MS",
    "path-delay": "GRIDPATH_PATH_DELAY_MS",
    "map":        "GRIDPATH_MAP",
    "seed":       "GRIDPATH_SEED",
}

@dataclass
class Settings:
    cell_size: int = CELL_SIZE_DEFAULT
    wave_delay: float = WAVE_DELAY_MS_DEFAULT / 1000.0   # seconds
    path_delay: float = PATH_DELAY_MS_DEFAULT / 1000.0   # seconds
    map_name: Optional[str] = None
    seed: Optional[int] = None


def _raw_values(environ: Dict[str, str], argv: List[str]) -> Dict[str, str]:
    raw = {key: environ[env] for key, env in _KEYS.items() if env in environ}
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, value = arg[2:].split("=", 1)
        if key in _KEYS:
            raw[key] = value
    return raw


def resolve_settings(environ: Optional[Dict[str, str]] = None,
                     argv: Optional[List[str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    argv = sys.argv[1:] if argv is None else argv
    raw = _raw_values(environ, argv)

    s = Settings()
    try:
        if "cell-size" in raw:
            s.cell_size = int(raw["cell-size"])
        if "wave-delay" in raw:
            s.wave_delay = float(raw["wave-delay"]) / 1000.0
        if "path-delay" in raw:
            s.path_delay = float(raw["path-delay"]) / 1000.0
        if "seed" in raw:
            s.seed = int(raw["seed"])
    except ValueError as ex:
        raise ValueError(f"invalid setting: {ex}") from ex
    s.map_name = raw.get("map") or None

    if s.cell_size < 4:
        raise ValueError(f"cell size must be at least 4 px, got {s.cell_size}")
    for name, value in (("wave delay", s.wave_delay), ("path delay", s.path_delay)):
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"{name} must be a finite, non-negative number, got {value}")
    return s
