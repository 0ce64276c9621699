# gridpath/core/maps.py
#!/usr/bin/env python3
"""
Map loading.

Text rows use one character per cell:
    .  open      #  wall      S  start      E  end

JSON files hold either {"rows": [...]} in that alphabet, or
{"width", "height", "walls": [[row, col], ...], "start": [row, col], "end": [row, col]}.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List

from gridpath.core.grid import Grid

MAP_DIR = Path(__file__).resolve().parents[2] / "maps"
MAP_FILES: Dict[str, Path] = {
    "01_open_field": MAP_DIR / "01_open_field.json",
    "02_detour":     MAP_DIR / "02_detour.json",
    "03_corridors":  MAP_DIR / "03_corridors.json",
}

OPEN, WALL, START, END = ".", "#", "S", "E"


def from_rows(lines: Iterable[str]) -> Grid:
    rows: List[str] = [ln.strip() for ln in lines if ln.strip()]
    if not rows:
        raise ValueError("map has no rows")
    width = len(rows[0])
    if any(len(r) != width for r in rows):
        raise ValueError("map rows differ in length")

    grid = Grid.build(len(rows), width)
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            if ch == WALL:
                grid.toggle_wall(r, c)
            elif ch == START:
                if grid.start is not None:
                    raise ValueError("map has more than one start")
                grid.set_start(r, c)
            elif ch == END:
                if grid.end is not None:
                    raise ValueError("map has more than one end")
                grid.set_end(r, c)
            elif ch != OPEN:
                raise ValueError(f"unknown map character {ch!r} at ({r}, {c})")
    return grid


def to_rows(grid: Grid) -> List[str]:
    out = []
    for row in grid.cells:
        out.append("".join(
            START if c.is_start else END if c.is_end else WALL if c.is_wall else OPEN
            for c in row
        ))
    return out


def load_map(path: Path) -> Grid:
    with open(path, "r") as f:
        data = json.load(f)
    if "rows" in data:
        return from_rows(data["rows"])

    width  = int(data["width"])
    height = int(data["height"])
    grid = Grid.build(height, width)
    for r, c in data.get("walls", []):
        if not grid.in_bounds(r, c):
            raise ValueError(f"wall ({r}, {c}) out of bounds")
        grid.cell(r, c).is_wall = True
    for key, setter in (("start", grid.set_start), ("end", grid.set_end)):
        if key in data:
            r, c = data[key]
            if not grid.in_bounds(r, c):
                raise ValueError(f"{key} ({r}, {c}) out of bounds")
            if not setter(r, c):
                raise ValueError(f"{key} ({r}, {c}) is a wall")
    return grid


def resolve_map(name_or_path: str) -> Path:
    """Bundled map name or a filesystem path."""
    if name_or_path in MAP_FILES:
        return MAP_FILES[name_or_path]
    return Path(name_or_path)
