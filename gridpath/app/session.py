# gridpath/app/session.py
#!/usr/bin/env python3
"""
Interactive session state, independent of any display.

The viewer forwards input here and calls tick(now) once per frame; it
only ever reads the grid, status and metrics back for drawing.

Modes:
    start -> click places the start, then switches to end mode
    end   -> click places the end (needs a start first)
    wall  -> click toggles a wall; drag paints
"""

import random
from typing import Dict, List, Optional

from gridpath.core.dijkstra import DijkstraAlgo
from gridpath.core.grid import Grid
from gridpath.core.types import Cell, Coord

MODES = ("start", "end", "wall")


class Session:
    def __init__(self, grid: Grid, wave_delay: float = 0.05, path_delay: float = 0.005):
        self.grid = grid
        self.wave_delay = wave_delay
        self.path_delay = path_delay
        self.mode = "wall" if grid.start and grid.end else "start"
        self.status = "Idle"
        self.busy = False
        self.algo = DijkstraAlgo()

        self._pressed = False
        self._last_drag: Optional[Coord] = None
        self._path: List[Cell] = []
        self._path_index = 0
        self._last_t = 0.0
        self.metrics: Dict[str, int] = {}
        self._reset_metrics()

    # -------------------- editing --------------------

    def set_mode(self, mode: str) -> bool:
        if mode not in MODES:
            raise ValueError(f"unknown mode {mode!r}")
        if self.busy:
            return False
        self.clear_visualization()
        if mode == "start":
            self.grid.clear_roles()
        elif mode == "end" and self.grid.start is None:
            mode = "start"
        self.mode = mode
        return True

    def click(self, row: int, col: int) -> bool:
        """One discrete cell edit in the current mode. Returns False when nothing changed."""
        if self.busy or not self.grid.in_bounds(row, col):
            return False
        self.clear_visualization()
        cell = self.grid.cell(row, col)

        # a wall only responds to wall mode, which removes it
        if cell.is_wall:
            return self.mode == "wall" and self.grid.toggle_wall(row, col)

        if self.mode == "start":
            self.grid.set_start(row, col)
            self.mode = "end"
            return True
        if self.mode == "end":
            return self.grid.set_end(row, col)
        return self.grid.toggle_wall(row, col)

    def press(self, row: int, col: int) -> bool:
        if self.busy:
            return False
        self._pressed = True
        self._last_drag = (row, col)
        return self.click(row, col)

    def enter(self, row: int, col: int) -> bool:
        """Pointer moved onto a cell; paints walls while the button is held."""
        if self.busy or not self._pressed or self.mode != "wall":
            return False
        if self._last_drag == (row, col):
            return False
        self._last_drag = (row, col)
        return self.click(row, col)

    def release(self) -> None:
        self._pressed = False
        self._last_drag = None

    def clear_visualization(self) -> None:
        self.grid.reset_run()
        self._path = []
        self._path_index = 0
        self._reset_metrics()
        if not self.busy:
            self.status = "Idle"

    def clear_all(self) -> bool:
        if self.busy:
            return False
        self.clear_visualization()
        self.grid.clear_all()
        return True

    def random_maze(self, rng: Optional[random.Random] = None, density: float = 0.3) -> bool:
        if self.busy:
            return False
        self.clear_visualization()
        self.grid.randomize_walls(density, rng)
        return True

    def resize(self, rows: int, cols: int) -> bool:
        """Fresh empty grid; start and end are dropped."""
        if self.busy:
            return False
        return self.load(Grid.build(rows, cols))

    def load(self, grid: Grid) -> bool:
        if self.busy:
            return False
        self.grid = grid
        self.algo = DijkstraAlgo()
        self.mode = "wall" if grid.start and grid.end else "start"
        self.clear_visualization()
        return True

    # -------------------- running --------------------

    @property
    def can_visualize(self) -> bool:
        return not self.busy and self.grid.start is not None and self.grid.end is not None

    def visualize(self, now: float) -> bool:
        if not self.can_visualize:
            return False
        self.clear_visualization()
        self.algo = DijkstraAlgo()
        self.algo.init(self.grid, self.grid.start, self.grid.end)
        self.busy = True
        self.status = "Running"
        self._last_t = now
        return True

    def tick(self, now: float) -> None:
        if not self.busy:
            return
        if self.status == "Running":
            if now - self._last_t >= self.wave_delay:
                self._last_t = now
                self._advance_wave()
        elif self.status == "Path":
            self._reveal_path(now)

    def _advance_wave(self) -> None:
        res = self.algo.step()
        self.metrics["visited"] = res.metrics.get("visited", 0)
        self.metrics["wave"] = res.metrics.get("waves", 0)
        if res.status == "done":
            self._path = res.path or []
            self._path_index = 0
            self.metrics["path_len"] = max(0, len(self._path) - 1)
            self.status = "Path"
        elif res.status == "no_path":
            self._finish("No path")

    def _reveal_path(self, now: float) -> None:
        while self._path_index < len(self._path):
            if self.path_delay > 0 and now - self._last_t < self.path_delay:
                return
            self._last_t = self._last_t + self.path_delay if self.path_delay > 0 else now
            cell = self._path[self._path_index]
            if not (cell.is_start or cell.is_end):
                self.grid.state.shortest_path.add(cell.coord)
            self._path_index += 1
        self._finish("Done")

    def _finish(self, status: str) -> None:
        self.busy = False
        self.status = status

    def _reset_metrics(self) -> None:
        self.metrics = {"visited": 0, "wave": 0, "path_len": 0}
