# gridpath/core/grid.py
#!/usr/bin/env python3
"""
Grid model shared by the engine and the viewer.

- Topology/role fields live on Cell (row, col, is_start, is_end, is_wall).
- Traversal fields of the current run live in Grid.state (RunState),
  a table keyed by (row, col). reset_run() swaps in a fresh table.
"""

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from gridpath.core.types import Cell, Coord, RunState


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[Cell]]             # [row][col]
    state: RunState = field(default_factory=RunState)
    _start: Optional[Cell] = field(default=None, repr=False)
    _end: Optional[Cell] = field(default=None, repr=False)

    # -------------------- construction --------------------

    @classmethod
    def build(cls, rows: int, cols: int) -> "Grid":
        if rows < 1 or cols < 1:
            raise ValueError(f"grid must be at least 1x1, got {rows}x{cols}")
        cells = [[Cell(r, c) for c in range(cols)] for r in range(rows)]
        return cls(rows, cols, cells)

    @staticmethod
    def size_for_window(width: int, height: int, cell_size: int, header: int = 0) -> Coord:
        """(rows, cols) that fit a window of width x height below a header band."""
        rows = (height - header) // cell_size
        cols = width // cell_size
        return max(1, rows), max(1, cols)

    # -------------------- addressing --------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise ValueError(f"({row}, {col}) outside {self.rows}x{self.cols} grid")
        return self.cells[row][col]

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def owns(self, cell: Cell) -> bool:
        return self.in_bounds(cell.row, cell.col) and self.cells[cell.row][cell.col] is cell

    @property
    def start(self) -> Optional[Cell]:
        return self._start

    @property
    def end(self) -> Optional[Cell]:
        return self._end

    # -------------------- run state accessors --------------------

    def distance(self, cell: Cell) -> float:
        return self.state.distance_of(cell.coord)

    def is_visited(self, cell: Cell) -> bool:
        return cell.coord in self.state.visited

    def previous(self, cell: Cell) -> Optional[Cell]:
        p = self.state.previous.get(cell.coord)
        return self.cells[p[0]][p[1]] if p is not None else None

    def is_shortest_path(self, cell: Cell) -> bool:
        return cell.coord in self.state.shortest_path

    # -------------------- resets --------------------

    def reset_run(self) -> None:
        """Clear visualization: distance=inf, visited/previous/path cleared. Roles and walls stay."""
        self.state = RunState()

    def clear_all(self) -> None:
        """reset_run() plus removal of every wall. Start and end stay."""
        self.reset_run()
        for c in self:
            if not (c.is_start or c.is_end):
                c.is_wall = False

    # -------------------- editing --------------------

    def set_start(self, row: int, col: int) -> bool:
        """Move the start role here. A cell may hold both start and end."""
        c = self.cell(row, col)
        if c.is_wall:
            return False
        if self._start is not None:
            self._start.is_start = False
        c.is_start = True
        self._start = c
        return True

    def set_end(self, row: int, col: int) -> bool:
        c = self.cell(row, col)
        if c.is_wall:
            return False
        if self._end is not None:
            self._end.is_end = False
        c.is_end = True
        self._end = c
        return True

    def toggle_wall(self, row: int, col: int) -> bool:
        c = self.cell(row, col)
        if c.is_start or c.is_end:
            return False
        c.is_wall = not c.is_wall
        return True

    def clear_roles(self) -> None:
        if self._start is not None:
            self._start.is_start = False
        if self._end is not None:
            self._end.is_end = False
        self._start = self._end = None

    def randomize_walls(self, density: float = 0.3, rng: Optional[random.Random] = None) -> None:
        rng = rng or random.Random()
        self.clear_all()
        for c in self:
            if not (c.is_start or c.is_end):
                c.is_wall = rng.random() < density


def neighbors(cell: Cell, grid: Grid) -> List[Cell]:
    """Unvisited, non-wall orthogonal neighbors in the order up, down, left, right."""
    r, c = cell.row, cell.col
    candidates: List[Cell] = []
    if r > 0:
        candidates.append(grid.cells[r - 1][c])
    if r < grid.rows - 1:
        candidates.append(grid.cells[r + 1][c])
    if c > 0:
        candidates.append(grid.cells[r][c - 1])
    if c < grid.cols - 1:
        candidates.append(grid.cells[r][c + 1])
    return [n for n in candidates if not n.is_wall and n.coord not in grid.state.visited]
