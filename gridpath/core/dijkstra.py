# gridpath/core/dijkstra.py
#!/usr/bin/env python3
"""
Dijkstra on a uniform-cost 4-connected grid, one distance wave per step().

Implements the Algorithm API expected by the viewer:
- init(grid, start, end) - reset() - step() -> StepResult

Wave semantics:
- step() pops every frontier cell at the current minimal distance, marks
  it visited and expands it; the popped cells form the wave batch.
- Reaching the end cell stops the wave right there; the partial batch
  (end included) is still reported.
- An empty frontier means the rest of the grid is unreachable.

Tie-breaking in the PQ:
- (distance, (row, col)): equal distances pop in row-major order, the
  same order a stable sort over the row-major cell list gives.

Besides the stepper, the module offers the producer form waves(), the
paced coroutine run() and path reconstruction shortest_path().
"""

import asyncio
import heapq
from dataclasses import dataclass, field
from typing import Callable, Generator, List, Optional, Tuple

from gridpath.core.grid import Grid, neighbors
from gridpath.core.types import Cell, Coord, StepResult

WAVE_DELAY = 0.05   # seconds between waves in run()

BatchCallback = Callable[[List[Cell]], None]


@dataclass
class DijkstraAlgo:
    name: str = "Dijkstra"

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    open_pq: List[Tuple[float, Coord]] = field(default_factory=list)   # (distance, (row, col))
    visited_order: List[Cell] = field(default_factory=list)
    wave_count: int = 0
    done: bool = False
    no_path: bool = False

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, end: Cell) -> None:
        """Bind to a grid and its endpoints, then reset."""
        _check_endpoint(grid, start, "start")
        _check_endpoint(grid, end, "end")
        self.grid = grid
        self.start = start
        self.end = end
        self.reset()

    def reset(self) -> None:
        """Clear the grid's run state and seed the frontier with the start cell."""
        if self.grid is None:
            return
        self.grid.reset_run()
        self.open_pq.clear()
        self.visited_order.clear()
        self.wave_count = 0
        self.done = False
        self.no_path = False

        s = self.start.coord
        self.grid.state.distance[s] = 0
        heapq.heappush(self.open_pq, (0, s))

    @property
    def finished(self) -> bool:
        return self.done or self.no_path

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = shortest_path(self.grid, self.end)
            return StepResult(status="done", path=path, metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        state = self.grid.state
        current_distance = self.open_pq[0][0]
        batch: List[Cell] = []
        self.wave_count += 1

        while self.open_pq and self.open_pq[0][0] == current_distance:
            _, u = heapq.heappop(self.open_pq)
            cell = self.grid.cells[u[0]][u[1]]
            state.visited.add(u)
            self.visited_order.append(cell)
            batch.append(cell)

            if cell is self.end:
                self.done = True
                path = shortest_path(self.grid, cell)
                return StepResult(status="done", closed=batch, wave_distance=current_distance,
                                  path=path, metrics=self._metrics(path_len=len(path)))

            # uniform cost: the first assignment in a wave is final
            alt = current_distance + 1
            for v in neighbors(cell, self.grid):
                if alt < state.distance_of(v.coord):
                    state.distance[v.coord] = alt
                    state.previous[v.coord] = u
                    heapq.heappush(self.open_pq, (alt, v.coord))

        return StepResult(status="running", closed=batch, wave_distance=current_distance,
                          metrics=self._metrics())

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "visited": len(self.visited_order),
            "waves": self.wave_count,
            "frontier": len(self.open_pq),
            "path_len": path_len,
        }


def _check_endpoint(grid: Grid, cell: Cell, role: str) -> None:
    if not grid.owns(cell):
        raise ValueError(f"{role} cell {cell!r} is not part of the grid")
    if cell.is_wall:
        raise ValueError(f"{role} cell {cell!r} is a wall")


def waves(grid: Grid, start: Cell, end: Cell) -> Generator[List[Cell], None, List[Cell]]:
    """Yield one batch per wave. The generator's return value is the visitation order."""
    algo = DijkstraAlgo()
    algo.init(grid, start, end)
    while True:
        res = algo.step()
        if res.closed:
            yield res.closed
        if res.status != "running":
            return algo.visited_order


async def run(grid: Grid, start: Cell, end: Cell, on_batch: BatchCallback,
              delay: float = WAVE_DELAY) -> List[Cell]:
    """Run to completion, handing each wave to on_batch and sleeping `delay` seconds between waves."""
    algo = DijkstraAlgo()
    algo.init(grid, start, end)
    while True:
        res = algo.step()
        if res.closed:
            on_batch(res.closed)
        if res.status != "running":
            return algo.visited_order
        await asyncio.sleep(delay)


def run_sync(grid: Grid, start: Cell, end: Cell,
             on_batch: Optional[BatchCallback] = None) -> List[Cell]:
    algo = DijkstraAlgo()
    algo.init(grid, start, end)
    while not algo.finished:
        res = algo.step()
        if res.closed and on_batch is not None:
            on_batch(res.closed)
    return algo.visited_order


def shortest_path(grid: Grid, end: Cell) -> List[Cell]:
    """Start-to-end cells along the back-links; [] when end was never reached."""
    state = grid.state
    if end.coord not in state.previous and state.distance_of(end.coord) != 0:
        return []
    path: List[Cell] = []
    cur: Optional[Cell] = end
    while cur is not None:
        path.append(cur)
        cur = grid.previous(cur)
    path.reverse()
    return path

