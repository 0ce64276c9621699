"""
Pytest configuration and shared fixtures
"""

import sys
import os
from collections import deque

import pytest

# Add repository root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gridpath.core.grid import Grid
from gridpath.core.maps import from_rows


@pytest.fixture
def open_grid():
    """5x5, start (0,0), end (0,4), no walls."""
    grid = Grid.build(5, 5)
    grid.set_start(0, 0)
    grid.set_end(0, 4)
    return grid


@pytest.fixture
def detour_grid():
    """5x5 with a wall column at col 2, open only at row 4."""
    return from_rows([
        "S.#.E",
        "..#..",
        "..#..",
        "..#..",
        ".....",
    ])


@pytest.fixture
def enclosed_grid():
    return from_rows([
        ".....",
        ".###.",
        ".#S#.",
        ".###.",
        "....E",
    ])


def bfs_distance(grid, start, end):
    """Brute-force reference distance over non-wall cells, None when unreachable."""
    seen = {start.coord: 0}
    queue = deque([start.coord])
    while queue:
        r, c = queue.popleft()
        if (r, c) == end.coord:
            return seen[(r, c)]
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = r + dr, c + dc
            if grid.in_bounds(nr, nc) and not grid.cells[nr][nc].is_wall and (nr, nc) not in seen:
                seen[(nr, nc)] = seen[(r, c)] + 1
                queue.append((nr, nc))
    return None
