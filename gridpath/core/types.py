# gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Set, Any
from math import inf

Coord = Tuple[int, int]  # (row, col)

@dataclass(eq=False)
class Cell:
    row: int
    col: int
    is_start: bool = False
    is_end: bool = False
    is_wall: bool = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def __repr__(self) -> str:
        flags = "".join(f for f, on in (("S", self.is_start), ("E", self.is_end), ("#", self.is_wall)) if on)
        return f"Cell({self.row}, {self.col}{', ' + flags if flags else ''})"

@dataclass
class RunState:
    """Traversal fields of one run, keyed by coordinate. Cells absent from a map hold the reset value."""
    distance: Dict[Coord, float] = field(default_factory=dict)
    visited: Set[Coord] = field(default_factory=set)
    previous: Dict[Coord, Coord] = field(default_factory=dict)
    shortest_path: Set[Coord] = field(default_factory=set)

    def distance_of(self, c: Coord) -> float:
        return self.distance.get(c, inf)

    def is_clear(self) -> bool:
        return not (self.distance or self.visited or self.previous or self.shortest_path)

@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    closed: List[Cell] = field(default_factory=list)
    wave_distance: Optional[float] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
