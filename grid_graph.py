"""
Grid graph with obstacle marking, maze generation and BFS path finding.

The grid is a fixed W x H array of cells. Each cell knows its position, its
classification (empty, obstacle, start, end, path), the positions of its
axis-aligned neighbors and two transient search fields (distance and
predecessor) that are only meaningful while a search is running.

Functions exposed:
- GridGraph.build_graph()
- GridGraph.mark_cell(x, y, kind) -> bool
- GridGraph.generate_maze(rng=None)
- GridGraph.is_unreachable(source, target) -> bool
- GridGraph.find_shortest_path() -> path
- render_ascii(graph) -> str
"""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

Pos = Tuple[int, int]  # (x, y)

GRID_WIDTH = 32
GRID_HEIGHT = 22

UNREACHED = float("inf")

MISSING_ENDPOINTS_MSG = "Please set both start and end points before finding the path."
UNREACHABLE_MSG = "The start or end point is unreachable."

# Neighbor order is left, up, right, down. BFS tie-breaking depends on it.
NEIGHBOR_DELTAS: Tuple[Pos, ...] = ((-1, 0), (0, -1), (1, 0), (0, 1))

# Maze directions, indexed by a uniform draw in [0, 4): up, right, down, left.
MAZE_DELTAS: Tuple[Pos, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


class CellType(IntEnum):
    EMPTY = 0
    OBSTACLE = 1
    START = 2
    END = 3
    PATH = 4


MARKABLE = (CellType.START, CellType.END, CellType.OBSTACLE)

ASCII_CHARS = {
    CellType.EMPTY: ".",
    CellType.OBSTACLE: "#",
    CellType.START: "S",
    CellType.END: "G",
    CellType.PATH: "*",
}


@dataclass
class Cell:
    x: int
    y: int
    kind: CellType = CellType.EMPTY
    neighbors: Tuple[Pos, ...] = field(default_factory=tuple)
    # transient search state
    distance: float = UNREACHED
    previous: Optional[Pos] = None

    @property
    def pos(self) -> Pos:
        return self.x, self.y


def _warn(message: str) -> None:
    logger.warning(message)


class GridGraph:
    """Owns the cells and the start/end assignment of one grid.

    ``notify`` receives the user-facing messages of the path finder. The
    default sends them to the module logger.
    """

    def __init__(
        self,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        notify: Optional[Callable[[str], None]] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.width = width
        self.height = height
        self.notify: Callable[[str], None] = notify or _warn
        self.cells: List[Cell] = []
        self.start: Optional[Pos] = None
        self.end: Optional[Pos] = None
        self.last_distance: Optional[int] = None
        self.build_graph()

    # -- access -------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _idx(self, x: int, y: int) -> int:
        # column-major, same iteration order as the grid loops
        return x * self.height + y

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise ValueError(f"cell {(x, y)} is outside a {self.width}x{self.height} grid")
        return self.cells[self._idx(x, y)]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def path_cells(self) -> List[Pos]:
        return [c.pos for c in self.cells if c.kind == CellType.PATH]

    # -- construction -------------------------------------------------------

    def build_graph(self) -> None:
        """Replace every cell with a fresh EMPTY cell and relink neighbors.

        All obstacles, path markings and the start/end assignment are lost.
        """
        w, h = self.width, self.height
        cells: List[Cell] = []
        for x in range(w):
            for y in range(h):
                neighbors = tuple(
                    (x + dx, y + dy)
                    for dx, dy in NEIGHBOR_DELTAS
                    if 0 <= x + dx < w and 0 <= y + dy < h
                )
                cells.append(Cell(x, y, CellType.EMPTY, neighbors))
        self.cells = cells
        self.start = None
        self.end = None
        self.last_distance = None

    def mark_cell(self, x: int, y: int, kind: CellType) -> bool:
        """Try to classify (x, y) as START, END or OBSTACLE.

        Returns False, leaving the grid untouched, when the change would
        create a second start or end, put start and end on the same cell, or
        cover start or end with an obstacle.
        """
        if kind not in MARKABLE:
            raise ValueError(f"cannot mark a cell as {kind!r}")
        kind = CellType(kind)
        target = self.cell(x, y)
        pos = target.pos

        if kind == CellType.START:
            if self.start is not None or pos == self.end:
                logger.debug("Rejected start at %s (start=%s, end=%s)", pos, self.start, self.end)
                return False
            self.start = pos
        elif kind == CellType.END:
            if self.end is not None or pos == self.start:
                logger.debug("Rejected end at %s (start=%s, end=%s)", pos, self.start, self.end)
                return False
            self.end = pos
        elif target.kind in (CellType.START, CellType.END):
            logger.debug("Rejected obstacle over %s at %s", target.kind.name, pos)
            return False

        target.kind = kind
        return True

    def _block(self, x: int, y: int) -> int:
        target = self.cell(x, y)
        if target.kind in (CellType.START, CellType.END):
            return 0
        target.kind = CellType.OBSTACLE
        return 1

    def generate_maze(self, rng: Optional[random.Random] = None) -> None:
        """Mark every even-coordinate anchor and one random neighbor of it.

        Meant to run on a freshly built grid. The result is a sparse obstacle
        field: full connectivity and a unique solution are not guaranteed.
        Start and end cells, if already set, are left in place.
        """
        choose = rng.randrange if rng is not None else random.randrange
        count = 0
        for x in range(0, self.width, 2):
            for y in range(0, self.height, 2):
                count += self._block(x, y)
                dx, dy = MAZE_DELTAS[choose(4)]
                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny):
                    count += self._block(nx, ny)
        logger.info("Generated maze on %dx%d grid (%d obstacle marks)", self.width, self.height, count)

    # -- search -------------------------------------------------------------

    def clear_distances(self) -> None:
        for c in self.cells:
            c.distance = UNREACHED
            c.previous = None

    def _expand(self, current: Cell) -> Iterator[Cell]:
        """Yield the open, unvisited neighbors of current, stamping each one."""
        for nx, ny in current.neighbors:
            neighbor = self.cells[self._idx(nx, ny)]
            if neighbor.kind != CellType.OBSTACLE and neighbor.distance == UNREACHED:
                neighbor.distance = current.distance + 1
                neighbor.previous = current.pos
                yield neighbor

    def is_unreachable(self, source: Pos, target: Pos) -> bool:
        """Breadth-first reachability query. Never changes a classification."""
        src = self.cell(*source)
        dst = self.cell(*target)
        try:
            src.distance = 0
            q: deque[Cell] = deque([src])
            while q:
                current = q.popleft()
                if current is dst:
                    return False
                for neighbor in self._expand(current):
                    if neighbor is dst:
                        return False
                    q.append(neighbor)
            return True
        finally:
            self.clear_distances()

    def find_shortest_path(self) -> List[Pos]:
        """Mark the shortest start -> end route with PATH cells.

        Failures (missing endpoint, unreachable end) go to ``notify`` and
        leave every classification unchanged. Returns the route from start to
        end inclusive, or an empty list on failure.
        """
        if self.start is None or self.end is None:
            self.notify(MISSING_ENDPOINTS_MSG)
            return []

        if self.is_unreachable(self.start, self.end) or self.is_unreachable(self.end, self.start):
            self.notify(UNREACHABLE_MSG)
            return []

        start = self.cell(*self.start)
        end = self.cell(*self.end)
        try:
            start.distance = 0
            q: deque[Cell] = deque([start])
            found = False
            while q and not found:
                current = q.popleft()
                for neighbor in self._expand(current):
                    q.append(neighbor)
                    if neighbor is end:
                        # end's predecessor is final once discovered
                        found = True
                        break

            self.last_distance = int(end.distance) if found else None

            route: List[Pos] = [end.pos]
            cursor = end.previous
            while cursor is not None and cursor != start.pos:
                self.cells[self._idx(*cursor)].kind = CellType.PATH
                route.append(cursor)
                cursor = self.cells[self._idx(*cursor)].previous
            if cursor is None:
                # unreachable in practice, the reachability check ran first
                logger.error("Predecessor chain from %s broke before reaching %s", end.pos, start.pos)
                return []
            route.append(start.pos)
        finally:
            self.clear_distances()

        route.reverse()
        logger.info("Shortest path %s -> %s: %d steps", start.pos, end.pos, len(route) - 1)
        return route


def render_ascii(graph: GridGraph) -> str:
    """One text line per row y; see ASCII_CHARS for the legend."""
    lines: List[str] = []
    for y in range(graph.height):
        lines.append("".join(ASCII_CHARS[graph.cell(x, y).kind] for x in range(graph.width)))
    return "\n".join(lines) + "\n"
