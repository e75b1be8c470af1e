"""
Core maze types - the frozen Maze grid, its staged builder, and grid helpers

Cells are stored as a (height, width) uint8 numpy array, 1 = wall, 0 = open,
indexed [y, x] like the blockmap the raycaster walks.
"""

import math
from collections import deque

import numpy as np

from utils.constants import MIN_MAZE_SIZE

WALL = 1
OPEN = 0


class InvalidDimensions(ValueError):
    """Raised when a maze smaller than the minimum traversable size is requested"""

    def __init__(self, width, height):
        super().__init__(
            f"maze must be at least {MIN_MAZE_SIZE}x{MIN_MAZE_SIZE}, got {width}x{height}"
        )
        self.width = width
        self.height = height


def check_dimensions(width, height):
    """Raise InvalidDimensions unless both sides are at least MIN_MAZE_SIZE"""
    if width < MIN_MAZE_SIZE or height < MIN_MAZE_SIZE:
        raise InvalidDimensions(width, height)


class Maze:
    """
    Immutable maze grid with a start cell and a boundary exit cell
    """

    def __init__(self, cells, start, exit):
        """
        Args:
            cells: 2D array-like (height, width), truthy = wall
            start: (x, y) start cell
            exit: (x, y) exit cell on the outer border
        """
        grid = np.array(cells, dtype=np.uint8)
        if grid.ndim != 2:
            raise ValueError(f"maze cells must be 2D, got shape {grid.shape}")
        grid.setflags(write=False)

        self._cells = grid
        self.height, self.width = grid.shape
        self.start = (int(start[0]), int(start[1]))
        self.exit = (int(exit[0]), int(exit[1]))

    @property
    def cells(self):
        """Read-only (height, width) uint8 array, 1 = wall"""
        return self._cells

    def in_bounds(self, x, y):
        """Check if cell coordinates are within grid bounds"""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x, y):
        """Wall test for a cell; anything outside the grid counts as wall"""
        if not self.in_bounds(x, y):
            return True
        return bool(self._cells[y, x])

    def get_cell(self, x, y):
        """Wall test for a world-space point (the collision mask)"""
        return self.is_wall(math.floor(x), math.floor(y))

    @property
    def start_point(self):
        """World coordinates of the start cell centre"""
        return self.start[0] + 0.5, self.start[1] + 0.5

    @property
    def exit_point(self):
        """World coordinates of the exit cell centre"""
        return self.exit[0] + 0.5, self.exit[1] + 0.5

    def open_cells(self):
        """List of all open (x, y) cells, row by row"""
        ys, xs = np.nonzero(self._cells == OPEN)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def border_openings(self):
        """Open cells lying on the outer border"""
        res = []
        for x, y in self.open_cells():
            if x in (0, self.width - 1) or y in (0, self.height - 1):
                res.append((x, y))
        return res

    def __repr__(self):
        return f"Maze({self.width}x{self.height}, start={self.start}, exit={self.exit})"


class MazeBuilder:
    """
    Mutable staging grid used while a maze is generated; frozen by build()
    """

    def __init__(self, width, height):
        check_dimensions(width, height)
        self.width = width
        self.height = height
        # Initialize all cells as walls
        self.cells = np.ones((height, width), dtype=np.uint8)

    def in_bounds(self, x, y):
        """Check if cell coordinates are within grid bounds"""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x, y):
        """Wall test; out of bounds counts as wall"""
        if not self.in_bounds(x, y):
            return True
        return bool(self.cells[y, x])

    def carve(self, x, y):
        """Open a single cell"""
        self.cells[y, x] = OPEN

    def remove_wall_between(self, a, b):
        """Open the midpoint cell between two lattice cells two steps apart"""
        (ax, ay), (bx, by) = a, b
        self.carve((ax + bx) // 2, (ay + by) // 2)

    def build(self, start, exit):
        """Freeze the grid into a Maze"""
        return Maze(self.cells.copy(), start, exit)


def open_neighbors(maze, x, y):
    """Get list of open 4-connected neighbour cells"""
    res = []
    for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0)):
        nx, ny = x + dx, y + dy
        if not maze.is_wall(nx, ny):
            res.append((nx, ny))
    return res


def reachable_from(maze, start):
    """BFS flood fill over open cells; returns the set of reachable cells"""
    if maze.is_wall(*start):
        return set()

    q = deque([start])
    seen = {start}

    while q:
        x, y = q.popleft()
        for n in open_neighbors(maze, x, y):
            if n not in seen:
                seen.add(n)
                q.append(n)
    return seen


def euclidean(a, b):
    """Euclidean distance between two cells"""
    return math.hypot(a[0] - b[0], a[1] - b[1])
