"""
Maze generation - randomized depth-first backtracker with a random boundary exit

The backtracker walks the odd-coordinate lattice two cells at a time, so every
pair of neighbouring lattice cells has a wall cell between them that can be
opened. It yields its state after each step so the walk can be animated;
generate_maze() drains it in one go.
"""

import logging

from utils.constants import (
    EDGE_BOTTOM,
    EDGE_INWARD,
    EDGE_LEFT,
    EDGE_RIGHT,
    EDGE_TOP,
    LATTICE_DIRS,
    MIN_START_EXIT_DISTANCE,
    START_PICK_ATTEMPTS,
)
from maze.maze_core import MazeBuilder, check_dimensions, euclidean
from maze.rng import Lcg, resolve_seed

logger = logging.getLogger(__name__)


def idx(width, x, y):
    """Helper to get 1D index"""
    return y * width + x


def lattice_cells(width, height):
    """Odd-coordinate interior cells the backtracker can stand on"""
    return [(x, y) for y in range(1, height - 1, 2) for x in range(1, width - 1, 2)]


def exit_edge(width, height, exit):
    """Which outer edge an exit cell sits on"""
    x, y = exit
    if y == 0:
        return EDGE_TOP
    if y == height - 1:
        return EDGE_BOTTOM
    if x == width - 1:
        return EDGE_RIGHT
    if x == 0:
        return EDGE_LEFT
    raise ValueError(f"exit {exit} is not on the border of a {width}x{height} maze")


def inward_neighbor(width, height, exit):
    """The interior cell directly behind an exit opening"""
    dx, dy = EDGE_INWARD[exit_edge(width, height, exit)]
    return exit[0] + dx, exit[1] + dy


def pick_exit(width, height, rng):
    """Uniform edge, then uniform non-corner position along it"""
    edge = rng.below(4)
    if edge == EDGE_TOP:
        return 1 + rng.below(width - 2), 0
    if edge == EDGE_BOTTOM:
        return 1 + rng.below(width - 2), height - 1
    if edge == EDGE_RIGHT:
        return width - 1, 1 + rng.below(height - 2)
    return 0, 1 + rng.below(height - 2)


def pick_start(width, height, exit, rng):
    """
    Random lattice cell further than MIN_START_EXIT_DISTANCE from the exit

    Gives up after START_PICK_ATTEMPTS draws and keeps the farthest one seen.
    """
    cells = lattice_cells(width, height)
    best = None
    best_dist = -1.0

    for _ in range(START_PICK_ATTEMPTS):
        cand = rng.choice(cells)
        d = euclidean(cand, exit)
        if d > MIN_START_EXIT_DISTANCE:
            return cand
        if d > best_dist:
            best, best_dist = cand, d

    logger.debug("start fallback: %s is only %.2f from exit %s", best, best_dist, exit)
    return best


def gen_dfs_backtracker(builder, start, rng, exit=None):
    """
    Depth-First Search with backtracking - animated generator

    Yields dicts with the visited flags, the current cell, whether the walk
    touched the exit area and whether it has finished.
    """
    width, height = builder.width, builder.height
    visited = [False] * (width * height)
    targets = set()
    if exit is not None:
        targets = {exit, inward_neighbor(width, height, exit)}

    builder.carve(*start)
    visited[idx(width, *start)] = True
    stack = [start]
    exit_reached = start in targets

    yield {"visited": visited, "current": start, "exit_reached": exit_reached, "done": False}

    while stack:
        cx, cy = stack[-1]
        neighbors = []

        for dx, dy in LATTICE_DIRS:
            nx, ny = cx + dx, cy + dy
            if 1 <= nx <= width - 2 and 1 <= ny <= height - 2 and not visited[idx(width, nx, ny)]:
                neighbors.append((nx, ny))

        if neighbors:
            nxt = rng.choice(neighbors)
            builder.remove_wall_between((cx, cy), nxt)
            builder.carve(*nxt)
            visited[idx(width, *nxt)] = True
            stack.append(nxt)
            if nxt in targets:
                exit_reached = True

            yield {"visited": visited, "current": nxt, "exit_reached": exit_reached, "done": False}
        else:
            stack.pop()

    yield {"visited": visited, "current": start, "exit_reached": exit_reached, "done": True}


def nearest_visited(builder, visited, target):
    """Closest visited open interior cell to target, scanning row by row"""
    best = None
    min_dist = float("inf")
    for y in range(1, builder.height - 1):
        for x in range(1, builder.width - 1):
            if visited[idx(builder.width, x, y)] and not builder.is_wall(x, y):
                d = euclidean((x, y), target)
                if d < min_dist:
                    min_dist = d
                    best = (x, y)
    return best


def carve_manhattan(builder, src, dst):
    """Open every cell on a greedy path from src to dst, x first then y"""
    cx, cy = src
    ex, ey = dst
    builder.carve(cx, cy)
    while (cx, cy) != (ex, ey):
        if cx < ex:
            cx += 1
        elif cx > ex:
            cx -= 1
        elif cy < ey:
            cy += 1
        else:
            cy -= 1
        builder.carve(cx, cy)


def open_exit(builder, exit):
    """Open the boundary exit and the interior cell right behind it"""
    builder.carve(*exit)
    builder.carve(*inward_neighbor(builder.width, builder.height, exit))


def generate_maze(width, height, seed=None):
    """
    Generate a maze with a random boundary exit

    Args:
        width, height: grid size in cells, both >= 5 (odd sizes line up the
            traversal lattice with the outer border)
        seed: int, SeedSource, or None for a fresh entropy-derived seed

    Returns:
        Maze

    Raises:
        InvalidDimensions: if either side is below 5
    """
    check_dimensions(width, height)
    rng = Lcg(resolve_seed(seed))
    builder = MazeBuilder(width, height)

    exit = pick_exit(width, height, rng)
    start = pick_start(width, height, exit, rng)

    last_state = None
    for state in gen_dfs_backtracker(builder, start, rng, exit=exit):
        last_state = state

    if not last_state["exit_reached"]:
        inner = inward_neighbor(width, height, exit)
        nearest = nearest_visited(builder, last_state["visited"], exit)
        logger.debug("exit %s not reached, carving from %s to %s", exit, nearest, inner)
        carve_manhattan(builder, nearest, inner)

    open_exit(builder, exit)
    maze = builder.build(start, exit)
    logger.debug("generated %r", maze)
    return maze
