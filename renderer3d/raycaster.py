"""
Raycaster Engine - DDA (Digital Differential Analyzer) algorithm
Grid raycasting through a Maze, with exit-opening detection
Optimized with Numba JIT compilation
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np
from numba import njit

from utils.constants import FOV, MAX_DISTANCE


class WallSide(IntEnum):
    """Face of the wall a ray hit, named by the direction the ray travelled"""
    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3


# Columns of the per-ray result rows produced by cast_all_rays
COL_DISTANCE = 0
COL_WALL_SIDE = 1
COL_HIT_X = 2
COL_HIT_Y = 3
COL_PASSED_EXIT = 4
COL_EXIT_THRESHOLD = 5  # NaN when the ray never entered the exit cell


@dataclass(frozen=True)
class RayHit:
    """Result of a single ray cast"""
    distance: float
    wall_side: WallSide
    hit_x: float
    hit_y: float
    passed_exit: bool
    exit_threshold_distance: Optional[float]

    @classmethod
    def from_row(cls, row):
        """Build a RayHit from one row of a cast_all_rays result array"""
        threshold = float(row[COL_EXIT_THRESHOLD])
        return cls(
            distance=float(row[COL_DISTANCE]),
            wall_side=WallSide(int(row[COL_WALL_SIDE])),
            hit_x=float(row[COL_HIT_X]),
            hit_y=float(row[COL_HIT_Y]),
            passed_exit=bool(row[COL_PASSED_EXIT] > 0.5),
            exit_threshold_distance=None if math.isnan(threshold) else threshold,
        )


@njit(cache=True)
def _numba_wall_u(hit_x, hit_y, wall_side):
    """Fractional position along a wall face; E/W faces run along y"""
    if wall_side == 2 or wall_side == 3:
        return hit_y - math.floor(hit_y)
    return hit_x - math.floor(hit_x)


@njit(cache=True)
def _numba_cast_ray(cells, px, py, angle, max_distance, has_exit, exit_x, exit_y):
    """
    Cast one ray using DDA (Numba JIT compiled)

    Args:
        cells: 2D uint8 array (rows, cols), non-zero = wall
        px, py: ray origin in world units
        angle: ray angle in radians (0 = east, pi/2 = south)
        max_distance: distance cap
        has_exit: whether exit_x / exit_y are meaningful
        exit_x, exit_y: exit point in world units (cell centre)

    Returns:
        (distance, wall_side, hit_x, hit_y, passed_exit, exit_threshold)
        exit_threshold is NaN when the ray did not pass the exit
    """
    rows = cells.shape[0]
    cols = cells.shape[1]

    ray_dir_x = math.cos(angle)
    ray_dir_y = math.sin(angle)

    # Current cell
    map_x = int(math.floor(px))
    map_y = int(math.floor(py))

    # Delta distances; an axis the ray never crosses gets a huge step
    delta_dist_x = 1e30 if ray_dir_x == 0.0 else abs(1.0 / ray_dir_x)
    delta_dist_y = 1e30 if ray_dir_y == 0.0 else abs(1.0 / ray_dir_y)

    # Step direction
    if ray_dir_x < 0.0:
        step_x = -1
        side_dist_x = (px - map_x) * delta_dist_x
    else:
        step_x = 1
        side_dist_x = (map_x + 1.0 - px) * delta_dist_x

    if ray_dir_y < 0.0:
        step_y = -1
        side_dist_y = (py - map_y) * delta_dist_y
    else:
        step_y = 1
        side_dist_y = (map_y + 1.0 - py) * delta_dist_y

    exit_cell_x = -1
    exit_cell_y = -1
    if has_exit:
        exit_cell_x = int(math.floor(exit_x))
        exit_cell_y = int(math.floor(exit_y))

    passed_exit = False
    exit_threshold = np.nan
    side = 0  # 0 = x-side, 1 = y-side

    # DDA loop
    while True:
        prev_map_x = map_x
        prev_map_y = map_y

        if side_dist_x < side_dist_y:
            side_dist_x += delta_dist_x
            map_x += step_x
            side = 0
        else:
            side_dist_y += delta_dist_y
            map_y += step_y
            side = 1

        in_exit_cell = map_x == exit_cell_x and map_y == exit_cell_y

        # Entering the exit cell: where along the ray is the exit point?
        if has_exit and in_exit_cell and (prev_map_x != exit_cell_x or prev_map_y != exit_cell_y):
            if abs(ray_dir_x) > abs(ray_dir_y):
                t = (exit_x - px) / ray_dir_x
            elif ray_dir_y != 0.0:
                t = (exit_y - py) / ray_dir_y
            elif side == 0:
                t = side_dist_x - delta_dist_x
            else:
                t = side_dist_y - delta_dist_y
            if t > 0.0:
                exit_threshold = t
                passed_exit = True

        # Out of bounds check
        if map_x < 0 or map_x >= cols or map_y < 0 or map_y >= rows:
            if passed_exit:
                # Open sky past the exit
                dist = exit_threshold
                if dist > max_distance:
                    dist = max_distance
                return (dist, 0, px + ray_dir_x * dist, py + ray_dir_y * dist,
                        True, exit_threshold)
            return (max_distance, 0, px + ray_dir_x * max_distance,
                    py + ray_dir_y * max_distance, False, exit_threshold)

        # The exit opening is never solid
        if in_exit_cell:
            continue

        if cells[map_y, map_x] != 0:
            break

    # Perpendicular distance along the crossed axis
    if side == 0:
        perp_wall_dist = side_dist_x - delta_dist_x
    else:
        perp_wall_dist = side_dist_y - delta_dist_y

    if perp_wall_dist < 0.0:
        perp_wall_dist = 0.0
    if perp_wall_dist > max_distance:
        perp_wall_dist = max_distance

    if side == 0:
        wall_side = 3 if step_x > 0 else 2  # East / West
    else:
        wall_side = 1 if step_y > 0 else 0  # South / North

    hit_x = px + ray_dir_x * perp_wall_dist
    hit_y = py + ray_dir_y * perp_wall_dist
    return perp_wall_dist, wall_side, hit_x, hit_y, passed_exit, exit_threshold


@njit(cache=True)
def _numba_cast_all_rays(cells, px, py, player_angle, fov_rad, num_rays,
                         max_distance, has_exit, exit_x, exit_y):
    """
    Cast one ray per screen column (Numba JIT compiled)

    Column i of num_rays looks along player_angle - fov/2 + (i / num_rays) * fov.

    Returns:
        results: numpy array shape (num_rays, 6)
                 [dist, wall_side, hit_x, hit_y, passed_exit, exit_threshold]
    """
    results = np.empty((num_rays, 6), dtype=np.float64)
    start_angle = player_angle - fov_rad / 2.0

    for i in range(num_rays):
        ray_angle = start_angle + (i / num_rays) * fov_rad
        dist, wall_side, hit_x, hit_y, passed, threshold = _numba_cast_ray(
            cells, px, py, ray_angle, max_distance, has_exit, exit_x, exit_y
        )
        results[i, 0] = dist
        results[i, 1] = wall_side
        results[i, 2] = hit_x
        results[i, 3] = hit_y
        results[i, 4] = 1.0 if passed else 0.0
        results[i, 5] = threshold

    return results


def _exit_args(exit_x, exit_y):
    """Kernel arguments for an optional exit point"""
    if exit_x is None or exit_y is None:
        return False, 0.0, 0.0
    return True, float(exit_x), float(exit_y)


def cast_ray(x, y, angle, maze, max_distance=MAX_DISTANCE, exit_x=None, exit_y=None):
    """
    Cast a single ray through a maze

    Args:
        x, y: origin in world units
        angle: direction in radians (0 = east, pi/2 = south)
        maze: Maze
        max_distance: distance cap
        exit_x, exit_y: optional exit point; the exit cell is treated as open
            and the ray reports when it passes through it

    Returns:
        RayHit
    """
    has_exit, ex, ey = _exit_args(exit_x, exit_y)
    dist, wall_side, hit_x, hit_y, passed, threshold = _numba_cast_ray(
        maze.cells, float(x), float(y), float(angle), float(max_distance), has_exit, ex, ey
    )
    return RayHit(
        distance=float(dist),
        wall_side=WallSide(int(wall_side)),
        hit_x=float(hit_x),
        hit_y=float(hit_y),
        passed_exit=bool(passed),
        exit_threshold_distance=None if math.isnan(threshold) else float(threshold),
    )


class Raycaster:
    """
    DDA Raycasting engine for first-person maze rendering
    Uses Numba JIT for high-performance ray casting
    """

    def __init__(self, fov=FOV, max_distance=MAX_DISTANCE):
        """
        Args:
            fov: field of view in radians
            max_distance: distance cap for every ray
        """
        self.fov = fov
        self.max_distance = max_distance

    def column_angle(self, player_angle, column, num_columns):
        """Ray angle for a screen column, linear across the field of view"""
        return player_angle - self.fov / 2.0 + (column / num_columns) * self.fov

    def cast_ray(self, maze, x, y, angle, exit_point=None):
        """Cast one ray; exit_point is an optional (x, y) world point"""
        ex, ey = exit_point if exit_point is not None else (None, None)
        return cast_ray(x, y, angle, maze, self.max_distance, ex, ey)

    def cast_all_rays(self, maze, px, py, player_angle, num_rays, exit_point=None):
        """
        Cast all rays for the screen using Numba JIT

        Returns:
            numpy array shape (num_rays, 6):
            [dist, wall_side, hit_x, hit_y, passed_exit, exit_threshold]
        """
        ex, ey = exit_point if exit_point is not None else (None, None)
        has_exit, ex, ey = _exit_args(ex, ey)
        return _numba_cast_all_rays(
            maze.cells, float(px), float(py), float(player_angle),
            float(self.fov), int(num_rays), float(self.max_distance),
            has_exit, ex, ey
        )

    @staticmethod
    def get_wall_texture_x(hit_x, hit_y, wall_side):
        """
        Surface coordinate along the wall face (0.0 to 1.0)
        """
        return float(_numba_wall_u(float(hit_x), float(hit_y), int(wall_side)))
