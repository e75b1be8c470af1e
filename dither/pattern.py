"""
Fractal dithering - distance-driven Bayer dot sampling
Optimized with Numba JIT compilation

Closer surfaces sample the fine 8x8 dot tile, farther ones the coarse 1x1
tile, and the level in between is blended so the pattern does not pop as the
distance changes. Sampling happens in surface (UV) space, which keeps the
dots glued to the wall instead of the screen.
"""

import math

import numpy as np
from numba import njit

from utils.constants import DITHER_INTERP_EPSILON, DITHER_LEVELS, DITHER_SOFTNESS
from .bayer import check_level, get_bayer_table

_LAST_LEVEL = DITHER_LEVELS - 1


@njit(cache=True)
def _numba_sample(points, dot_count, u, v):
    """
    Proximity of (u, v) to the nearest of the first dot_count points

    Args:
        points: (N, 2) float64 Bayer points (a prefix-stable level array)
        dot_count: how many leading points to use
        u, v: surface coordinates, any real value (the tile wraps)

    Returns:
        float in [0, 1], 1 on a dot centre, 0 beyond its soft edge
    """
    n = dot_count
    if n > points.shape[0]:
        n = points.shape[0]
    if n <= 0:
        return 0.0

    # Equal-area circles: dots cover half the tile in total
    dot_area = 0.5 / n
    dot_radius = math.sqrt(dot_area / math.pi)

    min_dist = np.inf
    for i in range(n):
        wx = u - points[i, 0] + 0.5
        wx = wx - np.floor(wx) - 0.5
        wy = v - points[i, 1] + 0.5
        wy = wy - np.floor(wy) - 0.5
        d = math.sqrt(wx * wx + wy * wy)
        if d < min_dist:
            min_dist = d

    value = 1.0 - min_dist / (dot_radius * DITHER_SOFTNESS)
    if value < 0.0:
        value = 0.0
    elif value > 1.0:
        value = 1.0
    return value


@njit(cache=True)
def _numba_select_level(normalized_dist):
    """(level, interp) for a distance in [0, 1]; near -> level 3, far -> level 0"""
    nd = normalized_dist
    if nd < 0.0:
        nd = 0.0
    elif nd > 1.0:
        nd = 1.0
    level_float = (1.0 - nd) * _LAST_LEVEL
    level = int(math.floor(level_float))
    if level > _LAST_LEVEL:
        level = _LAST_LEVEL
    interp = level_float - level
    return level, interp


@njit(cache=True)
def _numba_dot_count(brightness, max_dots):
    """Brighter -> more dots, at least one, at most max_dots"""
    b = brightness
    if b < 0.0:
        b = 0.0
    elif b > 1.0:
        b = 1.0
    count = int(math.ceil(b * max_dots))
    if count < 1:
        count = 1
    elif count > max_dots:
        count = max_dots
    return count


@njit(cache=True)
def _numba_dither(points, normalized_dist, u, v, brightness):
    """Sample at the selected level and blend towards the next finer one"""
    level, interp = _numba_select_level(normalized_dist)

    max_dots = 1 << (2 * (level + 1))  # 4 ** (level + 1)
    dot_count = _numba_dot_count(brightness, max_dots)
    value = _numba_sample(points, dot_count, u, v)

    if interp > DITHER_INTERP_EPSILON and level < _LAST_LEVEL:
        next_max_dots = max_dots * 4
        next_dot_count = _numba_dot_count(brightness, next_max_dots)
        next_value = _numba_sample(points, next_dot_count, u, v)
        value = value * (1.0 - interp) + next_value * interp

    return value


class DitherSampler:
    """
    Python-facing wrapper around the dithering kernels
    """

    def __init__(self, table=None):
        self.table = table if table is not None else get_bayer_table()

    def sample(self, uv, level, dot_count):
        """
        Pattern value at uv using the first dot_count points of a level

        Returns:
            float in [0, 1]
        """
        check_level(level)
        count = min(int(dot_count), self.table.dot_count(level))
        return float(_numba_sample(self.table.finest, count, float(uv[0]), float(uv[1])))

    def select_level(self, normalized_distance):
        """Map distance (0 near, 1 far) to (level, interpolation factor)"""
        level, interp = _numba_select_level(float(normalized_distance))
        return int(level), float(interp)

    def dot_count_for(self, level, brightness):
        """Dots used at a level for a brightness in [0, 1]"""
        return int(_numba_dot_count(float(brightness), self.table.dot_count(level)))

    def dither(self, normalized_distance, uv, brightness):
        """
        Distance-aware dithered pattern value

        Args:
            normalized_distance: 0 (near) .. 1 (far)
            uv: surface coordinates
            brightness: 0 .. 1, drives how many dots are visible

        Returns:
            float in [0, 1]
        """
        return float(_numba_dither(self.table.finest, float(normalized_distance),
                                   float(uv[0]), float(uv[1]), float(brightness)))
