"""
Bayer point sets for fractal dithering

Level 0 is the 4-point base pattern; every further level appends three
translated copies of all points so far, so a finer level always starts with
the points of every coarser one (level l is a prefix of level l + 1).

    level 0 -> 4 points   (1x1 dot tile)
    level 1 -> 16 points  (2x2)
    level 2 -> 64 points  (4x4)
    level 3 -> 256 points (8x8)
"""

from functools import lru_cache

import numpy as np

from utils.constants import DITHER_LEVELS

BASE_PATTERN = np.array(
    [
        (0.0, 0.0),
        (0.5, 0.5),
        (0.5, 0.0),
        (0.0, 0.5),
    ],
    dtype=np.float64,
)
BASE_PATTERN.setflags(write=False)


def check_level(level):
    """Raise ValueError unless level is a valid fractal level"""
    if not 0 <= level < DITHER_LEVELS:
        raise ValueError(f"dither level must be in 0..{DITHER_LEVELS - 1}, got {level}")


def generate_bayer_points(level):
    """
    Build the point set for one fractal level

    Returns:
        float64 array of shape (4 ** (level + 1), 2), coordinates in [0, 1)
    """
    check_level(level)
    points = BASE_PATTERN.copy()
    for r in range(level):
        offset = 0.5 ** (r + 1)
        copies = [points + BASE_PATTERN[i] * offset for i in range(1, 4)]
        points = np.concatenate([points] + copies)
    return points


class BayerPatternTable:
    """
    Precomputed, read-only point sets for every fractal level
    """

    def __init__(self):
        self._levels = []
        for level in range(DITHER_LEVELS):
            points = generate_bayer_points(level)
            points.setflags(write=False)
            self._levels.append(points)

    def points_for_level(self, level):
        """(N, 2) read-only array of points for a level"""
        check_level(level)
        return self._levels[level]

    def dot_count(self, level):
        """Number of dots at a level: 4 ** (level + 1)"""
        check_level(level)
        return 4 ** (level + 1)

    def dots_per_side(self, level):
        """Dot tile edge length at a level: 1, 2, 4, 8"""
        check_level(level)
        return 2 ** level

    @property
    def finest(self):
        """Finest level's points; every coarser level is a prefix of it"""
        return self._levels[-1]


@lru_cache(maxsize=None)
def get_bayer_table():
    """Shared table, built on first use"""
    return BayerPatternTable()
