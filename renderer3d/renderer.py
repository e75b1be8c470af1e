"""
Frame Renderer - first-person view as a grid of text glyphs
Columns are raycast, rows are shaded with distance-aware fractal dithering.
The whole frame is shaded by one Numba kernel into a glyph-code buffer.
"""

import logging

import numpy as np
from numba import njit

from dither import get_bayer_table
from dither.pattern import _numba_dither
from utils.constants import (
    FOV, MAX_DISTANCE, NEAR_WALL_DISTANCE, WALL_HEIGHT_CAP,
    WALL_SHADES, WALL_SHADE_STOPS, FLOOR_SHADES, FLOOR_SHADE_STOPS,
    EXIT_SEAM_WIDTH, FLOOR_MIN_OFFSET,
    GLYPH_PALETTE, GLYPH_BLANK, GLYPH_WALL_BASE, GLYPH_FLOOR_BASE,
)
from utils.helpers import clamp
from .raycaster import Raycaster, _numba_wall_u

logger = logging.getLogger(__name__)

# Unpacked for the kernels
_WALL_STOP_0, _WALL_STOP_1, _WALL_STOP_2, _WALL_STOP_3 = WALL_SHADE_STOPS
_FLOOR_STOP_0, _FLOOR_STOP_1 = FLOOR_SHADE_STOPS
_WALL_RAMP_LAST = len(WALL_SHADES) - 1

_PALETTE = np.array(list(GLYPH_PALETTE))


@njit(cache=True)
def _numba_wall_index(normalized_dist):
    """Index into the wall ramp for a normalized distance"""
    if normalized_dist < _WALL_STOP_0:
        return 0
    if normalized_dist < _WALL_STOP_1:
        return 1
    if normalized_dist < _WALL_STOP_2:
        return 2
    if normalized_dist < _WALL_STOP_3:
        return 3
    return 4


@njit(cache=True)
def _numba_floor_index(normalized_dist):
    """Index into the floor ramp, -1 for blank"""
    if normalized_dist < _FLOOR_STOP_0:
        return 0
    if normalized_dist < _FLOOR_STOP_1:
        return 1
    return -1


@njit(cache=True)
def _numba_shade_frame(ray_results, points, render_height, max_distance, codes):
    """
    Fill a (height, width) glyph-code buffer from per-column ray results
    (Numba JIT compiled)

    Args:
        ray_results: numpy array (num_rays, 6) from cast_all_rays
        points: finest-level Bayer points
        render_height: number of text rows
        max_distance: distance cap used for normalization
        codes: int8 array (render_height, num_rays), written in place
    """
    num_rays = ray_results.shape[0]
    h = float(render_height)
    half_h = h / 2.0

    for x in range(num_rays):
        dist = ray_results[x, 0]
        side = int(ray_results[x, 1])
        hit_x = ray_results[x, 2]
        hit_y = ray_results[x, 3]
        passed_exit = ray_results[x, 4] > 0.5
        exit_threshold = ray_results[x, 5]

        # Perspective projection, clamped near the camera
        if dist > NEAR_WALL_DISTANCE:
            wall_height = h / dist
            if wall_height > WALL_HEIGHT_CAP * h:
                wall_height = WALL_HEIGHT_CAP * h
        else:
            wall_height = WALL_HEIGHT_CAP * h

        wall_top = (h - wall_height) / 2.0
        wall_start = int(wall_top)
        if wall_start < 0:
            wall_start = 0
        wall_end = wall_start + int(wall_height)
        if wall_end > render_height:
            wall_end = render_height

        normalized = dist / max_distance
        if normalized > 1.0:
            normalized = 1.0
        base_index = _numba_wall_index(normalized)
        brightness = 1.0 - normalized

        u = _numba_wall_u(hit_x, hit_y, side)

        seam = passed_exit and abs(dist - exit_threshold) < EXIT_SEAM_WIDTH

        for y in range(render_height):
            if y < wall_start:
                codes[y, x] = GLYPH_BLANK
            elif y < wall_end:
                if seam:
                    codes[y, x] = GLYPH_BLANK
                    continue
                v = (y - wall_top) / wall_height
                value = _numba_dither(points, normalized, u, v, brightness)
                index = base_index
                if value < 1.0 - brightness and index < _WALL_RAMP_LAST:
                    index += 1
                codes[y, x] = GLYPH_WALL_BASE + index
            else:
                p = (y - half_h) / half_h
                if p < FLOOR_MIN_OFFSET:
                    p = FLOOR_MIN_OFFSET
                floor_dist = 1.0 / p
                if passed_exit:
                    visible = floor_dist < exit_threshold
                else:
                    visible = floor_dist < max_distance
                if not visible:
                    codes[y, x] = GLYPH_BLANK
                    continue
                index = _numba_floor_index(floor_dist / max_distance)
                if index < 0:
                    codes[y, x] = GLYPH_BLANK
                else:
                    codes[y, x] = GLYPH_FLOOR_BASE + index


def wall_char(distance, max_distance=MAX_DISTANCE):
    """Undithered wall glyph for a distance"""
    normalized = clamp(distance / max_distance, 0.0, 1.0)
    return WALL_SHADES[_numba_wall_index(normalized)]


def floor_char(distance, max_distance=MAX_DISTANCE):
    """Floor glyph for a distance, ' ' past the last shade"""
    index = _numba_floor_index(distance / max_distance)
    return FLOOR_SHADES[index] if index >= 0 else " "


def codes_to_rows(codes):
    """Glyph-code buffer -> one string per row"""
    return ["".join(row) for row in _PALETTE[codes]]


class FrameRenderer:
    """
    Renders the first-person view of a maze as rows of glyphs
    """

    def __init__(self, width, height, max_distance=MAX_DISTANCE, fov=FOV):
        """
        Args:
            width, height: output grid size in characters
            max_distance: distance cap for rays and shading
            fov: field of view in radians
        """
        if width < 0 or height < 0:
            raise ValueError(f"frame size must not be negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.max_distance = max_distance
        self.raycaster = Raycaster(fov=fov, max_distance=max_distance)
        self.table = get_bayer_table()
        logger.debug("FrameRenderer %dx%d, max distance %.1f", width, height, max_distance)

    def render_codes(self, maze, px, py, angle, exit_point=None):
        """
        Shade a frame into glyph codes (indices into GLYPH_PALETTE)

        Returns:
            int8 numpy array of shape (height, width)
        """
        ray_results = self.raycaster.cast_all_rays(maze, px, py, angle, self.width, exit_point)
        codes = np.empty((self.height, self.width), dtype=np.int8)
        _numba_shade_frame(ray_results, self.table.finest, self.height,
                           float(self.max_distance), codes)
        return codes

    def render(self, maze, px, py, angle, exit_point=None):
        """
        Render a frame

        Returns:
            list of strings, one per screen row
        """
        return codes_to_rows(self.render_codes(maze, px, py, angle, exit_point))


def render_frame(player_x, player_y, player_angle, maze, exit_x, exit_y,
                 width, height, max_distance=MAX_DISTANCE):
    """
    Render one first-person frame

    Args:
        player_x, player_y: player position in world units
        player_angle: facing in radians
        maze: Maze
        exit_x, exit_y: exit point, or None for no exit tracking
        width, height: output grid size in characters
        max_distance: distance cap

    Returns:
        list of `height` strings, each `width` characters long
    """
    exit_point = None
    if exit_x is not None and exit_y is not None:
        exit_point = (exit_x, exit_y)
    renderer = FrameRenderer(width, height, max_distance=max_distance)
    return renderer.render(maze, player_x, player_y, player_angle, exit_point)
