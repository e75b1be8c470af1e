"""
3D Renderer Module - raycast first-person view rendered as text glyphs
"""

from .raycaster import Raycaster, RayHit, WallSide, cast_ray
from .renderer import FrameRenderer, render_frame, wall_char, floor_char
from .minimap import Minimap, maze_map_lines

__all__ = ['Raycaster', 'RayHit', 'WallSide', 'cast_ray',
           'FrameRenderer', 'render_frame', 'wall_char', 'floor_char',
           'Minimap', 'maze_map_lines']
