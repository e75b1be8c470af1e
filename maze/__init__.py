"""
Maze Module - grid type, seeded generation and level table
"""

from .maze_core import Maze, MazeBuilder, InvalidDimensions, reachable_from
from .generator import generate_maze
from .rng import Lcg, SeedSource
from .levels import LevelConfig, get_level_config

__all__ = ['Maze', 'MazeBuilder', 'InvalidDimensions', 'reachable_from',
           'generate_maze', 'Lcg', 'SeedSource', 'LevelConfig', 'get_level_config']
