"""
Level configurations for Matrix Maze
Defines 5 levels with growing maze size
"""

from utils.constants import LEVEL_COUNT, MAX_DISTANCE


class LevelConfig:
    """Configuration for a single level"""
    def __init__(self, **kwargs):
        self.number = kwargs.get('number', 1)
        self.name = kwargs.get('name', f"LEVEL {self.number}")

        # Maze dimensions (odd so the lattice meets the border)
        self.width = kwargs.get('width', 9)
        self.height = kwargs.get('height', 9)

        # Render distance cap
        self.max_distance = kwargs.get('max_distance', MAX_DISTANCE)


# ========== LEVEL DEFINITIONS ==========

LEVELS = [
    LevelConfig(number=1, width=9, height=9),
    LevelConfig(number=2, width=11, height=11),
    LevelConfig(number=3, width=13, height=13),
    LevelConfig(number=4, width=15, height=15),
    LevelConfig(number=5, width=17, height=17),
]


def get_level_config(level):
    """
    Get configuration for a 1-based level number

    Raises:
        ValueError: if level is outside 1..LEVEL_COUNT
    """
    if not 1 <= level <= LEVEL_COUNT:
        raise ValueError(f"level must be in 1..{LEVEL_COUNT}, got {level}")
    return LEVELS[level - 1]
