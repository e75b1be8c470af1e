"""
Collision detection and handling against the maze grid
"""

from utils.constants import EXIT_REACH_RADIUS, EXIT_STOP_FACTOR
from utils.helpers import distance


def try_move(maze, x, y, dx, dy):
    """
    Move a point by (dx, dy) unless the target lands inside a wall

    Returns:
        (x, y) after the move, unchanged when blocked
    """
    new_x = x + dx
    new_y = y + dy
    if maze.get_cell(new_x, new_y):
        return x, y
    return new_x, new_y


def reached_exit(x, y, exit_x, exit_y, radius=EXIT_REACH_RADIUS):
    """True when (x, y) is strictly within radius of the exit point"""
    return distance(x, y, exit_x, exit_y) < radius


def stop_at_exit(x, y, exit_x, exit_y):
    """Position just short of the exit along the line from (x, y)"""
    return (exit_x - (exit_x - x) * EXIT_STOP_FACTOR,
            exit_y - (exit_y - y) * EXIT_STOP_FACTOR)
