"""
Level Manager - handles maze generation, player movement, timing and level progression
"""

import logging
import math
import time
from dataclasses import dataclass

from maze import SeedSource, generate_maze, get_level_config
from renderer3d import FrameRenderer
from utils.constants import LEVEL_COUNT, MAX_FRAME_DT, MOVE_SPEED, TURN_SPEED, MOUSE_TURN_FACTOR
from utils.helpers import wrap_angle
from .collision import reached_exit, stop_at_exit, try_move
from .game_state import GameState, GameStateManager

logger = logging.getLogger(__name__)


@dataclass
class PlayerInput:
    """One frame of player controls"""
    forward: bool = False
    backward: bool = False
    left: bool = False  # strafe
    right: bool = False  # strafe
    turn_left: bool = False
    turn_right: bool = False
    mouse_delta_x: float = 0.0
    delta_time: float = 0.0  # seconds since last frame


def initial_angle(maze):
    """
    Facing for a fresh level: the first open neighbour of the start in the
    order east, south, west, north, otherwise straight at the exit
    """
    sx, sy = maze.start
    for (dx, dy), angle in (((1, 0), 0.0),
                            ((0, 1), math.pi / 2),
                            ((-1, 0), math.pi),
                            ((0, -1), 3 * math.pi / 2)):
        if not maze.is_wall(sx + dx, sy + dy):
            return angle
    px, py = maze.start_point
    ex, ey = maze.exit_point
    return wrap_angle(math.atan2(ey - py, ex - px))


class Level:
    """
    A single level: its maze and the player's pose inside it
    """
    def __init__(self, number, seed=None, start_time=0.0):
        """
        Args:
            number: 1-based level number
            seed: int, SeedSource or None, forwarded to generate_maze
            start_time: clock reading when the level began
        """
        self.number = number
        self.config = get_level_config(number)
        self.maze = generate_maze(self.config.width, self.config.height, seed)

        self.player_x, self.player_y = self.maze.start_point
        self.player_angle = initial_angle(self.maze)
        self.exit_x, self.exit_y = self.maze.exit_point

        self.start_time = start_time
        self.completion_time = None

    @property
    def completed(self):
        return self.completion_time is not None

    def apply_input(self, player_input):
        """
        Turn and move the player for one frame

        Each translation is checked against the collision mask on its own,
        so a blocked strafe does not cancel a forward step.
        """
        dt = min(max(player_input.delta_time, 0.0), MAX_FRAME_DT)
        move = MOVE_SPEED * dt
        turn = TURN_SPEED * dt

        angle = self.player_angle
        if player_input.turn_left:
            angle -= turn
        if player_input.turn_right:
            angle += turn
        angle += player_input.mouse_delta_x * TURN_SPEED * MOUSE_TURN_FACTOR * dt
        self.player_angle = wrap_angle(angle)

        dx = math.cos(self.player_angle) * move
        dy = math.sin(self.player_angle) * move
        x, y = self.player_x, self.player_y

        if player_input.forward:
            x, y = try_move(self.maze, x, y, dx, dy)
        if player_input.backward:
            x, y = try_move(self.maze, x, y, -dx, -dy)
        if player_input.left:
            side = self.player_angle - math.pi / 2
            x, y = try_move(self.maze, x, y, math.cos(side) * move, math.sin(side) * move)
        if player_input.right:
            side = self.player_angle + math.pi / 2
            x, y = try_move(self.maze, x, y, math.cos(side) * move, math.sin(side) * move)

        self.player_x, self.player_y = x, y

    def check_exit(self, now):
        """Finish the level when the player stands at the exit; returns True once"""
        if self.completed:
            return False
        if not reached_exit(self.player_x, self.player_y, self.exit_x, self.exit_y):
            return False
        self.player_x, self.player_y = stop_at_exit(self.player_x, self.player_y,
                                                    self.exit_x, self.exit_y)
        self.completion_time = now - self.start_time
        return True


class GameSession:
    """
    Level progression across a run of LEVEL_COUNT levels

    The session owns its SeedSource, so two sessions built with the same
    entropy play the same sequence of mazes.
    """
    def __init__(self, seed_source=None, clock=time.monotonic, frame_size=None):
        """
        Args:
            seed_source: SeedSource, or None for a fresh entropy-seeded one
            clock: callable returning seconds, used for level timing
            frame_size: optional (cols, rows) default for render()
        """
        self.seed_source = seed_source if seed_source is not None else SeedSource()
        self.clock = clock
        self.frame_size = frame_size
        self.state = GameStateManager()
        self._renderers = {}

        self.total_time = 0.0
        self.run_times = [None] * LEVEL_COUNT
        self.level = None
        self.load_level(1)

    @property
    def current_level(self):
        return self.level.number

    def load_level(self, number):
        """Generate and enter a level"""
        self.level = Level(number, self.seed_source, start_time=self.clock())
        self.state.transition_to(GameState.PLAYING, level=number)
        logger.debug("level %d: %r", number, self.level.maze)

    def level_elapsed(self):
        """Seconds spent on the current level, frozen once it is completed"""
        if self.level.completed:
            return self.level.completion_time
        return self.clock() - self.level.start_time

    def update(self, player_input):
        """
        Advance one frame; ignored unless a level is being played

        Returns:
            the current GameState
        """
        if not self.state.is_playing():
            return self.state.current_state

        self.level.apply_input(player_input)
        if self.level.check_exit(self.clock()):
            level_time = self.level.completion_time
            self.run_times[self.level.number - 1] = level_time
            self.total_time += level_time
            if self.level.number >= LEVEL_COUNT:
                self.state.transition_to(GameState.WIN, total_time=self.total_time)
            else:
                self.state.transition_to(GameState.LEVEL_COMPLETE, time=level_time)
            logger.debug("level %d complete in %.2fs", self.level.number, level_time)
        return self.state.current_state

    def next_level(self):
        """Move on to the next level, or start a new run after the last one"""
        if self.level.number < LEVEL_COUNT:
            self.load_level(self.level.number + 1)
        else:
            logger.debug("run complete in %.2fs, restarting", self.total_time)
            self.total_time = 0.0
            self.run_times = [None] * LEVEL_COUNT
            self.load_level(1)

    def render(self, width=None, height=None):
        """First-person frame of the current level as a list of rows"""
        if width is None or height is None:
            width, height = self.frame_size
        key = (width, height, self.level.config.max_distance)
        renderer = self._renderers.get(key)
        if renderer is None:
            renderer = FrameRenderer(width, height, max_distance=self.level.config.max_distance)
            self._renderers[key] = renderer
        lvl = self.level
        return renderer.render(lvl.maze, lvl.player_x, lvl.player_y, lvl.player_angle,
                               (lvl.exit_x, lvl.exit_y))
