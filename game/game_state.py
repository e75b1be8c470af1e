"""
Game State Machine - tracks whether a level is being played or has been won
"""

import logging
from enum import Enum, auto

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Game states"""
    PLAYING = auto()
    LEVEL_COMPLETE = auto()
    WIN = auto()  # last level completed


class GameStateManager:
    """
    Manages game state transitions
    """
    def __init__(self):
        self.current_state = GameState.PLAYING
        self.previous_state = None
        self.state_data = {}  # For passing data between states

    def transition_to(self, new_state, **kwargs):
        """
        Transition to a new state

        Args:
            new_state: GameState enum value
            **kwargs: Additional data to pass to new state
        """
        self.previous_state = self.current_state
        self.current_state = new_state
        self.state_data = kwargs
        logger.debug("state %s -> %s", self.previous_state.name, new_state.name)

    def is_playing(self):
        return self.current_state == GameState.PLAYING

    def is_finished(self):
        """Level done, either mid-run or the final one"""
        return self.current_state in (GameState.LEVEL_COMPLETE, GameState.WIN)
