"""
Matrix Maze - first-person text maze viewer
"""

import argparse
import logging
import sys

import pygame

from game.game_state import GameState
from game.level_manager import GameSession, PlayerInput
from maze import SeedSource
from renderer3d import Minimap
from utils.constants import (
    GAME_TITLE, GAME_VERSION, FPS, VIEW_COLS, VIEW_ROWS, FONT_SIZE, LEVEL_COUNT,
    MOUSE_SCALE, START_BANNER_SECONDS, START_BANNER_CYCLE, START_BANNER_ON_FRACTION,
)
from utils.helpers import format_time, pulse_visible

logger = logging.getLogger(__name__)

COLOR_BG = (0, 0, 0)
COLOR_TEXT = (90, 255, 120)
COLOR_BANNER = (200, 255, 210)


class MazeViewer:
    """
    Main viewer class: pygame window around a GameSession
    """
    def __init__(self, cols=VIEW_COLS, rows=VIEW_ROWS, seed=None):
        pygame.init()
        pygame.display.set_caption(f"{GAME_TITLE} v{GAME_VERSION}")

        self.font = pygame.font.SysFont("monospace", FONT_SIZE)
        self.char_w, self.char_h = self.font.size("█")
        self.line_h = self.font.get_linesize()
        self.cols = cols
        self.rows = rows

        # One extra text row for the HUD
        self.screen = pygame.display.set_mode((cols * self.char_w, (rows + 1) * self.line_h))
        self.clock = pygame.time.Clock()
        self.running = True

        seed_source = SeedSource(seed) if seed is not None else None
        self.session = GameSession(seed_source, frame_size=(cols, rows))
        self.minimap = Minimap(self.font)
        self.show_minimap = False

        self.mouse_dx = 0.0
        self.mouse_grabbed = False
        self._grab_mouse()

    def _grab_mouse(self):
        """Grab mouse for mouse look"""
        pygame.mouse.set_visible(False)
        pygame.event.set_grab(True)
        self.mouse_grabbed = True

    def _release_mouse(self):
        """Release mouse grab"""
        pygame.mouse.set_visible(True)
        pygame.event.set_grab(False)
        self.mouse_grabbed = False

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)
            elif event.type == pygame.MOUSEMOTION and self.mouse_grabbed:
                self.mouse_dx += event.rel[0] * MOUSE_SCALE
            elif event.type == pygame.MOUSEBUTTONDOWN and not self.mouse_grabbed:
                self._grab_mouse()

    def _handle_keydown(self, key):
        if key == pygame.K_ESCAPE:
            if self.mouse_grabbed:
                self._release_mouse()
            else:
                self.running = False
        elif key == pygame.K_m:
            self.show_minimap = not self.show_minimap
        elif key == pygame.K_SPACE and self.session.state.is_finished():
            self.session.next_level()

    def _read_input(self, dt):
        """Current keyboard state and accumulated mouse motion as PlayerInput"""
        keys = pygame.key.get_pressed()
        player_input = PlayerInput(
            forward=keys[pygame.K_w] or keys[pygame.K_UP],
            backward=keys[pygame.K_s] or keys[pygame.K_DOWN],
            left=keys[pygame.K_a],
            right=keys[pygame.K_d],
            turn_left=keys[pygame.K_q] or keys[pygame.K_LEFT],
            turn_right=keys[pygame.K_e] or keys[pygame.K_RIGHT],
            mouse_delta_x=self.mouse_dx,
            delta_time=dt,
        )
        self.mouse_dx = 0.0
        return player_input

    def update(self, dt):
        self.session.update(self._read_input(dt))

    def render(self):
        self.screen.fill(COLOR_BG)

        for i, line in enumerate(self.session.render()):
            text = self.font.render(line, True, COLOR_TEXT)
            self.screen.blit(text, (0, i * self.line_h))

        level = self.session.level
        elapsed = self.session.level_elapsed()
        hud = (f"LEVEL {level.number}/{LEVEL_COUNT}   TIME {format_time(elapsed)}"
               f"   TOTAL {format_time(self.session.total_time)}")
        self.screen.blit(self.font.render(hud, True, COLOR_TEXT), (0, self.rows * self.line_h))

        state = self.session.state.current_state
        if state == GameState.PLAYING and elapsed < START_BANNER_SECONDS:
            if pulse_visible(elapsed, START_BANNER_CYCLE, START_BANNER_ON_FRACTION):
                self._draw_centered(f"LEVEL {level.number} - FIND THE EXIT!")
        elif state == GameState.LEVEL_COMPLETE:
            self._draw_centered(f"LEVEL {level.number} COMPLETE - {format_time(level.completion_time)}"
                                f" - PRESS SPACE")
        elif state == GameState.WIN:
            self._draw_centered(f"ALL LEVELS COMPLETE - TOTAL {format_time(self.session.total_time)}"
                                f" - PRESS SPACE")

        if self.show_minimap:
            self.minimap.render(self.screen, level.maze, (level.player_x, level.player_y))

        pygame.display.flip()

    def _draw_centered(self, message):
        text = self.font.render(message, True, COLOR_BANNER, COLOR_BG)
        rect = text.get_rect(center=(self.screen.get_width() // 2, self.rows * self.line_h // 2))
        self.screen.blit(text, rect)

    def run(self):
        """Main loop"""
        while self.running:
            dt_ms = self.clock.tick(FPS)
            dt = dt_ms / 1000.0

            self.handle_events()
            self.update(dt)
            self.render()

        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=GAME_TITLE)
    parser.add_argument("--cols", type=int, default=VIEW_COLS, help="view width in characters")
    parser.add_argument("--rows", type=int, default=VIEW_ROWS, help="view height in characters")
    parser.add_argument("--seed", type=int, default=None, help="entropy for reproducible mazes")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    """Entry point"""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    viewer = MazeViewer(cols=args.cols, rows=args.rows, seed=args.seed)
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
