"""
Minimap - top-down text map of the maze
"""

import pygame

from utils.constants import WALL_SHADES

MAP_WALL = WALL_SHADES[0]
MAP_OPEN = " "
MAP_START = "P"
MAP_EXIT = "E"
MAP_PLAYER = "@"


def maze_map_lines(maze, player_pos=None):
    """
    Top-down map of a maze, one string per row

    Args:
        maze: Maze
        player_pos: optional (x, y) world position, drawn as '@'

    Returns:
        list of strings, `maze.height` rows of `maze.width` characters
    """
    player_cell = None
    if player_pos is not None:
        player_cell = (int(player_pos[0] // 1), int(player_pos[1] // 1))

    lines = []
    for y in range(maze.height):
        row = []
        for x in range(maze.width):
            if (x, y) == player_cell:
                row.append(MAP_PLAYER)
            elif (x, y) == maze.start:
                row.append(MAP_START)
            elif (x, y) == maze.exit:
                row.append(MAP_EXIT)
            elif maze.is_wall(x, y):
                row.append(MAP_WALL)
            else:
                row.append(MAP_OPEN)
        lines.append("".join(row))
    return lines


class Minimap:
    """
    Text minimap overlay for the viewer window
    """

    def __init__(self, font, margin=10):
        """
        Args:
            font: monospaced pygame.font.Font
            margin: distance from the screen corner in pixels
        """
        self.font = font
        self.margin = margin
        self.text_color = (120, 255, 140)
        self.player_color = (255, 230, 90)
        self.bg_color = (0, 0, 0, 190)

    def render(self, screen, maze, player_pos=None):
        """Draw the map in the top-right corner of screen"""
        lines = maze_map_lines(maze, player_pos)
        line_height = self.font.get_linesize()
        char_width = self.font.size(MAP_WALL)[0]
        width = char_width * maze.width + 8
        height = line_height * maze.height + 8

        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(self.bg_color)
        for i, line in enumerate(lines):
            text = self.font.render(line, True, self.text_color)
            panel.blit(text, (4, 4 + i * line_height))
            if MAP_PLAYER in line:
                # Redraw the player marker on top in its own color
                col = line.index(MAP_PLAYER)
                marker = self.font.render(MAP_PLAYER, True, self.player_color)
                panel.fill((0, 0, 0, 255), (4 + col * char_width, 4 + i * line_height,
                                            char_width, line_height))
                panel.blit(marker, (4 + col * char_width, 4 + i * line_height))

        screen_w = screen.get_width()
        screen.blit(panel, (screen_w - width - self.margin, self.margin))
