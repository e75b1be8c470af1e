"""
Global constants for Matrix Maze
"""

import math

# Game identity
GAME_TITLE = "Matrix Maze"
GAME_VERSION = "1.3.0"

# Camera / projection
FOV = math.pi / 2  # 90 degrees
MAX_DISTANCE = 20.0
NEAR_WALL_DISTANCE = 0.01  # Below this the wall fills the max slice height
WALL_HEIGHT_CAP = 2.0  # Wall slice height cap, in screen heights

# Maze generation
MIN_MAZE_SIZE = 5
MIN_START_EXIT_DISTANCE = 3.0
START_PICK_ATTEMPTS = 50

# Linear congruential generator (glibc-style constants, 64-bit wrap)
LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MASK = (1 << 64) - 1

# Exit edges
EDGE_TOP = 0
EDGE_RIGHT = 1
EDGE_BOTTOM = 2
EDGE_LEFT = 3

# Interior neighbour offset of an exit on each edge
EDGE_INWARD = {
    EDGE_TOP: (0, 1),
    EDGE_RIGHT: (-1, 0),
    EDGE_BOTTOM: (0, -1),
    EDGE_LEFT: (1, 0),
}

# Traversal directions on the odd-cell lattice (two cells per step)
LATTICE_DIRS = [
    (0, -2),   # up
    (2, 0),    # right
    (0, 2),    # down
    (-2, 0),   # left
]

# Glyph palette
CEILING_CHAR = " "
WALL_SHADES = "█▓▒░·"
WALL_SHADE_STOPS = (0.1, 0.3, 0.5, 0.7)
FLOOR_SHADES = ".,"  # anything past the last stop is blank
FLOOR_SHADE_STOPS = (0.3, 0.6)
EXIT_SEAM_WIDTH = 0.2
FLOOR_MIN_OFFSET = 0.1

# Every glyph the frame kernel can emit, indexed by glyph code
#   0      ceiling / blank
#   1..5   wall ramp
#   6..7   floor ramp
GLYPH_PALETTE = CEILING_CHAR + WALL_SHADES + FLOOR_SHADES
GLYPH_BLANK = 0
GLYPH_WALL_BASE = 1
GLYPH_FLOOR_BASE = 1 + len(WALL_SHADES)

# Fractal dithering
DITHER_LEVELS = 4
DITHER_SOFTNESS = 2.4
DITHER_INTERP_EPSILON = 0.001

# Player movement (per second)
MOVE_SPEED = 1.8
TURN_SPEED = 3.6
MOUSE_TURN_FACTOR = 2.0
MOUSE_SCALE = 0.01  # pixels of relative motion -> mouse_delta_x
MAX_FRAME_DT = 0.1
EXIT_REACH_RADIUS = 0.5
EXIT_STOP_FACTOR = 0.1

# Levels
LEVEL_COUNT = 5
START_BANNER_SECONDS = 3.0
START_BANNER_CYCLE = 0.8
START_BANNER_ON_FRACTION = 0.625

# Viewer window
FPS = 60
VIEW_COLS = 120
VIEW_ROWS = 40
FONT_SIZE = 14
