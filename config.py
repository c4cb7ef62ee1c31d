"""
config.py — Global constants for 4D Pacman.

Tunable constants that are not exposed in ``config.txt`` live here.  No game
logic; pure data.  User-facing settings are parsed by ``core/settings.py``.
Imported by any module that needs constants — never the other way around.
"""

import os

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

ROOT_DIR      = os.path.dirname(os.path.abspath(__file__))
SETTINGS_PATH = os.path.join(ROOT_DIR, "config.txt")

# File names looked up inside the ``resources`` directory from config.txt
FONT_FILE = os.path.join("fonts", "hud.ttf")
ICON_FILE = "icon.png"

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------

WINDOW_TITLE = "4D Pacman v0.2"

# Used when no desktop size can be queried (e.g. headless drivers)
FALLBACK_DESKTOP_SIZE = (1280, 720)

# Height of the overhead camera above the maze floor, in cells.  Together
# with the configured field of view this decides how many cells fit on
# screen vertically.
CAMERA_HEIGHT = 2.5

# Never show fewer cells than this, however narrow the field of view
MIN_VISIBLE_CELLS = 3.0

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

COLOR_BG         = (0,   0,   0)
COLOR_FLOOR      = (40,  20,  20)
COLOR_WALL       = (30,  30,  200)
COLOR_PLAYER     = (230, 200, 40)
COLOR_GHOST      = (220, 60,  60)
COLOR_FOOD       = (100, 205, 50)
COLOR_EXIT       = (60,  200, 200)
COLOR_ASCEND     = (200, 200, 255)
COLOR_PORTAL     = (180, 90,  230)
COLOR_HUD        = (240, 240, 240)
COLOR_HUD_DIM    = (90,  90,  90)
COLOR_WIN        = (40,  160, 60)
COLOR_LOSE       = (160, 30,  30)

# Rainbow used to tint maze layers along the w axis
RAINBOW = [
    (204, 51,  51),
    (204, 102, 51),
    (102, 204, 51),
    (51,  204, 51),
    (51,  102, 204),
    (51,  51,  204),
    (102, 51,  204),
]

# ---------------------------------------------------------------------------
# Gameplay
# ---------------------------------------------------------------------------

# Seconds the player takes to slide into the next cell
PLAYER_MOVE_TIME = 0.5

# Base font size of the HUD before ui-scale is applied
HUD_FONT_SIZE = 28
