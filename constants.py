# constants.py

"""
Application Constants

This module defines static configuration values for the swirl animation.
These are not expected to change between runs; the handful of values that
differed between historical variants of the program (spawn ring, particle
density, frame delay) are only defaults here and can be overridden from the
'simulation' section of config.json.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

import math

# Window Title (used in log messages only, the terminal has no title bar)
TITLE = "ematrix"

# Logger name shared by every module
LOGGER_NAME = "ematrix"

# --- Swirl model ---
# The trajectory is v(t) = exp(A t) v0 with A = [[-1, -1], [1, 0]].
OMEGA = math.sqrt(3.0) / 2.0  # Imaginary part of A's eigenvalues
OMEGA_EPSILON = 1e-8          # Below this, sin(wt)/w degenerates to t

SCALE = 0.76        # Fixed damping scale applied to the evolved vector
RADIUS_MULT = 2.0   # Overall swirl radius
X_MULT = 2.0        # Horizontal stretch (terminal cells are about twice as tall as wide)
Y_MULT = 1.0        # Vertical stretch
SPEED = 1.35        # Swirl speed; ages are multiplied by this
MIN_R = 3.0         # Respawn when closer than this to the center (cells, un-stretched)

# --- Spawning ---
DEFAULT_SPAWN_RING = (0.35, 0.95)  # Fractions of the smaller half-dimension
DEFAULT_DENSITY_DIVISOR = 20       # One particle per this many cells
DEFAULT_MIN_PARTICLES = 200
GLYPHS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz@#$%&*+=-"
DEFAULT_GLYPH_MUTATION_ODDS = 28   # One in N live particles changes glyph per frame

# --- Frame pacing ---
DEFAULT_FRAME_DELAY = 0.00328  # Seconds slept after every frame (~300 fps cap)
STATS_LOG_INTERVAL = 100       # Frames between debug statistics lines

# --- Input ---
QUIT_KEYS = (ord('q'), ord('Q'))
TOGGLE_KEYS = (ord('r'), ord('R'))

# --- Color pairs ---
PLAIN_PAIR = 1  # "Matrix green" on the default background

# Black-hole rainbow palette: blue, cyan, green, yellow, orange, red, magenta,
# purple, white. The last entry is always the white-hot color.
BH_PAIR_BASE_256 = 20
BH_COLORS_256 = (21, 51, 46, 226, 202, 196, 201, 93, 231)

# Fallback for terminals with fewer than 256 colors, filled in with curses
# color numbers (blue, cyan, green, yellow, red, magenta, white).
BH_PAIR_BASE_8 = 10
BH_COLORS_8 = (4, 6, 2, 3, 1, 5, 7)

# --- Black-hole shading ---
# Radii are fractions of the max visible radius in un-stretched space.
SHADOW_RADIUS = 0.18
RING_RADIUS = 0.32
RING_WIDTH = 0.06
RING_THICKNESS_BASE = 0.6      # Ring thickness = width * (base + gain * swirl)
RING_THICKNESS_GAIN = 0.8
RING_BLINK_RATE = 14.0         # Ring white/rainbow alternations per second (x2)
RING_WHITE_SWIRL = 0.55
RING_BLINK_SWIRL = 0.75

SWIRL_NORM = 2.0
HEAT_NORM = 2.0
KINEMATIC_EPSILON = 1e-3

# Hue weights: time, swirl, normalized radius, heat
HUE_TIME_WEIGHT = 0.12
HUE_SWIRL_WEIGHT = 0.85
HUE_RADIUS_WEIGHT = 0.40
HUE_HEAT_WEIGHT = 0.15

# Disk intensity score = heat weight * heat + swirl weight * swirl
DISK_HEAT_WEIGHT = 0.60
DISK_SWIRL_WEIGHT = 0.40
DISK_SPARKLE_SCORE = 0.85
DISK_BOLD_SCORE = 0.65
DISK_DIM_SCORE = 0.25

# Odds are "one in N"
SHADOW_DRAW_ODDS = 4
SPARKLE_ODDS = 10
TWINKLE_ODDS = 128

# --- Plain shading ---
PLAIN_AGE_NORM = 2.0
PLAIN_BOLD_THRESHOLD = 0.66

# --- Configuration fallback ---
# Used when config.json cannot be found.
DEFAULT_CONFIG = {
    "run_id": "default",
    "master_seed": None,
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
    "simulation": {},
}
