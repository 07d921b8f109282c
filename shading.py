# shading.py

"""
Shading Classifier

Maps a particle's kinematics for the current frame to a color pair and a set
of attributes. Nothing is remembered between frames: the result depends only
on the explicit inputs and on the random generator passed in, so every
decision can be reproduced from a seeded generator.

Data Contract:
- Inputs: radius, speed, age and time for one particle, the active ShadeMode,
  and the Palette describing the registered color pairs.
- Outputs: A Shade tuple. The terminal layer turns it into curses attributes.
- Invariants: Randomness only affects appearance, never trajectories.
"""

from collections import namedtuple
import enum
import math

import numpy as np

import constants


class ShadeMode(enum.Enum):
    """Global shading mode, toggled from the keyboard."""
    PLAIN = "plain"
    BLACK_HOLE = "black_hole"

    def toggled(self) -> "ShadeMode":
        return ShadeMode.BLACK_HOLE if self is ShadeMode.PLAIN else ShadeMode.PLAIN


class ShadeState(enum.Enum):
    """The discrete visual states a particle can be drawn in."""
    PLAIN = "plain"
    BOLD = "bold"
    SHADOW = "shadow"
    RING = "ring"
    DISK_RAINBOW = "disk-rainbow"
    DISK_SPARKLE = "disk-bright-sparkle"
    DISK_DIM = "disk-dim"
    TWINKLE = "global-twinkle"


class Zone(enum.Enum):
    SHADOW = "shadow"
    RING = "ring"
    DISK = "disk"


Shade = namedtuple('Shade', ['state', 'pair', 'bold', 'dim', 'blink', 'visible'])

# Registered rainbow pairs: pair numbers base .. base + count - 1, last one white.
Palette = namedtuple('Palette', ['base', 'count'])

# Per-frame derived quantities for black-hole shading.
DiskKinematics = namedtuple('DiskKinematics', ['swirl', 'heat', 'hue', 'hue_index'])


def palette_white(palette: Palette) -> int:
    return palette.base + palette.count - 1


# --- Plain mode ---

def normalized_age(age: float) -> float:
    return min(age / constants.PLAIN_AGE_NORM, 1.0)


def classify_plain(age: float) -> Shade:
    """
    Monochrome shading. Particles turn bold once their normalized age passes
    the threshold; since age only grows, they stay bold until respawned.
    """
    bold = normalized_age(age) > constants.PLAIN_BOLD_THRESHOLD
    state = ShadeState.BOLD if bold else ShadeState.PLAIN
    return Shade(state, constants.PLAIN_PAIR, bold, False, False, True)


# --- Black-hole mode ---

def max_visible_radius(cols: int, rows: int) -> float:
    """Largest radius that stays on screen, in un-stretched space."""
    cx = (cols - 1) * 0.5
    cy = (rows - 1) * 0.5
    return min(cx / constants.X_MULT, cy / constants.Y_MULT)


def swirl_factor(speed: float, r: float) -> float:
    """Local angular-rate proxy |v_dot| / r, normalized and clamped to [0, 1]."""
    swirl = speed / (r + constants.KINEMATIC_EPSILON)
    return min(swirl / constants.SWIRL_NORM, 1.0)


def heat_factor(speed: float, maxr_vis: float) -> float:
    """Speed relative to a reference speed at twice the max visible radius."""
    reference = constants.SPEED * (maxr_vis * constants.HEAT_NORM) + constants.KINEMATIC_EPSILON
    return min(speed / reference, 1.0)


def hue_index(tnow: float, swirl: float, r: float, heat: float, maxr_vis: float,
              count: int) -> tuple:
    """
    Rotating rainbow position from time, swirl, radius and heat.
    Returns (hue in [0, 1), bucket index in [0, count)).
    """
    rr = min(r / (maxr_vis + constants.KINEMATIC_EPSILON), 1.0)
    hue = math.fmod(
        constants.HUE_TIME_WEIGHT * tnow
        + constants.HUE_SWIRL_WEIGHT * swirl
        + constants.HUE_RADIUS_WEIGHT * rr
        + constants.HUE_HEAT_WEIGHT * heat,
        1.0,
    )
    if hue < 0.0:
        hue += 1.0
    index = int(math.floor(hue * count))
    return hue, min(max(index, 0), count - 1)


def disk_kinematics(r: float, speed: float, tnow: float, maxr_vis: float,
                    palette: Palette) -> DiskKinematics:
    swirl = swirl_factor(speed, r)
    heat = heat_factor(speed, maxr_vis)
    hue, index = hue_index(tnow, swirl, r, heat, maxr_vis, palette.count)
    return DiskKinematics(swirl, heat, hue, index)


def zone_for(r: float, swirl: float, maxr_vis: float) -> Zone:
    """
    Radial zone of a particle. The photon ring widens as swirl increases.
    """
    if r < constants.SHADOW_RADIUS * maxr_vis:
        return Zone.SHADOW

    ring_r = constants.RING_RADIUS * maxr_vis
    ring_thick = constants.RING_WIDTH * maxr_vis * (
        constants.RING_THICKNESS_BASE + constants.RING_THICKNESS_GAIN * swirl
    )
    if abs(r - ring_r) < ring_thick:
        return Zone.RING
    return Zone.DISK


def _one_in(rng: np.random.Generator, odds: int) -> bool:
    return rng.integers(odds) == 0


def classify_black_hole(r: float, kin: DiskKinematics, tnow: float, maxr_vis: float,
                        palette: Palette, rng: np.random.Generator) -> Shade:
    """
    Accretion-disk shading.

    - Shadow: most characters are skipped, the rest are dimmed.
    - Photon ring: bold, alternating between white and rainbow with time.
    - Disk: rainbow with intensity from heat and swirl, plus sparkles.
    - Any visible particle may rarely twinkle bold white.
    """
    white = palette_white(palette)
    rainbow = palette.base + kin.hue_index
    zone = zone_for(r, kin.swirl, maxr_vis)

    if zone is Zone.SHADOW:
        if not _one_in(rng, constants.SHADOW_DRAW_ODDS):
            return Shade(ShadeState.SHADOW, palette.base, False, False, False, False)
        shade = Shade(ShadeState.SHADOW, palette.base, False, True, False, True)

    elif zone is Zone.RING:
        blink_on = int(tnow * constants.RING_BLINK_RATE) & 1
        pair = white if (blink_on or kin.swirl > constants.RING_WHITE_SWIRL) else rainbow
        shade = Shade(ShadeState.RING, pair, True, False,
                      kin.swirl > constants.RING_BLINK_SWIRL, True)

    else:
        score = constants.DISK_HEAT_WEIGHT * kin.heat + constants.DISK_SWIRL_WEIGHT * kin.swirl
        if score > constants.DISK_SPARKLE_SCORE:
            if _one_in(rng, constants.SPARKLE_ODDS):
                shade = Shade(ShadeState.DISK_SPARKLE, white, True, False, True, True)
            else:
                shade = Shade(ShadeState.DISK_RAINBOW, rainbow, True, False, False, True)
        elif score > constants.DISK_BOLD_SCORE:
            shade = Shade(ShadeState.DISK_RAINBOW, rainbow, True, False, False, True)
        elif score < constants.DISK_DIM_SCORE:
            shade = Shade(ShadeState.DISK_DIM, rainbow, False, True, False, True)
        else:
            shade = Shade(ShadeState.DISK_RAINBOW, rainbow, False, False, False, True)

    if _one_in(rng, constants.TWINKLE_ODDS):
        return Shade(ShadeState.TWINKLE, white, True, False, True, True)
    return shade


def classify(mode: ShadeMode, age: float, r: float, speed: float, tnow: float,
             maxr_vis: float, palette: Palette, rng: np.random.Generator) -> Shade:
    """Dispatches to the classifier for the active mode."""
    if mode is ShadeMode.PLAIN:
        return classify_plain(age)
    kin = disk_kinematics(r, speed, tnow, maxr_vis, palette)
    return classify_black_hole(r, kin, tnow, maxr_vis, palette, rng)
