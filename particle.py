# particle.py

import math
import numpy as np
import constants


class Particle:
    """
    Represents a single swirling character.

    The particle stores only what is needed to evaluate its closed-form
    trajectory: where it started relative to the screen center and when.

    - Attributes:
        - initial_offset ((float, float)): Offset from the screen center at spawn,
          in un-stretched simulation space.
        - birth_time (float): Monotonic clock reading at spawn, in seconds.
        - glyph (str): The single character drawn for this particle.
    """
    __slots__ = ('initial_offset', 'birth_time', 'glyph')

    def __init__(self, initial_offset: tuple, birth_time: float, glyph: str):
        self.initial_offset = initial_offset
        self.birth_time = birth_time
        self.glyph = glyph

    @property
    def spawn_radius(self) -> float:
        return math.hypot(*self.initial_offset)

    @property
    def spawn_angle(self) -> float:
        """Angle of the initial offset, in [0, 2*pi)."""
        return math.atan2(self.initial_offset[1], self.initial_offset[0]) % (2.0 * math.pi)

    def __repr__(self):
        x, y = self.initial_offset
        return f"Particle(offset=({x:.2f}, {y:.2f}), born={self.birth_time:.3f}, glyph={self.glyph!r})"


def random_glyph(rng: np.random.Generator) -> str:
    """Uniform pick from the fixed glyph set."""
    return constants.GLYPHS[rng.integers(len(constants.GLYPHS))]


def spawn_bounds(cols: int, rows: int, ring=constants.DEFAULT_SPAWN_RING) -> tuple:
    """
    Returns the (min, max) spawn radius for a terminal of the given size.
    The ring is expressed in fractions of the smaller half-dimension.
    """
    cx = (cols - 1) * 0.5
    cy = (rows - 1) * 0.5
    maxr = min(cx, cy)
    return ring[0] * maxr, ring[1] * maxr


def spawn_particle(cols: int, rows: int, rng: np.random.Generator, clock,
                   ring=constants.DEFAULT_SPAWN_RING) -> Particle:
    """
    Creates a particle somewhere in a ring around the screen center.

    - Inputs:
        - cols, rows (int): Current terminal size (positive).
        - rng (np.random.Generator): Source of all randomness.
        - clock (callable): Returns monotonic seconds.
        - ring ((float, float)): Spawn ring bounds as fractions of the smaller
          half-dimension.
    - Outputs: A new Particle.
    """
    r_min, r_max = spawn_bounds(cols, rows, ring)
    r = rng.uniform(r_min, r_max)
    a = rng.uniform(0.0, 2.0 * math.pi)

    return Particle(
        initial_offset=(r * math.cos(a), r * math.sin(a)),
        birth_time=clock(),
        glyph=random_glyph(rng),
    )


def particle_count(cols: int, rows: int,
                   divisor: int = constants.DEFAULT_DENSITY_DIVISOR,
                   floor: int = constants.DEFAULT_MIN_PARTICLES) -> int:
    """Number of particles for a terminal of the given size."""
    return max(floor, (cols * rows) // divisor)
