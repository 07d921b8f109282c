# particle_system.py

from collections import namedtuple
import logging
import time

import numpy as np

import constants
from particle import particle_count, random_glyph, spawn_particle
from shading import ShadeMode, classify, max_visible_radius
from trajectory import advance_all

logger = logging.getLogger(constants.LOGGER_NAME)

# One character to put on screen. shade is None when the terminal has no colors.
DrawCommand = namedtuple('DrawCommand', ['x', 'y', 'glyph', 'shade'])


class ParticleSystem:
    """
    Owns every particle and advances them one frame at a time.

    Particles live in fixed slots (Structure of Arrays) allocated once. An
    expired particle is respawned into its own slot; nothing is ever appended
    or removed.

    Data Contract:
    - Inputs:
        - num_particles (int): Number of slots.
        - config (dict): The 'simulation' section of the config file.
        - rng (np.random.Generator): The master seeded random number generator.
        - bounds (tuple): The (cols, rows) of the terminal.
        - clock (callable): Monotonic seconds; injectable for tests.
    - Outputs: step() returns the DrawCommands for one frame.
    - Side Effects: Mutates the arena in place.
    - Invariants: Every DrawCommand lies inside the current bounds and belongs
      to a particle at least MIN_R from the center. All arrays keep length
      num_particles.
    """
    def __init__(self, num_particles: int, config: dict, rng: np.random.Generator,
                 bounds: tuple, clock=time.monotonic):
        self.num_particles = num_particles
        self.rng = rng
        self.clock = clock
        self.spawn_ring = tuple(config.get('spawn_ring', constants.DEFAULT_SPAWN_RING))
        self.glyph_mutation_odds = config.get('glyph_mutation_odds', constants.DEFAULT_GLYPH_MUTATION_ODDS)
        self.bounds = self._clamp_bounds(bounds)

        # --- Arena (Structure of Arrays) ---
        self.offsets = np.zeros((num_particles, 2), dtype=float)
        self.births = np.zeros(num_particles, dtype=float)
        self.glyphs = [' '] * num_particles

        # --- Per-frame scratch, reused every step ---
        self.raw = np.zeros((num_particles, 2), dtype=float)
        self.screen = np.zeros((num_particles, 2), dtype=float)
        self.velocities = np.zeros((num_particles, 2), dtype=float)

        # --- Frame statistics for logging ---
        self.respawns_last_step = 0
        self.drawn_last_step = 0

        self.respawn_all()
        logger.info(f"ParticleSystem created for {num_particles} particles in a {self.bounds[0]}x{self.bounds[1]} terminal.")

    @classmethod
    def for_terminal(cls, config: dict, rng: np.random.Generator, bounds: tuple,
                     clock=time.monotonic) -> "ParticleSystem":
        """Sizes the arena from the terminal area."""
        cols, rows = cls._clamp_bounds(bounds)
        n = particle_count(
            cols, rows,
            config.get('density_divisor', constants.DEFAULT_DENSITY_DIVISOR),
            config.get('min_particles', constants.DEFAULT_MIN_PARTICLES),
        )
        return cls(n, config, rng, (cols, rows), clock)

    @staticmethod
    def _clamp_bounds(bounds: tuple) -> tuple:
        cols, rows = bounds
        return max(1, int(cols)), max(1, int(rows))

    def respawn(self, i: int):
        cols, rows = self.bounds
        p = spawn_particle(cols, rows, self.rng, self.clock, self.spawn_ring)
        self.offsets[i] = p.initial_offset
        self.births[i] = p.birth_time
        self.glyphs[i] = p.glyph

    def respawn_all(self):
        for i in range(self.num_particles):
            self.respawn(i)

    def resize(self, bounds: tuple):
        """Adopts a new terminal size and respawns every particle."""
        self.bounds = self._clamp_bounds(bounds)
        self.respawn_all()
        logger.info(f"Terminal resized to {self.bounds[0]}x{self.bounds[1]}; respawned {self.num_particles} particles.")

    def step(self, mode: ShadeMode, palette=None) -> list:
        """
        Advances every particle to the current time.

        Particles too close to the center or off screen are respawned and
        not drawn this frame. Survivors occasionally change glyph and are
        classified for shading when a palette is available.
        """
        cols, rows = self.bounds
        cx = (cols - 1) * 0.5
        cy = (rows - 1) * 0.5
        maxr_vis = max_visible_radius(cols, rows)

        tnow = self.clock()
        advance_all(self.offsets, self.births, tnow, self.raw, self.screen, self.velocities)

        # --- Vectorized expiry test ---
        radii = np.hypot(self.raw[:, 0], self.raw[:, 1])
        speeds = np.hypot(self.velocities[:, 0], self.velocities[:, 1])
        xs = np.floor(cx + self.screen[:, 0] + 0.5).astype(int)
        ys = np.floor(cy + self.screen[:, 1] + 0.5).astype(int)
        expired = (radii < constants.MIN_R) | (xs < 0) | (xs >= cols) | (ys < 0) | (ys >= rows)

        commands = []
        respawns = 0
        for i in range(self.num_particles):
            if expired[i]:
                self.respawn(i)
                respawns += 1
                continue

            if self.rng.integers(self.glyph_mutation_odds) == 0:
                self.glyphs[i] = random_glyph(self.rng)

            shade = None
            if palette is not None:
                age = (tnow - self.births[i]) * constants.SPEED
                shade = classify(mode, age, radii[i], speeds[i], tnow, maxr_vis, palette, self.rng)
                if not shade.visible:
                    continue

            commands.append(DrawCommand(int(xs[i]), int(ys[i]), self.glyphs[i], shade))

        self.respawns_last_step = respawns
        self.drawn_last_step = len(commands)
        return commands
