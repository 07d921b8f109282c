# trajectory.py

"""
Closed-form swirl trajectory.

Particles follow the linear ODE dv/dt = A v with A = [[-1, -1], [1, 0]].
A has eigenvalues -1/2 +- i*sqrt(3)/2, so every solution rotates while its
magnitude decays. Instead of integrating, positions are evaluated directly
from the matrix exponential:

    exp(A t) = e^{-t/2} [cos(w t) I + (sin(w t) / w) (A + I/2)],  w = sqrt(3)/2

The numeric kernels are compiled with Numba and kept free of allocations so
they can run once per particle per frame. They operate only on scalars and
pre-allocated NumPy arrays, as required by Numba's nopython mode.
"""

from collections import namedtuple

import numba
import numpy as np

import constants

# raw: evolved vector after radius/damping scaling (un-stretched space)
# screen: raw with horizontal/vertical stretch applied, relative to center
# velocity: SPEED * A * raw, in un-stretched space
TrajectoryState = namedtuple('TrajectoryState', ['raw', 'screen', 'velocity'])


# --- JIT-Compiled Kernels ---

@numba.jit(nopython=True)
def _exp_matrix_jit(t, w, eps):
    """Returns the four components (m00, m01, m10, m11) of exp(A t)."""
    et = np.exp(-0.5 * t)
    c = np.cos(w * t)
    # sin(wt)/w -> t as w -> 0
    if abs(w) < eps:
        k = t * 1.0
    else:
        k = np.sin(w * t) / w

    # B = A + 0.5 I = [[-0.5, -1], [1, 0.5]]
    m00 = et * (c - 0.5 * k)
    m01 = et * (-k)
    m10 = et * k
    m11 = et * (c + 0.5 * k)
    return m00, m01, m10, m11


@numba.jit(nopython=True)
def _advance_jit(x0, y0, age, gain, x_mult, y_mult, speed, w, eps):
    """
    Evolves one initial offset by `age` (already multiplied by SPEED).
    Returns (vx, vy, sx, sy, dvx, dvy).
    """
    m00, m01, m10, m11 = _exp_matrix_jit(age, w, eps)
    vx = gain * (m00 * x0 + m01 * y0)
    vy = gain * (m10 * x0 + m11 * y0)

    # v_dot = SPEED * A * v
    dvx = speed * (-vx - vy)
    dvy = speed * vx
    return vx, vy, x_mult * vx, y_mult * vy, dvx, dvy


@numba.jit(nopython=True, fastmath=True)
def _advance_all_jit(offsets, births, now, gain, x_mult, y_mult, speed, w, eps, raw, screen, velocity):
    """
    Numba-accelerated trajectory pass over the whole particle arena.
    Writes into the raw, screen and velocity arrays in place.
    """
    for i in range(offsets.shape[0]):
        age = (now - births[i]) * speed
        vx, vy, sx, sy, dvx, dvy = _advance_jit(
            offsets[i, 0], offsets[i, 1], age, gain, x_mult, y_mult, speed, w, eps
        )
        raw[i, 0] = vx
        raw[i, 1] = vy
        screen[i, 0] = sx
        screen[i, 1] = sy
        velocity[i, 0] = dvx
        velocity[i, 1] = dvy


# --- Python Interface ---

def exp_matrix(t: float, w: float = constants.OMEGA) -> np.ndarray:
    """
    Returns exp(A t) as a 2x2 array.

    `w` defaults to sqrt(3)/2; it is a parameter only so the small-w limit
    can be exercised.
    """
    m00, m01, m10, m11 = _exp_matrix_jit(float(t), float(w), constants.OMEGA_EPSILON)
    return np.array([[m00, m01], [m10, m11]])


def evolve(initial_offset, t: float) -> tuple:
    """Applies exp(A t) to `initial_offset` without any scaling."""
    m00, m01, m10, m11 = _exp_matrix_jit(float(t), constants.OMEGA, constants.OMEGA_EPSILON)
    x0, y0 = initial_offset
    return (m00 * x0 + m01 * y0, m10 * x0 + m11 * y0)


def advance(initial_offset, age: float) -> TrajectoryState:
    """
    Maps an initial offset and an age to the particle's current state.

    - Inputs:
        - initial_offset ((float, float)): Spawn offset from the screen center.
        - age (float): Elapsed time multiplied by SPEED.
    - Outputs: TrajectoryState(raw, screen, velocity), each an (x, y) tuple.
    """
    x0, y0 = initial_offset
    vx, vy, sx, sy, dvx, dvy = _advance_jit(
        float(x0), float(y0), float(age),
        constants.RADIUS_MULT * constants.SCALE,
        constants.X_MULT, constants.Y_MULT, constants.SPEED,
        constants.OMEGA, constants.OMEGA_EPSILON,
    )
    return TrajectoryState((vx, vy), (sx, sy), (dvx, dvy))


def advance_all(offsets: np.ndarray, births: np.ndarray, now: float,
                raw: np.ndarray, screen: np.ndarray, velocity: np.ndarray):
    """
    Runs `advance` for every slot of the arena at time `now`.

    offsets, raw, screen and velocity are (N, 2) float arrays; births is (N,).
    The three output arrays are overwritten.
    """
    _advance_all_jit(
        offsets, births, float(now),
        constants.RADIUS_MULT * constants.SCALE,
        constants.X_MULT, constants.Y_MULT, constants.SPEED,
        constants.OMEGA, constants.OMEGA_EPSILON,
        raw, screen, velocity,
    )
