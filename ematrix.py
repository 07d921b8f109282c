# ematrix.py

import argparse
import curses
import logging
import os
import sys
import time

import numpy as np

import constants
import logger_setup
from particle_system import ParticleSystem
from shading import ShadeMode
from terminal import TerminalScreen

# Get the application's dedicated logger
logger = logging.getLogger(constants.LOGGER_NAME)


def run_animation(screen, particle_system: ParticleSystem, frame_delay: float,
                  mode: ShadeMode = ShadeMode.PLAIN, sleep=time.sleep, max_frames=None) -> int:
    """
    The frame loop.

    Polls input, handles resizes, draws one frame of the particle system and
    sleeps a fixed delay. Runs until a quit key is read (or max_frames frames
    have been drawn) and returns the number of frames drawn.

    - Inputs:
        - screen: A TerminalScreen or any object with the same methods.
        - particle_system (ParticleSystem): Sized for the screen at start.
        - frame_delay (float): Seconds slept after each frame.
        - mode (ShadeMode): Initial shading mode.
        - sleep (callable): Injected for tests.
        - max_frames (int | None): Stop after this many frames.
    """
    cols, rows = screen.size()
    if (cols, rows) != particle_system.bounds:
        particle_system.resize((cols, rows))

    frame = 0
    while max_frames is None or frame < max_frames:
        # --- Input ---
        key = screen.poll_key()
        if key in constants.QUIT_KEYS:
            logger.info(f"Quit requested after {frame} frames.")
            break
        if key in constants.TOGGLE_KEYS:
            mode = mode.toggled()
            logger.info(f"Shading mode switched to {mode.value}.")

        # --- Resize ---
        new_size = screen.size()
        if new_size != (cols, rows):
            cols, rows = new_size
            screen.clear()
            particle_system.resize(new_size)

        # --- Drawing ---
        screen.erase()
        for command in particle_system.step(mode, screen.palette):
            screen.draw(command)
        screen.refresh()

        # --- Logging (throttled) ---
        if frame % constants.STATS_LOG_INTERVAL == 0:
            logger.debug(
                f"Frame={frame}, "
                f"Mode={mode.value}, "
                f"Drawn={particle_system.drawn_last_step}, "
                f"Respawned={particle_system.respawns_last_step}"
            )

        frame += 1
        sleep(frame_delay)

    return frame


def _curses_main(stdscr, config: dict, rng: np.random.Generator,
                 mode: ShadeMode = ShadeMode.PLAIN) -> int:
    """Runs inside curses.wrapper, which restores the terminal on exit."""
    sim_config = config['simulation']
    screen = TerminalScreen(stdscr)

    try:
        particle_system = ParticleSystem.for_terminal(sim_config, rng, screen.size())
    except MemoryError:
        logger.critical("Could not allocate the particle arena.")
        return 1

    run_animation(
        screen,
        particle_system,
        sim_config.get('frame_delay', constants.DEFAULT_FRAME_DELAY),
        mode,
    )
    return 0


def main(argv=None) -> int:
    """
    Main function to initialize and run the swirl animation.
    Keys: q quits, r toggles black-hole shading.
    """
    parser = argparse.ArgumentParser(description="Matrix-exponential particle swirl for the terminal.")
    parser.add_argument("--config", default="config.json", help="Path to the JSON config file.")
    args = parser.parse_args(argv)

    # --- Setup ---
    config = logger_setup.load_config(args.config)
    logger_setup.setup_logging(config)

    logger.info(f"{constants.TITLE} starting...")
    if not os.path.exists(args.config):
        logger.warning(f"Config file {args.config} not found; using built-in defaults.")
    logger.info(f"Loaded configuration: {config}")

    start_mode = config['simulation'].get('start_mode', ShadeMode.PLAIN.value)
    try:
        mode = ShadeMode(start_mode)
    except ValueError:
        valid = ", ".join(m.value for m in ShadeMode)
        logger.critical(f"Unknown start_mode {start_mode!r} in {args.config}; expected one of: {valid}.")
        return 1

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    try:
        exit_code = curses.wrapper(_curses_main, config, rng, mode)
    except KeyboardInterrupt:
        exit_code = 0

    logger.info(f"{constants.TITLE} shutting down (exit code {exit_code}).")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
