# terminal.py

"""
Thin curses layer.

Everything that touches the terminal lives here so the frame loop can be
driven by any object with the same methods (see tests/conftest.py).
"""

import curses
import logging

import constants
from shading import Palette

logger = logging.getLogger(constants.LOGGER_NAME)


def setup_colors():
    """
    Registers the plain and black-hole color pairs.

    Returns the Palette for black-hole shading, or None if the terminal has no
    color support.
    """
    if not curses.has_colors():
        logger.info("Terminal has no color support; drawing without attributes.")
        return None

    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        logger.info("Terminal has no default colors; using a black background.")
        background = curses.COLOR_BLACK
    curses.init_pair(constants.PLAIN_PAIR, curses.COLOR_GREEN, background)

    if curses.COLORS >= 256:
        base, colors = constants.BH_PAIR_BASE_256, constants.BH_COLORS_256
    else:
        base, colors = constants.BH_PAIR_BASE_8, constants.BH_COLORS_8

    for i, color in enumerate(colors):
        curses.init_pair(base + i, color, curses.COLOR_BLACK)

    logger.info(f"Registered {len(colors)} black-hole color pairs from pair {base} ({curses.COLORS} colors).")
    return Palette(base, len(colors))


def shade_attributes(shade) -> int:
    """Translates a Shade into a curses attribute mask."""
    if shade is None:
        return curses.A_NORMAL
    attr = curses.color_pair(shade.pair)
    if shade.bold:
        attr |= curses.A_BOLD
    if shade.dim:
        attr |= curses.A_DIM
    if shade.blink:
        attr |= curses.A_BLINK
    return attr


class TerminalScreen:
    """
    Wraps the curses standard screen.

    - Inputs: stdscr (curses.window) as passed by curses.wrapper.
    - Side Effects: Switches to non-blocking input, hides the cursor and
      registers color pairs.
    """
    def __init__(self, stdscr):
        self.stdscr = stdscr
        curses.noecho()
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor.")
        stdscr.keypad(True)
        stdscr.nodelay(True)
        stdscr.timeout(0)
        self.palette = setup_colors()

    def size(self) -> tuple:
        """(cols, rows) of the terminal."""
        rows, cols = self.stdscr.getmaxyx()
        return cols, rows

    def poll_key(self) -> int:
        """Non-blocking read; -1 when no key is pending."""
        try:
            return self.stdscr.getch()
        except curses.error:
            return -1

    def clear(self):
        self.stdscr.clear()

    def erase(self):
        self.stdscr.erase()

    def draw(self, command):
        try:
            self.stdscr.addch(command.y, command.x, command.glyph, shade_attributes(command.shade))
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen
            pass

    def refresh(self):
        self.stdscr.refresh()
