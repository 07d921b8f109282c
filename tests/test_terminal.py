import curses

import pytest

import constants
import terminal
from particle_system import DrawCommand
from shading import Palette, Shade, ShadeState


class FakeWindow:
    def __init__(self, rows=24, cols=80, keys=()):
        self.rows = rows
        self.cols = cols
        self.keys = list(keys)
        self.cells = {}
        self.calls = []

    def keypad(self, flag):
        self.calls.append(("keypad", flag))

    def nodelay(self, flag):
        self.calls.append(("nodelay", flag))

    def timeout(self, delay):
        self.calls.append(("timeout", delay))

    def getmaxyx(self):
        return self.rows, self.cols

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def addch(self, y, x, ch, attr):
        if (y, x) == (self.rows - 1, self.cols - 1):
            raise curses.error("addch() returned ERR")
        self.cells[(y, x)] = (ch, attr)

    def erase(self):
        self.cells.clear()

    def clear(self):
        self.cells.clear()

    def refresh(self):
        self.calls.append(("refresh",))


@pytest.fixture
def fake_curses(monkeypatch):
    """Replaces the curses calls that need a real terminal."""
    pairs = {}
    monkeypatch.setattr(terminal.curses, "noecho", lambda: None)
    monkeypatch.setattr(terminal.curses, "curs_set", lambda visibility: None)
    monkeypatch.setattr(terminal.curses, "has_colors", lambda: True)
    monkeypatch.setattr(terminal.curses, "start_color", lambda: None)
    monkeypatch.setattr(terminal.curses, "use_default_colors", lambda: None)
    monkeypatch.setattr(terminal.curses, "init_pair", lambda pair, fg, bg: pairs.__setitem__(pair, (fg, bg)))
    monkeypatch.setattr(terminal.curses, "color_pair", lambda pair: pair << 8)
    monkeypatch.setattr(terminal.curses, "COLORS", 256, raising=False)
    return pairs


def test_setup_colors_256(fake_curses):
    palette = terminal.setup_colors()
    assert palette == Palette(20, 9)
    assert fake_curses[constants.PLAIN_PAIR] == (curses.COLOR_GREEN, -1)
    assert fake_curses[28] == (231, curses.COLOR_BLACK)


def test_setup_colors_8(fake_curses, monkeypatch):
    monkeypatch.setattr(terminal.curses, "COLORS", 8)
    palette = terminal.setup_colors()
    assert palette == Palette(10, 7)
    assert fake_curses[16] == (curses.COLOR_WHITE, curses.COLOR_BLACK)


def test_setup_colors_without_default_background(fake_curses, monkeypatch):
    def refuse():
        raise curses.error("use_default_colors() returned ERR")

    monkeypatch.setattr(terminal.curses, "use_default_colors", refuse)
    palette = terminal.setup_colors()
    assert palette == Palette(20, 9)
    assert fake_curses[constants.PLAIN_PAIR] == (curses.COLOR_GREEN, curses.COLOR_BLACK)


def test_setup_colors_monochrome(fake_curses, monkeypatch):
    monkeypatch.setattr(terminal.curses, "has_colors", lambda: False)
    assert terminal.setup_colors() is None
    assert fake_curses == {}


def test_shade_attributes(fake_curses):
    assert terminal.shade_attributes(None) == curses.A_NORMAL
    shade = Shade(ShadeState.DISK_SPARKLE, 28, True, False, True, True)
    attr = terminal.shade_attributes(shade)
    assert attr & curses.A_BOLD
    assert attr & curses.A_BLINK
    assert not attr & curses.A_DIM
    assert attr & (28 << 8)


def test_screen_setup_and_io(fake_curses):
    window = FakeWindow(keys=[ord('r')])
    screen = terminal.TerminalScreen(window)

    assert ("nodelay", True) in window.calls
    assert ("timeout", 0) in window.calls
    assert screen.palette == Palette(20, 9)
    assert screen.size() == (80, 24)
    assert screen.poll_key() == ord('r')
    assert screen.poll_key() == -1


def test_screen_draw_ignores_bottom_right_error(fake_curses):
    window = FakeWindow()
    screen = terminal.TerminalScreen(window)
    screen.draw(DrawCommand(79, 23, 'x', None))
    screen.draw(DrawCommand(3, 4, 'y', None))
    screen.refresh()
    assert window.cells == {(4, 3): ('y', curses.A_NORMAL)}
