import curses
import locale
import logging
import os
import sys
import time
from typing import Dict

from .app import App
from .render import DIM, PIXEL, PRIMARY, Frame, palette_for

logger = logging.getLogger("pomoclock.ui")

PAIR_PRIMARY = 1
PAIR_DIM = 2
MIN_POLL_MS = 10


class Painter:
    """Maps frame styles to curses attributes for the current theme."""

    def __init__(self) -> None:
        self.colors = False
        self.ascii_only = False
        self.theme = ""
        self.attrs: Dict[str, int] = {}

    def setup(self) -> None:
        try:
            curses.start_color()
            curses.use_default_colors()
            self.colors = curses.has_colors()
        except curses.error:
            self.colors = False
        encoding = locale.getpreferredencoding(False)
        try:
            PIXEL.encode(encoding)
        except (LookupError, UnicodeEncodeError):
            self.ascii_only = True

    def use_theme(self, theme: str) -> None:
        if theme == self.theme:
            return
        self.theme = theme
        self.attrs = {}
        if not self.colors:
            self.attrs[DIM] = curses.A_DIM
            return
        palette = palette_for(theme)
        if curses.COLORS >= 256:
            primary, dim = palette.primary, palette.dim
            dim_attr = 0
        else:
            primary = dim = palette.basic
            dim_attr = curses.A_DIM
        try:
            curses.init_pair(PAIR_PRIMARY, primary, -1)
            curses.init_pair(PAIR_DIM, dim, -1)
        except curses.error as exc:
            logger.debug("init_pair failed for theme %s: %s", theme, exc)
            self.attrs[DIM] = curses.A_DIM
            return
        self.attrs[PRIMARY] = curses.color_pair(PAIR_PRIMARY) | curses.A_BOLD
        self.attrs[DIM] = curses.color_pair(PAIR_DIM) | dim_attr

    def paint(self, stdscr, frame: Frame) -> None:
        self.use_theme(frame.theme)
        stdscr.erase()
        for span in frame.spans:
            text = span.text.replace("\u2588", "#") if self.ascii_only else span.text
            try:
                stdscr.addstr(span.y, span.x, text, self.attrs.get(span.style, 0))
            except curses.error:
                # writing the bottom-right cell raises after a successful write
                pass
        stdscr.refresh()


def run(app: App) -> None:
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as exc:
        logger.warning("Cannot apply the environment locale: %s", exc)
    os.environ.setdefault("ESCDELAY", "25")
    stdscr = curses.initscr()
    try:
        sys.stdout.write("\x1b[?1049h")
        sys.stdout.flush()
        curses.noecho()
        curses.cbreak()
        stdscr.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass

        painter = Painter()
        painter.setup()
        logger.info("Terminal ready: colors=%s ascii_only=%s", painter.colors, painter.ascii_only)
        _loop(stdscr, app, painter)
    finally:
        stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
        sys.stdout.write("\x1b[?1049l")
        sys.stdout.flush()


def _loop(stdscr, app: App, painter: Painter) -> None:
    app.tick(time.monotonic())
    while True:
        rows, cols = stdscr.getmaxyx()
        painter.paint(stdscr, app.frame(rows, cols))
        if app.take_bell():
            curses.beep()

        timeout_ms = max(MIN_POLL_MS, int(app.poll_timeout(time.monotonic()) * 1000))
        stdscr.timeout(timeout_ms)
        ch = stdscr.getch()
        if ch != -1 and not app.handle_key(ch):
            break
        app.tick(time.monotonic())
