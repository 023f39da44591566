"""Terminal display manager (curses).

Usage:
    from display import Display

    with Display() as display:
        win = display.window
        ...
        with display.suspended():
            subprocess.run(['sudo', 'apt-get', 'update'])

The manager owns the single process-wide curses mode: cbreak input, no echo,
keypad translation and a hidden cursor, plus the color pairs the screens draw
with. ``suspend()`` hands the terminal back to plain line-buffered I/O so child
processes can use it; ``resume()`` puts everything back the way ``acquire()``
left it.
"""
from __future__ import annotations

import contextlib
import curses
import logging
import signal
from typing import Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

# name -> (pair number, foreground, background)
COLOR_PAIRS: Dict[str, Tuple[int, int, int]] = {
    'main': (1, curses.COLOR_WHITE, curses.COLOR_BLUE),
    'submenu_1': (2, curses.COLOR_WHITE, curses.COLOR_RED),
    'shadow': (3, curses.COLOR_BLACK, curses.COLOR_BLACK),
    'submenu_2': (4, curses.COLOR_WHITE, curses.COLOR_MAGENTA),
    'submenu_3': (5, curses.COLOR_WHITE, curses.COLOR_GREEN),
    'error': (6, curses.COLOR_YELLOW, curses.COLOR_RED),
}


class DisplayInitError(RuntimeError):
    """The terminal could not be put into managed mode."""


def _raise_system_exit(signum, frame):
    raise SystemExit(128 + signum)


class Display:
    def __init__(self) -> None:
        self.window = None
        self.active = False
        self._colors = False
        self._previous_sigterm = None

    def acquire(self) -> None:
        if self.active:
            return
        try:
            self.window = curses.initscr()
            self._configure()
            self._colors = curses.has_colors()
            if self._colors:
                curses.start_color()
                for number, fg, bg in COLOR_PAIRS.values():
                    curses.init_pair(number, fg, bg)
        except curses.error as e:
            self._teardown()
            raise DisplayInitError(f'cannot initialise terminal: {e}') from e

        # Turn `kill <pid>` into SystemExit so __exit__ restores the terminal.
        try:
            self._previous_sigterm = signal.signal(signal.SIGTERM, _raise_system_exit)
        except ValueError:
            # not the main thread
            self._previous_sigterm = None
        self.active = True
        logger.debug('Display acquired (colors=%s)', self._colors)

    def release(self) -> None:
        if self.window is None:
            return
        self._teardown()
        if self._previous_sigterm is not None:
            signal.signal(signal.SIGTERM, self._previous_sigterm)
            self._previous_sigterm = None
        self.active = False
        logger.debug('Display released')

    def suspend(self) -> None:
        if not self.active:
            return
        self.window.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
        self.active = False
        logger.debug('Display suspended')

    def resume(self) -> None:
        if self.active or self.window is None:
            return
        self.window.refresh()
        self._configure()
        self.window.clear()
        self.active = True
        logger.debug('Display resumed')

    @contextlib.contextmanager
    def suspended(self) -> Iterator[None]:
        self.suspend()
        try:
            yield
        finally:
            self.resume()

    def attr(self, name: str) -> int:
        """Return the curses attribute for a registered color pair name."""
        if not self._colors or name not in COLOR_PAIRS:
            return curses.A_NORMAL
        return curses.color_pair(COLOR_PAIRS[name][0])

    def new_window(self, height: int, width: int, y: int, x: int):
        win = curses.newwin(height, width, y, x)
        win.keypad(True)
        return win

    def set_cursor(self, visible: bool) -> None:
        try:
            curses.curs_set(1 if visible else 0)
        except curses.error:
            # terminal without cursor visibility control
            pass

    def _configure(self) -> None:
        curses.noecho()
        curses.cbreak()
        self.window.keypad(True)
        self.window.nodelay(False)
        self.set_cursor(False)

    def _teardown(self) -> None:
        try:
            if self.window is not None:
                self.window.keypad(False)
            curses.nocbreak()
            curses.echo()
        except curses.error:
            # initscr() never completed
            pass
        try:
            curses.endwin()
        except curses.error:
            # already ended by suspend()
            pass

    def __enter__(self) -> 'Display':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.release()
        return None
