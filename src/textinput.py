"""Popup for typing package names by hand (curses).

Usage:
    from textinput import NamePrompt

    NamePrompt(session.manual_packages).run(display)

Each line typed is checked with validate_name() and appended to the list
passed in. Typing ':q' closes the popup, ':c' empties the list and closes it.
The popup also closes once MAX_NAMES names are collected; a full list only
accepts ':q', ':c' or Escape.
"""
from __future__ import annotations

import curses
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

MAX_NAMES = 20
MAX_NAME_LENGTH = 49
QUIT = ':q'
CLEAR = ':c'

WIN_HEIGHT = 20
WIN_WIDTH = 60
INPUT_X = 7
FIRST_INPUT_ROW = 5
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)
# smallest screen the popup still fits on
MIN_HEIGHT = FIRST_INPUT_ROW + 3
MIN_WIDTH = INPUT_X + 4


class NameValidationError(ValueError):
    pass


def validate_name(text: str) -> str:
    name = text.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise NameValidationError(f"Name too long ({len(name)} > {MAX_NAME_LENGTH} characters)")
    if any(ch.isspace() for ch in name):
        raise NameValidationError("Name must not contain spaces")
    return name


class NamePrompt:
    def __init__(self, names: List[str], title: str = "Add custom programs for repo installation") -> None:
        self.names = names
        self.title = title
        self.message = ''

    def submit(self, text: str) -> bool:
        """Handle one entered line; return True when the prompt should close."""
        self.message = ''
        if text.strip() == QUIT:
            return True
        if text.strip() == CLEAR:
            logger.info('Cleared %d manually added packages', len(self.names))
            self.names.clear()
            return True
        try:
            name = validate_name(text)
        except NameValidationError as e:
            self.message = str(e)
            return False
        if len(self.names) >= MAX_NAMES:
            self.message = f"List is full ({MAX_NAMES} names)"
            return False
        if name and name not in self.names:
            self.names.append(name)
            logger.info('Added package %s by hand', name)
        return len(self.names) >= MAX_NAMES

    def run(self, display) -> None:
        screen_h, screen_w = display.window.getmaxyx()
        if screen_h < MIN_HEIGHT or screen_w < MIN_WIDTH:
            logger.warning('Terminal too small for the name prompt (%dx%d)', screen_w, screen_h)
            return
        h = min(WIN_HEIGHT, screen_h)
        w = min(WIN_WIDTH, screen_w)
        y = max(0, (screen_h - h) // 2)
        x = max(0, (screen_w - w) // 2)

        shadow = display.new_window(h, w, min(y + 1, screen_h - h), min(x + 2, screen_w - w))
        shadow.bkgd(' ', display.attr('shadow'))
        shadow.refresh()

        win = display.new_window(h, w, y, x)
        win.bkgd(' ', display.attr('submenu_1'))
        error_attr = display.attr('error') | curses.A_BOLD
        if len(self.names) >= MAX_NAMES:
            self.message = f"List is full ({MAX_NAMES} names)"

        display.set_cursor(True)
        try:
            while True:
                self._draw(win, h, w, error_attr)
                text = self.read_line(win, self._input_row(h), w)
                if text is None or self.submit(text):
                    return
        finally:
            display.set_cursor(False)

    def _input_row(self, h: int) -> int:
        row = FIRST_INPUT_ROW + 2 * (len(self.names) % max(1, (h - 3 - FIRST_INPUT_ROW) // 2))
        return min(row, h - 3)

    def _draw(self, win, h: int, w: int, error_attr: int = curses.A_REVERSE) -> None:
        win.erase()
        win.box()
        win.addnstr(1, 2, f"{self.title} (max {MAX_NAMES})", w - 4, curses.A_BOLD)
        win.addnstr(2, 2, f"Enter program name ('{QUIT}' = quit, '{CLEAR}' = clear list):", w - 4, curses.A_BOLD)
        if self.message:
            win.addnstr(3, 2, self.message, w - 4, error_attr)
        row = self._input_row(h)
        win.hline(row, 2, ord('_'), w - 4)
        win.addnstr(row, 2, f"[{len(self.names) + 1}]  ", w - 4, curses.A_BOLD)
        win.addnstr(h - 2, 2, f"Added: {len(self.names)}", w - 4)
        win.refresh()

    def read_line(self, win, row: int, w: int) -> Optional[str]:
        """Collect keys until Enter. Escape abandons the prompt (None)."""
        buf: List[str] = []
        while True:
            key = win.getch()
            if key in (curses.KEY_ENTER, 10, 13):
                return ''.join(buf)
            if key == 27:
                return None
            if key in BACKSPACE_KEYS:
                if buf:
                    buf.pop()
            elif 32 <= key < 127:
                buf.append(chr(key))
            else:
                continue
            # show the tail of the buffer when it outgrows the field
            field = w - INPUT_X - 2
            if field > 0:
                shown = ''.join(buf)[-field:]
                win.addnstr(row, INPUT_X, shown.ljust(field, '_'), field)
                win.refresh()
