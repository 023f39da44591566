"""Scrollable checklist popup (curses).

Usage:
    from multiselect import MultiSelect

    chosen = store['repo']
    ms = MultiSelect(sorted(candidates), chosen, title='Select packages:')
    ms.run(display)
    # `chosen` now holds whatever the user ticked

API:
    MultiSelect(candidates, selection, title:str, color:str)
    run(display) -> None

    The selection set passed in is the only output: Space toggles membership
    straight away, so anyone holding the same set sees the change before
    run() returns.

Controls:
    Up/Down   - move (stops at the first/last entry)
    Space     - toggle selection on focused item
    Enter / q - finish
"""
from __future__ import annotations

import curses
import logging
from dataclasses import dataclass
from typing import List, Sequence

from selection import SelectionSet

logger = logging.getLogger(__name__)

MIN_WIDTH = 50
# below this the popup is not drawn at all
MIN_SCREEN = (5, 10)
FOOTER = 'Space: select/unselect, Enter: confirm, q: quit'


@dataclass
class Viewport:
    """Window of ``height`` rows starting at ``offset`` over a longer list."""

    height: int
    offset: int = 0

    def follow(self, highlight: int) -> None:
        # scroll by the minimum amount that brings `highlight` back into view
        if highlight < self.offset:
            self.offset = highlight
        elif highlight >= self.offset + self.height:
            self.offset = highlight - self.height + 1

    def rows(self, count: int) -> range:
        return range(self.offset, min(count, self.offset + self.height))


def popup_geometry(candidates: Sequence[str], screen_h: int, screen_w: int):
    """Return (height, width, y, x) of the centered checklist popup."""
    height = min(len(candidates) + 6, screen_h - 2)
    if candidates:
        longest = max(len(c) for c in candidates)
        width = min(max(longest + 10, MIN_WIDTH), screen_w - 2)
    else:
        width = min(MIN_WIDTH, screen_w - 2)
    height = min(max(height, MIN_SCREEN[0]), screen_h)
    width = min(max(width, MIN_SCREEN[1]), screen_w)
    return height, width, max(0, (screen_h - height) // 2), max(0, (screen_w - width) // 2)


class MultiSelect:
    def __init__(self, candidates: Sequence[str], selection: SelectionSet,
                 title: str = "Select", color: str = 'submenu_1') -> None:
        self.candidates: List[str] = list(candidates)
        self.selection = selection
        self.title = title
        self.color = color

        # UI state
        self.current = 0
        self.viewport = Viewport(height=1)

    def move(self, delta: int) -> None:
        if not self.candidates:
            return
        self.current = max(0, min(len(self.candidates) - 1, self.current + delta))
        self.viewport.follow(self.current)

    def toggle_current(self) -> None:
        if not self.candidates:
            return
        name = self.candidates[self.current]
        selected = self.selection.toggle(name)
        logger.debug('%s %s', 'selected' if selected else 'unselected', name)

    def handle_key(self, key: int) -> bool:
        """Apply one key press; return True when the user is done."""
        if key in (curses.KEY_UP, ord('k')):
            self.move(-1)
        elif key in (curses.KEY_DOWN, ord('j')):
            self.move(1)
        elif key == ord(' '):
            self.toggle_current()
        elif key in (curses.KEY_ENTER, 10, 13, ord('q')):
            return True
        return False

    def run(self, display) -> None:
        screen_h, screen_w = display.window.getmaxyx()
        if screen_h < MIN_SCREEN[0] or screen_w < MIN_SCREEN[1]:
            logger.warning('Terminal too small for the checklist (%dx%d)', screen_w, screen_h)
            return
        h, w, y, x = popup_geometry(self.candidates, screen_h, screen_w)
        self.viewport = Viewport(height=max(1, h - 4))

        shadow = display.new_window(h, w, min(y + 1, screen_h - h), min(x + 2, screen_w - w))
        shadow.bkgd(' ', display.attr('shadow'))
        shadow.refresh()

        win = display.new_window(h, w, y, x)
        win.bkgd(' ', display.attr(self.color))

        while True:
            self._draw(win, h, w)
            if self.handle_key(win.getch()):
                return

    def _draw(self, win, h: int, w: int) -> None:
        win.erase()
        win.box()
        win.addnstr(1, 1, self.title, w - 2, curses.A_BOLD)

        if not self.candidates:
            win.addnstr(3, 2, "(no items)", w - 4)

        for idx in self.viewport.rows(len(self.candidates)):
            name = self.candidates[idx]
            marker = '[+]' if name in self.selection else '[ ]'
            line = f"{marker} {name}".ljust(w - 4)
            row = 3 + (idx - self.viewport.offset)
            if idx == self.current:
                win.addnstr(row, 2, line, w - 4, curses.A_REVERSE)
            else:
                win.addnstr(row, 2, line, w - 4)

        win.addnstr(h - 1, 1, FOOTER, w - 2)
        win.refresh()
