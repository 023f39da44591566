"""Main menu state machine (curses).

Usage:
    from menu import Menu, MenuItem, MenuNavigator

    menu = Menu([MenuItem('Install fonts', 'fonts'), MenuItem('Exit', 'exit')])
    nav = MenuNavigator(menu, dispatch, banner=['LinuxBasix'])
    nav.run(display)

`dispatch(action)` is called synchronously for the highlighted entry when
Enter is pressed; returning a truthy value ends the menu.

Controls:
    Up/Down - move (wraps around)
    Enter   - run the highlighted entry
    q / ESC - exit
"""
from __future__ import annotations

import curses
import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple

logger = logging.getLogger(__name__)

ESCAPE = 27


@dataclass(frozen=True)
class MenuItem:
    label: str
    action: str


class Menu:
    def __init__(self, items: Sequence[MenuItem]) -> None:
        if not items:
            raise ValueError('a menu needs at least one item')
        self.items: Tuple[MenuItem, ...] = tuple(items)
        self.highlight = 0

    def up(self) -> None:
        self.highlight = self.highlight - 1 if self.highlight > 0 else len(self.items) - 1

    def down(self) -> None:
        self.highlight = self.highlight + 1 if self.highlight < len(self.items) - 1 else 0

    @property
    def current(self) -> MenuItem:
        return self.items[self.highlight]

    def __len__(self) -> int:
        return len(self.items)


class MenuState(enum.Enum):
    DISPLAYING = 'displaying'
    AWAITING_INPUT = 'awaiting_input'
    DISPATCHING = 'dispatching'
    EXITING = 'exiting'


def item_letter(index: int) -> str:
    return chr(ord('A') + index) if index < 26 else '?'


class MenuNavigator:
    def __init__(self, menu: Menu, dispatch: Callable[[str], Any],
                 banner: Sequence[str] = (), heading: str = 'MAIN MENU',
                 info: Callable[[], List[str]] = list) -> None:
        self.menu = menu
        self.dispatch = dispatch
        self.banner = list(banner)
        self.heading = heading
        self.info = info
        self.state = MenuState.DISPLAYING

    def handle_key(self, key: int) -> MenuState:
        """Feed one key press to the state machine and return the new state."""
        if self.state is MenuState.EXITING:
            return self.state
        if key in (curses.KEY_UP, ord('k')):
            self.menu.up()
        elif key in (curses.KEY_DOWN, ord('j')):
            self.menu.down()
        elif key in (curses.KEY_ENTER, 10, 13):
            self.state = MenuState.DISPATCHING
            action = self.menu.current.action
            logger.info('Menu entry %r -> %s', self.menu.current.label, action)
            if self.dispatch(action):
                self.state = MenuState.EXITING
                return self.state
        elif key in (ESCAPE, ord('q'), ord('Q')):
            self.state = MenuState.EXITING
            return self.state
        self.state = MenuState.DISPLAYING
        return self.state

    def run(self, display) -> None:
        self.state = MenuState.DISPLAYING
        while self.state is not MenuState.EXITING:
            self.render(display)
            self.state = MenuState.AWAITING_INPUT
            self.handle_key(display.window.getch())
        logger.info('Leaving menu')

    def render(self, display) -> None:
        win = display.window
        win.bkgd(' ', display.attr('main'))
        win.erase()
        h, w = win.getmaxyx()

        def put(y: int, x: int, text: str, attr: int = 0) -> None:
            # rows that do not fit a small terminal are dropped
            if 0 <= y < h - 1 and x < w - 1:
                win.addnstr(y, x, text, w - x - 1, attr)

        for i, line in enumerate(self.banner):
            put(1 + i, 2, line, curses.A_BOLD)
        top = len(self.banner) + 2
        put(top, 2, self.heading, curses.A_BOLD)

        last = len(self.menu) - 1
        y = top
        for i, item in enumerate(self.menu.items):
            # the final entry (exit) sits one line apart from the rest
            y = top + 2 + i + (1 if i == last else 0)
            attr = curses.A_REVERSE if i == self.menu.highlight else curses.A_NORMAL
            put(y, 5, f"{item_letter(i)}.   {item.label}", attr)

        info = self.info()
        # bottom-aligned, but never over the entries
        first = max(h - 2 - len(info), y + 2)
        for i, line in enumerate(info):
            put(first + i, 2, line, curses.A_BOLD)

        win.refresh()
