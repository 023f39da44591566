"""Stand-ins for curses windows, the display manager and the process runner."""

import contextlib
from typing import List, Sequence

import pytest

from batch import SpawnError


def keys(*items) -> List[int]:
    """Turn 'q', ' ', curses.KEY_UP ... into getch() codes."""
    out = []
    for item in items:
        if isinstance(item, str):
            out.extend(ord(ch) for ch in item)
        else:
            out.append(item)
    return out


class FakeWindow:
    def __init__(self, height: int = 24, width: int = 80, script: Sequence[int] = ()) -> None:
        self.height = height
        self.width = width
        self.script = list(script)
        self.writes: List[tuple] = []
        self.refreshes = 0

    def getch(self) -> int:
        if not self.script:
            raise AssertionError("screen asked for more keys than the test scripted")
        return self.script.pop(0)

    def getmaxyx(self):
        return self.height, self.width

    def addnstr(self, y, x, text, n, attr=0):
        assert 0 <= y < self.height, f"row {y} outside window"
        self.writes.append((y, x, text[:n], attr))

    def text(self) -> str:
        return "\n".join(w[2] for w in self.writes)

    def erase(self):
        self.writes.clear()

    clear = erase

    def box(self):
        pass

    def bkgd(self, ch, attr=0):
        pass

    def hline(self, y, x, ch, n):
        pass

    def keypad(self, flag):
        pass

    def nodelay(self, flag):
        pass

    def refresh(self):
        self.refreshes += 1


class FakeDisplay:
    """Display manager double; popups share the main window's key script."""

    def __init__(self, height: int = 24, width: int = 80, script: Sequence[int] = ()) -> None:
        self.window = FakeWindow(height, width, script)
        self.events: List[str] = []
        self.popups: List[FakeWindow] = []
        self.cursor_visible = False

    def feed(self, *items) -> None:
        self.window.script.extend(keys(*items))

    def new_window(self, height, width, y, x):
        assert height <= self.window.height and width <= self.window.width
        popup = FakeWindow(height, width)
        # read from the same queue as the main window
        popup.script = self.window.script
        self.popups.append(popup)
        return popup

    def attr(self, name):
        return 0

    def set_cursor(self, visible):
        self.cursor_visible = visible

    def suspend(self):
        self.events.append("suspend")

    def resume(self):
        self.events.append("resume")

    @contextlib.contextmanager
    def suspended(self):
        self.suspend()
        try:
            yield
        finally:
            self.resume()

    def __enter__(self):
        self.events.append("acquire")
        return self

    def __exit__(self, *exc):
        self.events.append("release")


class RecordingRunner:
    """ProcessRunner that records argv and answers from a table.

    ``results`` maps program name to an exit code, or to an exception
    instance to raise.
    """

    def __init__(self, results=None, display=None) -> None:
        self.results = results or {}
        self.display = display
        self.calls: List[tuple] = []

    def run(self, argv):
        if self.display is not None:
            self.display.events.append("run " + argv[0])
        self.calls.append(tuple(argv))
        result = self.results.get(argv[0], 0)
        if isinstance(result, SpawnError):
            raise result
        return result


class FakeProbe:
    def __init__(self, kernel="6.1.0-test", managers=("apt", "snap")) -> None:
        self.kernel = kernel
        self.managers = list(managers)

    def kernel_version(self):
        return self.kernel

    def package_managers(self):
        return list(self.managers)


@pytest.fixture
def display():
    return FakeDisplay()


@pytest.fixture
def runner():
    return RecordingRunner()

