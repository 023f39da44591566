import curses
import signal

import pytest

import display as display_mod
from conftest import FakeWindow
from display import COLOR_PAIRS, Display, DisplayInitError


@pytest.fixture
def fake_curses(monkeypatch):
    """Replace the curses calls Display makes with a call log."""
    calls = []
    screen = FakeWindow()

    def record(name, result=None):
        def fn(*args):
            calls.append((name,) + args)
            return result
        return fn

    monkeypatch.setattr(curses, "initscr", record("initscr", screen))
    for name in ("noecho", "cbreak", "nocbreak", "echo", "endwin", "start_color", "init_pair", "curs_set"):
        monkeypatch.setattr(curses, name, record(name))
    monkeypatch.setattr(curses, "has_colors", record("has_colors", True))
    monkeypatch.setattr(curses, "color_pair", lambda n: n << 8)
    monkeypatch.setattr(curses, "newwin", lambda *a: FakeWindow(a[0], a[1]))
    return calls


def _names(calls):
    return [c[0] for c in calls]


def test_acquire_configures_terminal_and_colors(fake_curses):
    d = Display()
    d.acquire()
    try:
        names = _names(fake_curses)
        assert names[:3] == ["initscr", "noecho", "cbreak"]
        assert names.count("init_pair") == len(COLOR_PAIRS)
        assert ("curs_set", 0) in fake_curses
        assert d.active
        assert d.attr("main") == 1 << 8
        assert d.attr("unknown") == curses.A_NORMAL
    finally:
        d.release()


def test_acquire_failure_is_display_init_error(monkeypatch):
    def broken():
        raise curses.error("setupterm: could not find terminal")

    monkeypatch.setattr(curses, "initscr", broken)
    d = Display()
    with pytest.raises(DisplayInitError):
        d.acquire()
    assert not d.active


def test_suspend_and_resume_toggle_mode(fake_curses):
    with Display() as d:
        fake_curses.clear()
        with d.suspended():
            assert not d.active
            assert _names(fake_curses) == ["nocbreak", "echo", "endwin"]
            fake_curses.clear()
        assert d.active
        assert _names(fake_curses)[:2] == ["noecho", "cbreak"]


def test_resume_runs_after_exception_in_suspended_block(fake_curses):
    with Display() as d:
        with pytest.raises(RuntimeError):
            with d.suspended():
                raise RuntimeError("child blew up")
        assert d.active


def test_context_manager_restores_terminal_on_error(fake_curses):
    with pytest.raises(ValueError):
        with Display():
            raise ValueError
    assert _names(fake_curses)[-1] == "endwin"


def test_sigterm_handler_installed_and_restored(fake_curses):
    before = signal.getsignal(signal.SIGTERM)
    with Display():
        assert signal.getsignal(signal.SIGTERM) is display_mod._raise_system_exit
    assert signal.getsignal(signal.SIGTERM) is before


def test_sigterm_becomes_system_exit():
    with pytest.raises(SystemExit) as excinfo:
        display_mod._raise_system_exit(signal.SIGTERM, None)
    assert excinfo.value.code == 128 + signal.SIGTERM
