import io
import subprocess

import pytest

from batch import (
    ACK_PROMPT,
    BatchExecutor,
    CommandBatch,
    ExitStatusError,
    FailurePolicy,
    SpawnError,
    SubprocessRunner,
    build_command,
)
from conftest import FakeDisplay, RecordingRunner
from selection import SelectionSet


def _executor(display, runner, **kwargs):
    acks = []
    kwargs.setdefault("out", io.StringIO())
    kwargs.setdefault("err", io.StringIO())
    executor = BatchExecutor(display, runner, acknowledge=lambda: acks.append(True), **kwargs)
    return executor, acks


def test_build_command_with_empty_selection_is_just_prefix():
    assert build_command(["flatpak", "install"], SelectionSet()) == ("flatpak", "install")


def test_build_command_appends_sorted_selection_then_list_order():
    argv = build_command(["apt", "install"], SelectionSet({"git", "curl"}), ["zz", "aa"])
    assert argv == ("apt", "install", "curl", "git", "zz", "aa")


def test_build_command_needs_a_program():
    with pytest.raises(ValueError):
        build_command([], ["git"])


def test_batch_rejects_empty_command():
    with pytest.raises(ValueError):
        CommandBatch.of("broken", [["true"], []])


def test_failures_do_not_abort_batch():
    display = FakeDisplay()
    runner = RecordingRunner({"false": 1}, display=display)
    executor, acks = _executor(display, runner)

    report = executor.execute(CommandBatch.of("t", [["true"], ["false"], ["true"]]))

    assert len(runner.calls) == 3
    assert len(report.attempted) == 3
    assert [type(f) for f in report.failures] == [ExitStatusError]
    assert report.failures[0].returncode == 1
    assert acks == [True]
    assert "Command false failed with return code 1" in executor.err.getvalue()


def test_spawn_error_is_reported_and_batch_continues():
    display = FakeDisplay()
    runner = RecordingRunner({"nope": SpawnError(["nope"], "nope: No such file or directory")})
    executor, _ = _executor(display, runner)

    report = executor.execute(CommandBatch.of("t", [["nope", "-x"], ["true"]]))

    assert runner.calls == [("nope", "-x"), ("true",)]
    assert isinstance(report.failures[0], SpawnError)
    assert "No such file or directory" in executor.err.getvalue()
    assert report.summary() == "2 commands, 1 failed"


def test_suspend_wraps_every_command_and_the_acknowledgement():
    display = FakeDisplay()
    runner = RecordingRunner(display=display)
    executor = BatchExecutor(display, runner, out=io.StringIO(), err=io.StringIO(),
                             acknowledge=lambda: display.events.append("ack"))

    executor.execute(CommandBatch.of("t", [["a"], ["b"]]))

    assert display.events == ["suspend", "run a", "run b", "ack", "resume"]


def test_resume_even_when_acknowledgement_fails():
    display = FakeDisplay()

    def interrupted():
        raise KeyboardInterrupt

    executor = BatchExecutor(display, RecordingRunner(), out=io.StringIO(), acknowledge=interrupted)
    with pytest.raises(KeyboardInterrupt):
        executor.execute(CommandBatch.of("t", [["a"]]))
    assert display.events == ["suspend", "resume"]


def test_notes_summary_and_prompt_printed():
    display = FakeDisplay()
    executor, _ = _executor(display, RecordingRunner())
    executor.execute(CommandBatch.of("t", [["a"]], notes=["hello"]))
    out = executor.out.getvalue()
    assert out.startswith("hello\n")
    assert "1 commands, 0 failed" in out
    assert out.endswith(ACK_PROMPT)


def test_stop_policy_skips_rest_after_first_failure():
    display = FakeDisplay()
    runner = RecordingRunner({"false": 2})
    executor, acks = _executor(display, runner, policy=FailurePolicy.STOP)

    report = executor.execute(CommandBatch.of("t", [["true"], ["false"], ["true"], ["echo"]]))

    assert runner.calls == [("true",), ("false",)]
    assert report.skipped == [("true",), ("echo",)]
    assert acks == [True]
    assert not report.ok


@pytest.mark.parametrize("value,expected", [
    ("stop", FailurePolicy.STOP),
    (" STOP ", FailurePolicy.STOP),
    ("continue", FailurePolicy.CONTINUE),
    ("bogus", FailurePolicy.CONTINUE),
    (None, FailurePolicy.CONTINUE),
])
def test_failure_policy_parse(value, expected):
    assert FailurePolicy.parse(value) is expected


def test_subprocess_runner_returns_exit_status(monkeypatch):
    seen = []

    def fake_run(argv):
        seen.append(argv)
        return subprocess.CompletedProcess(argv, 3)

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert SubprocessRunner().run(("false",)) == 3
    assert seen == [["false"]]


def test_subprocess_runner_wraps_oserror(monkeypatch):
    def fake_run(argv):
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(SpawnError) as excinfo:
        SubprocessRunner().run(["missing-tool", "--flag"])
    assert excinfo.value.argv == ("missing-tool", "--flag")
    assert "No such file or directory" in str(excinfo.value)
