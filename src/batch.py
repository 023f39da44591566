"""Sequential command batches run outside of curses.

A batch is an ordered tuple of argv tuples. The executor hands the terminal
back to the shell, runs every command in order while the child owns the
terminal, reports failures as plain lines on stderr, waits for the user to
press Enter and then takes the terminal back.
"""
from __future__ import annotations

import enum
import logging
import shlex
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Protocol, Sequence, TextIO, Tuple

logger = logging.getLogger(__name__)

Command = Tuple[str, ...]

ACK_PROMPT = "Press Enter to return to the main menu..."


class CommandError(Exception):
    def __init__(self, argv: Sequence[str], message: str) -> None:
        super().__init__(message)
        self.argv: Command = tuple(argv)


class SpawnError(CommandError):
    """The child process could not be created."""


class ExitStatusError(CommandError):
    def __init__(self, argv: Sequence[str], returncode: int) -> None:
        super().__init__(argv, f"Command {argv[0]} failed with return code {returncode}")
        self.returncode = returncode


class FailurePolicy(enum.Enum):
    CONTINUE = 'continue'
    STOP = 'stop'

    @classmethod
    def parse(cls, value: Optional[str]) -> 'FailurePolicy':
        try:
            return cls((value or '').strip().lower())
        except ValueError:
            return cls.CONTINUE


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def build_command(prefix: Sequence[str], *sources: Iterable[str]) -> Command:
    """Fixed prefix tokens followed by the members of each source.

    Selection sets iterate in sorted order; plain lists keep their own order.
    Empty sources add nothing.
    """
    argv = list(prefix)
    if not argv:
        raise ValueError('a command needs at least a program name')
    for source in sources:
        argv.extend(name for name in source if name)
    return tuple(argv)


@dataclass(frozen=True)
class CommandBatch:
    title: str
    commands: Tuple[Command, ...]
    notes: Tuple[str, ...] = ()

    @classmethod
    def of(cls, title: str, commands: Iterable[Sequence[str]],
           notes: Iterable[str] = ()) -> 'CommandBatch':
        frozen = tuple(tuple(c) for c in commands)
        for argv in frozen:
            if not argv:
                raise ValueError(f'empty command in batch {title!r}')
        return cls(title=title, commands=frozen, notes=tuple(notes))


@dataclass
class BatchReport:
    title: str
    attempted: List[Command] = field(default_factory=list)
    failures: List[CommandError] = field(default_factory=list)
    skipped: List[Command] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        text = f"{len(self.attempted)} commands, {len(self.failures)} failed"
        if self.skipped:
            text += f", {len(self.skipped)} skipped"
        return text


class ProcessRunner(Protocol):
    def run(self, argv: Sequence[str]) -> int: ...


class SubprocessRunner:
    """Run a child that inherits our terminal and wait for it."""

    def run(self, argv: Sequence[str]) -> int:
        argv_list = list(argv)
        logger.info("CMD %s", fmt_argv(argv_list))
        try:
            p = subprocess.run(argv_list)
        except OSError as e:
            raise SpawnError(argv_list, f"{argv_list[0]}: {e.strerror or e}") from e
        logger.debug("EXIT %s -> %s", argv_list[0], p.returncode)
        return p.returncode


def read_line() -> None:
    try:
        input()
    except EOFError:
        pass


class BatchExecutor:
    def __init__(self, display, runner: ProcessRunner,
                 policy: FailurePolicy = FailurePolicy.CONTINUE,
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None,
                 acknowledge: Callable[[], None] = read_line) -> None:
        self.display = display
        self.runner = runner
        self.policy = policy
        self.out = out
        self.err = err
        self.acknowledge = acknowledge

    def execute(self, batch: CommandBatch) -> BatchReport:
        out = self.out or sys.stdout
        logger.info("Batch %r: %d commands", batch.title, len(batch.commands))
        with self.display.suspended():
            report = self._run(batch, out)
            print(report.summary(), file=out)
            print(ACK_PROMPT, end='', file=out, flush=True)
            self.acknowledge()
        logger.info("Batch %r finished: %s", batch.title, report.summary())
        return report

    def _run(self, batch: CommandBatch, out: TextIO) -> BatchReport:
        err = self.err or sys.stderr
        report = BatchReport(title=batch.title)
        for note in batch.notes:
            print(note, file=out)
        for i, argv in enumerate(batch.commands):
            if report.failures and self.policy is FailurePolicy.STOP:
                report.skipped.extend(batch.commands[i:])
                break
            report.attempted.append(argv)
            try:
                code = self.runner.run(argv)
            except SpawnError as e:
                failure: CommandError = e
            else:
                if code == 0:
                    continue
                failure = ExitStatusError(argv, code)
            report.failures.append(failure)
            logger.warning("%s (%s)", failure, fmt_argv(argv))
            print(str(failure), file=err, flush=True)
        return report
