import sys
import logging
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import catalog
from batch import BatchExecutor, BatchReport, CommandBatch, FailurePolicy, ProcessRunner, SubprocessRunner, build_command
from display import Display, DisplayInitError
from helper import EnvironmentProbe, SystemProbe, append_lines, get_log_file, home_path, join_names
from logging_utils import configure_logging
from menu import Menu, MenuNavigator
from multiselect import MultiSelect
from selection import SelectionStore
from textinput import NamePrompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    log_path: Path
    editor: str = 'vim'
    failure_policy: FailurePolicy = FailurePolicy.CONTINUE

    @classmethod
    def from_env(cls) -> 'Settings':
        log = os.environ.get('LINUXBASIX_LOG')
        return cls(
            log_path=Path(log).expanduser() if log else get_log_file(),
            editor=os.environ.get('EDITOR') or 'vim',
            failure_policy=FailurePolicy.parse(os.environ.get('LINUXBASIX_FAILURE_POLICY')),
        )


@dataclass
class Session:
    """Everything the screens share for the lifetime of the process."""

    selections: SelectionStore
    manual_packages: List[str] = field(default_factory=list)
    kernel: str = 'Unknown'
    package_managers: List[str] = field(default_factory=list)

    @classmethod
    def start(cls, probe: EnvironmentProbe) -> 'Session':
        store = SelectionStore()
        # both catalogs start fully ticked
        store.create('repo', catalog.REPO_PACKAGES)
        store.create('flatpak', catalog.FLATPAK_PACKAGES)
        store.create('package_manager')
        return cls(
            selections=store,
            kernel=probe.kernel_version(),
            package_managers=probe.package_managers(),
        )


def repo_install_batch(session: Session) -> CommandBatch:
    return CommandBatch.of("Install original repo packages", [
        ["clear"],
        catalog.APT_UPDATE,
        build_command(catalog.APT_INSTALL, session.selections['repo'], session.manual_packages),
        catalog.FLATHUB_REMOTE,
    ])


def flatpak_install_batch(session: Session) -> CommandBatch:
    return CommandBatch.of("Install Flatpak packages", [
        ["clear"],
        build_command(catalog.FLATPAK_INSTALL, session.selections['flatpak']),
    ])


def startup_items_batch(editor: str) -> CommandBatch:
    bashrc = home_path('.bashrc')
    if append_lines(bashrc, catalog.BASHRC_LINES):
        note = "Lines added to .bashrc successfully."
    else:
        note = f"Unable to open {bashrc} for appending"
    try:
        argv = shlex.split(editor)
    except ValueError:
        # unbalanced quotes: hand the value over untouched
        argv = [editor]
    return CommandBatch.of("Add startup items", [build_command(argv or ['vim'], [str(bashrc)])], notes=[note])


def gtk_padding_batch() -> CommandBatch:
    notes = []
    for parts in catalog.GTK_CSS_FILES:
        path = home_path(*parts)
        if append_lines(path, catalog.GTK_PADDING_LINES):
            notes.append(f"Padding added to {path}")
        else:
            notes.append(f"Unable to open {path} for appending")
    notes.append("Restart your terminal emulator to see the change.")
    return CommandBatch.of("Add GTK terminal padding", [], notes=notes)


class LinuxBasix:
    def __init__(self, display, runner: ProcessRunner, probe: EnvironmentProbe,
                 settings: Settings) -> None:
        self.display = display
        self.settings = settings
        self.session = Session.start(probe)
        self.probe = probe
        self.executor = BatchExecutor(display, runner, policy=settings.failure_policy)
        self.reports: List[BatchReport] = []

    def info_lines(self) -> List[str]:
        chosen = self.session.selections['package_manager']
        managers = [m + '*' if m in chosen else m for m in self.session.package_managers]
        return [
            "Manually added repo packages: " + join_names(self.session.manual_packages),
            "Detected package managers (* = selected): " + join_names(managers),
            "Current Linux Kernel version: " + self.session.kernel,
        ]

    def dispatch(self, action: str) -> bool:
        """Run one main menu action; return True to leave the menu."""
        if action == catalog.EXIT:
            return True
        if action == catalog.SELECT_REPO:
            self.select('repo', catalog.REPO_PACKAGES)
        elif action == catalog.SELECT_FLATPAK:
            self.select('flatpak', catalog.FLATPAK_PACKAGES)
        elif action == catalog.SELECT_PACKAGE_MANAGER:
            self.session.package_managers = self.probe.package_managers()
            self.select('package_manager', self.session.package_managers)
        elif action == catalog.ADD_REPO:
            NamePrompt(self.session.manual_packages).run(self.display)
        elif action == catalog.INSTALL_REPO:
            self.run_batch(repo_install_batch(self.session))
        elif action == catalog.INSTALL_FLATPAK:
            self.run_batch(flatpak_install_batch(self.session))
        elif action == catalog.STARTUP_ITEMS:
            self.run_batch(startup_items_batch(self.settings.editor))
        elif action == catalog.GTK_PADDING:
            self.run_batch(gtk_padding_batch())
        elif action in catalog.FIXED_BATCHES:
            title = next(i.label for i in catalog.MAIN_MENU if i.action == action)
            self.run_batch(CommandBatch.of(title, catalog.FIXED_BATCHES[action]))
        else:
            logger.warning('No handler for menu action %r', action)
        return False

    def select(self, category: str, candidates: List[str]) -> None:
        title, color = catalog.SELECTION_SCREENS[category]
        MultiSelect(sorted(candidates), self.session.selections[category],
                    title=title, color=color).run(self.display)

    def run_batch(self, batch: CommandBatch) -> BatchReport:
        report = self.executor.execute(batch)
        self.reports.append(report)
        return report

    def run(self) -> None:
        navigator = MenuNavigator(
            Menu(catalog.MAIN_MENU),
            self.dispatch,
            banner=catalog.BANNER,
            info=self.info_lines,
        )
        with self.display:
            navigator.run(self.display)


def main() -> int:
    settings = Settings.from_env()
    log_path = configure_logging(settings.log_path)

    app = LinuxBasix(Display(), SubprocessRunner(), SystemProbe(), settings)
    try:
        app.run()
    except DisplayInitError as e:
        logger.error('%s', e)
        print(f"linuxbasix: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info('Interrupted by user')
    logger.info('Session finished, log at %s', log_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
