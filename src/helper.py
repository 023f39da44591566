from pathlib import Path
import logging
import platform
import shutil
from typing import Iterable, List, Protocol, Sequence

logger = logging.getLogger(__name__)

PACKAGE_MANAGERS = ('apt', 'pacman', 'yum', 'dnf', 'zypper', 'snap')


def join_names(names: Iterable[str], delimiter: str = ' | ') -> str:
    names = list(names)
    if not names:
        return 'None'
    return delimiter.join(names)


def _get_app_dir() -> Path:
    """Return the directory for files the tool itself writes (the log)."""
    return Path.home() / '.linuxbasix'


def get_log_file() -> Path:
    return _get_app_dir() / 'linuxbasix.log'


def home_path(*parts: str) -> Path:
    return Path.home().joinpath(*parts)


def append_lines(path: Path, lines: Sequence[str]) -> bool:
    """Append ``lines`` to ``path``, one per line.

    Parent directories are created as needed. Returns False if the file cannot
    be opened; the caller decides how to report it.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('a', encoding='utf-8') as f:
            for line in lines:
                f.write(line + '\n')
    except OSError as e:
        logger.warning('Cannot append to %s: %s', path, e)
        return False
    logger.info('Appended %d lines to %s', len(lines), path)
    return True


class EnvironmentProbe(Protocol):
    def kernel_version(self) -> str: ...

    def package_managers(self) -> List[str]: ...


class SystemProbe:
    """Facts about the running system, for display only."""

    def kernel_version(self) -> str:
        release = platform.release()
        return release or 'Unknown'

    def package_managers(self) -> List[str]:
        found = [name for name in PACKAGE_MANAGERS if shutil.which(name)]
        logger.debug('Package managers on PATH: %s', found)
        return found
