from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


def configure_logging(log_path: Path, level: int = logging.INFO) -> Path:
    """Send log records to a file.

    There is no console handler: while curses owns the terminal any stray
    write to stdout/stderr ends up painted over the menu. If ``log_path``
    cannot be opened the log goes to ``linuxbasix.log`` in the working
    directory instead.

    Returns the path actually used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    if getattr(logger, "_linuxbasix_configured", False):
        return getattr(logger, "_linuxbasix_log_path", log_path)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    chosen_path = Path(log_path)
    handler: Optional[logging.Handler] = None
    try:
        chosen_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(chosen_path, encoding="utf-8")
    except OSError:
        chosen_path = Path.cwd() / "linuxbasix.log"
        handler = logging.FileHandler(chosen_path, encoding="utf-8")

    handler.setFormatter(fmt)
    logger.addHandler(handler)

    setattr(logger, "_linuxbasix_configured", True)
    setattr(logger, "_linuxbasix_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
