"""Searchable logging utilities.

All modules log through the ``Searchable`` logger. The compiler and the
storage layer only emit DEBUG records (phrases, words, SQL, bindings); the
CLI installs the handlers once per command from the ``log`` config section.

Record format: ``mm-dd HH:MM:SS [LVL] message`` with LVL one of
DEBG/INFO/WARN/ERRO.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from Searchable.config.runtime import RuntimeConfig

LOGGER_NAME: Final = "Searchable"

_LEVEL_TAGS: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

log = logging.getLogger(LOGGER_NAME)


class _LevelTagFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(leveltag)s] %(message)s", datefmt="%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - stdlib name
        record.leveltag = _LEVEL_TAGS.get(record.levelno, record.levelname[:4])
        return super().format(record)


def log_file_path(log_dir: str, action: str) -> Path:
    """Return ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log``."""
    stamp = datetime.now().strftime("%m%d%H%M%S")
    return Path(log_dir) / action / f"{action}_{stamp}.log"


def configure_logging(runtime: RuntimeConfig, action: str | None = None) -> None:
    """Install console (and optional per-command file) handlers.

    The console honours ``runtime.level``; the log file always records DEBUG
    so that generated SQL is kept even when the console is quiet.
    """
    console_level = logging.getLevelName(runtime.level)
    if not isinstance(console_level, int):
        console_level = logging.INFO
    formatter = _LevelTagFormatter()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    if runtime.to_file and action:
        path = log_file_path(runtime.dir, action)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if len(handlers) > 1 else console_level)
    log.propagate = False
