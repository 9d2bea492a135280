"""
Logging setup for the Users API.

``create_app`` calls ``setup_logging`` with the level and log file
taken from ``Settings``.  It can run several times in one process (one
call per application built), so handlers are only added once, while
the level from the latest settings is always applied.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "users_api.console"


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    return any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename) == path
        for h in logger.handlers
    )


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> int:
    """Apply ``level`` to the root logger and make sure output is wired.

    A console handler is attached only when the root logger has no
    handlers yet (a test runner or host server may already have
    installed its own).  A file handler for ``logfile`` is attached
    unless one for the same path exists.

    Returns the numeric level that was applied; unknown level names
    fall back to ``INFO``.
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not root.handlers:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        if not _has_file_handler(root, log_path):
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    return numeric_level
