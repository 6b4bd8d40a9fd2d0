from __future__ import annotations

import logging
from pathlib import Path

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "edgecam-bootstrap.log"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)

_file_handler: logging.FileHandler | None = None
_console_handler: logging.StreamHandler | None = None


def _open_log_file(log_path: str) -> logging.FileHandler:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError:
        return logging.FileHandler(Path.cwd() / FALLBACK_LOG_NAME)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    *,
    verbose: bool = False,
    also_console: bool = True,
) -> str:
    """Send logs to a file (always DEBUG) and optionally the console.

    The file keeps captured command output (the DEBUG ``STDOUT``/``STDERR``
    lines from run_cmd) so a failed provisioning run can be diagnosed after
    the fact. ``verbose`` only changes what reaches the console.

    A second call keeps the first file and just adjusts the console level.
    Returns the log file actually in use; falls back to the working
    directory when ``log_path`` is not writable.
    """

    global _file_handler, _console_handler

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    console_level = logging.DEBUG if verbose else logging.INFO

    if _file_handler is None or _file_handler not in root.handlers:
        _file_handler = _open_log_file(log_path)
        _file_handler.setLevel(logging.DEBUG)
        _file_handler.setFormatter(_FORMAT)
        root.addHandler(_file_handler)
        logging.getLogger(__name__).info(
            "Logging initialized (requested=%s, actual=%s)", log_path, _file_handler.baseFilename
        )

    if also_console:
        if _console_handler is None or _console_handler not in root.handlers:
            _console_handler = logging.StreamHandler()
            _console_handler.setFormatter(_FORMAT)
            root.addHandler(_console_handler)
        _console_handler.setLevel(console_level)

    return _file_handler.baseFilename
