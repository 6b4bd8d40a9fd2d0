from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def append_profile_line(path: str | Path, line: str, *, dry_run: bool = False) -> None:
    """Append one line to a shell profile.

    No duplicate check: calling this twice leaves the line in the file twice.
    """

    p = Path(path)
    if dry_run:
        logger.info("Would append to %s: %s", p, line)
        return

    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as f:
        f.write(line + "\n")
    logger.info("Appended to %s: %s", p, line)


def count_profile_line(path: str | Path, line: str) -> int:
    p = Path(path)
    if not p.exists():
        return 0
    return sum(1 for ln in p.read_text(encoding="utf-8").splitlines() if ln == line)
