from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def apt_update_argv(*, tool: str = "apt-get", privilege: Sequence[str] = ("sudo",)) -> list[str]:
    return [*privilege, tool, "update"]


def apt_install_argv(
    packages: Sequence[str],
    *,
    tool: str = "apt-get",
    assume_yes: bool = True,
    privilege: Sequence[str] = ("sudo",),
) -> list[str]:
    argv = [*privilege, tool, "install"]
    if assume_yes:
        argv.append("-y")
    return [*argv, *packages]


def apt_update(
    *,
    tool: str = "apt-get",
    privilege: Sequence[str] = ("sudo",),
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    run_cmd(apt_update_argv(tool=tool, privilege=privilege), env=env, capture=False, dry_run=dry_run)


def apt_install(
    packages: Sequence[str],
    *,
    tool: str = "apt-get",
    assume_yes: bool = True,
    privilege: Sequence[str] = ("sudo",),
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    """Install host packages.

    Without assume_yes the package manager asks for confirmation on the
    terminal, so output is never captured here.
    """
    if not packages:
        logger.info("No packages requested; skipping %s install", tool)
        return
    run_cmd(
        apt_install_argv(packages, tool=tool, assume_yes=assume_yes, privilege=privilege),
        env=env,
        capture=False,
        dry_run=dry_run,
    )
