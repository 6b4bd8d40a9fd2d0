from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping

from .command import CommandError, run_cmd

logger = logging.getLogger(__name__)

DEFAULT_INSTALLER_URL = "https://sh.rustup.rs"


def installer_fetch_argv(
    url: str = DEFAULT_INSTALLER_URL,
    *,
    protocols: str = "=https",
    tls: str = "tlsv1.2",
) -> list[str]:
    return ["curl", "--proto", protocols, f"--{tls}", "-sSf", url]


def cargo_env_path(home: str, env_file: str = ".cargo/env") -> Path:
    return Path(home) / env_file


def cargo_bin_dir(home: str) -> Path:
    return Path(home) / ".cargo" / "bin"


def cargo_env_line(home: str, env_file: str = ".cargo/env") -> str:
    # $HOME is expanded when the line is written, not when it is sourced.
    return f'. "{cargo_env_path(home, env_file)}"'


def install_toolchain_manager(
    *,
    url: str = DEFAULT_INSTALLER_URL,
    protocols: str = "=https",
    tls: str = "tlsv1.2",
    shell: str = "sh",
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> int:
    """Fetch the toolchain installer and pipe it into a shell.

    Behaves like `curl ... | sh` without pipefail: the shell's status is the
    result, a failed download only produces a warning.
    """

    fetched = run_cmd(
        installer_fetch_argv(url, protocols=protocols, tls=tls),
        check=False,
        env=env,
        dry_run=dry_run,
    )
    if fetched.returncode != 0:
        logger.warning("Installer download failed (%s): %s", fetched.returncode, fetched.stderr.strip())

    r = run_cmd([shell], check=False, env=env, input_text=fetched.stdout, capture=False, dry_run=dry_run)
    if r.returncode != 0:
        raise CommandError([shell], r.returncode, r.stderr)
    return r.returncode


def load_cargo_env(
    home: str,
    env: Mapping[str, str] | None = None,
    *,
    env_file: str = ".cargo/env",
) -> Dict[str, str]:
    """Apply what sourcing the cargo env script does: put cargo's bin dir on PATH."""

    p = cargo_env_path(home, env_file)
    if not p.is_file():
        raise FileNotFoundError(f"Toolchain env file missing: {p}")

    out = dict(env or {})
    path = out.get("PATH", os.environ.get("PATH", ""))
    bin_dir = str(cargo_bin_dir(home))
    if bin_dir not in path.split(os.pathsep):
        path = os.pathsep.join([bin_dir, path]) if path else bin_dir
    out["PATH"] = path
    logger.info("Toolchain env loaded from %s", p)
    return out


def add_target(
    target: str,
    *,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    run_cmd(["rustup", "target", "add", target], env=env, capture=False, dry_run=dry_run)


def installed_targets(*, env: Mapping[str, str] | None = None) -> list[str]:
    r = run_cmd(["rustup", "target", "list", "--installed"], check=False, env=env)
    if r.returncode != 0:
        return []
    return [ln.strip() for ln in r.stdout.splitlines() if ln.strip()]
