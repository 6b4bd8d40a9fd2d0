from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..lib.command import format_argv
from ..lib.pkg import apt_install, apt_install_argv
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallPackageGroupStep:
    """Install one package group from the manifest with the host package manager."""

    step_id = ""
    group = ""

    def describe(self, ctx: ProvisionCtx) -> List[str]:
        g = ctx.cfg.package_group(self.group)
        argv = apt_install_argv(g.packages, tool=g.tool, assume_yes=g.assume_yes, privilege=ctx.cfg.privilege)
        return [format_argv(argv)]

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        g = ctx.cfg.package_group(self.group)
        state.setdefault("execution", {}).setdefault("plan", {})[self.group] = list(g.packages)
        apt_install(
            g.packages,
            tool=g.tool,
            assume_yes=g.assume_yes,
            privilege=ctx.cfg.privilege,
            env=ctx.command_env(state),
            dry_run=ctx.dry_run,
        )
        logger.info("Package group %s installed (%d packages)", self.group, len(g.packages))
        return state
