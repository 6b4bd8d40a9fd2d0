from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..lib.command import format_argv
from ..lib.toolchain import install_toolchain_manager, installer_fetch_argv
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class InstallToolchainManagerStep:
    step_id = "30_install_toolchain_manager"

    def describe(self, ctx: ProvisionCtx) -> List[str]:
        fetch = installer_fetch_argv(
            ctx.cfg.installer_url,
            protocols=ctx.cfg.installer_protocols,
            tls=ctx.cfg.installer_tls,
        )
        return [f"{format_argv(fetch)} | {ctx.cfg.installer_shell}"]

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        install_toolchain_manager(
            url=ctx.cfg.installer_url,
            protocols=ctx.cfg.installer_protocols,
            tls=ctx.cfg.installer_tls,
            shell=ctx.cfg.installer_shell,
            env=ctx.command_env(state),
            dry_run=ctx.dry_run,
        )
        return state
