from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..lib.command import format_argv
from ..lib.pkg import apt_update, apt_update_argv
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class RefreshPackageIndexStep:
    step_id = "10_refresh_package_index"

    def describe(self, ctx: ProvisionCtx) -> List[str]:
        return [format_argv(apt_update_argv(tool=ctx.cfg.index_tool, privilege=ctx.cfg.privilege))]

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        apt_update(
            tool=ctx.cfg.index_tool,
            privilege=ctx.cfg.privilege,
            env=ctx.command_env(state),
            dry_run=ctx.dry_run,
        )
        return state
