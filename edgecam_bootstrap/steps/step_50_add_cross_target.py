from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..lib.command import format_argv
from ..lib.toolchain import add_target
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class AddCrossTargetStep:
    step_id = "50_add_cross_target"

    def describe(self, ctx: ProvisionCtx) -> List[str]:
        return [format_argv(["rustup", "target", "add", t]) for t in ctx.cfg.cross_targets]

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        for target in ctx.cfg.cross_targets:
            add_target(target, env=ctx.command_env(state), dry_run=ctx.dry_run)
        return state
