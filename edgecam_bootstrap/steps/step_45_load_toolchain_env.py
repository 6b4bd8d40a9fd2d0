from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..lib.toolchain import load_cargo_env
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class LoadToolchainEnvStep:
    step_id = "45_load_toolchain_env"

    def describe(self, ctx: ProvisionCtx) -> List[str]:
        return [f'. "{ctx.cargo_env_path}"']

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        if ctx.dry_run:
            logger.info("Would load toolchain env from %s", ctx.cargo_env_path)
            return state
        exe = state.setdefault("execution", {})
        exe["env"] = load_cargo_env(ctx.home, exe.get("env") or {}, env_file=ctx.cfg.env_file)
        return state
