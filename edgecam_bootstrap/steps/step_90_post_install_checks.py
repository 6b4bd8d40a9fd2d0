from __future__ import annotations

import logging
import shutil
from typing import Any, Dict, List

from ..lib.command import run_cmd
from ..lib.toolchain import installed_targets
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class PostInstallChecksStep:
    step_id = "90_post_install_checks"

    def describe(self, ctx: ProvisionCtx) -> List[str]:
        out = [f"which {t}" for t in ctx.cfg.check_tools]
        out += [f"pkg-config --exists {m}" for m in ctx.cfg.check_pkg_config_modules]
        if ctx.cfg.cross_targets:
            out.append("rustup target list --installed")
        return out

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        if ctx.dry_run:
            logger.info("Skipping post-install checks in dry-run")
            return state

        env = ctx.command_env(state)
        problems: list[str] = []

        for tool in ctx.cfg.check_tools:
            if shutil.which(tool, path=env.get("PATH")) is None:
                problems.append(f"missing tool: {tool}")

        for module in ctx.cfg.check_pkg_config_modules:
            r = run_cmd(["pkg-config", "--exists", module], check=False, env=env)
            if r.returncode != 0:
                problems.append(f"missing pkg-config module: {module}")

        if ctx.cfg.cross_targets:
            have = installed_targets(env=env)
            for target in ctx.cfg.cross_targets:
                if target not in have:
                    problems.append(f"missing cross target: {target}")

        state.setdefault("execution", {})["checks"] = {"problems": problems}
        if problems:
            raise RuntimeError("Post-install checks failed: " + "; ".join(problems))

        logger.info("Post-install checks passed")
        return state
