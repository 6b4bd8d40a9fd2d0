from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..lib.profile import append_profile_line
from ..lib.toolchain import cargo_env_line
from ..pipeline import ProvisionCtx

logger = logging.getLogger(__name__)


class PersistToolchainEnvStep:
    """Make login shells pick up the toolchain.

    Not guarded: every run appends the line again.
    """

    step_id = "40_persist_toolchain_env"

    def _line(self, ctx: ProvisionCtx) -> str:
        return cargo_env_line(ctx.home, ctx.cfg.env_file)

    def describe(self, ctx: ProvisionCtx) -> List[str]:
        return [f"append {self._line(ctx)!r} >> {ctx.profile_path}"]

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        append_profile_line(ctx.profile_path, self._line(ctx), dry_run=ctx.dry_run)
        return state
