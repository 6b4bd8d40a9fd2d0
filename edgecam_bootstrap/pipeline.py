from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .config import ProvisionConfig
from .lib.command import exit_status
from .state_store import begin_run, finish_run, record_step_result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisionCtx:
    cfg: ProvisionConfig
    home: str
    dry_run: bool = False

    @property
    def profile_path(self) -> Path:
        return Path(self.home) / self.cfg.profile_file

    @property
    def cargo_env_path(self) -> Path:
        return Path(self.home) / self.cfg.env_file

    def command_env(self, state: Dict[str, Any]) -> Dict[str, str]:
        """Environment overrides for commands: HOME plus whatever earlier steps exported."""
        env = {"HOME": self.home}
        env.update((state.get("execution") or {}).get("env") or {})
        return env


class Step(Protocol):
    """A single provisioning step."""

    step_id: str

    def describe(self, ctx: ProvisionCtx) -> List[str]:
        ...

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


class UnknownStepError(ValueError):
    """--start-at / --stop-after named a step that does not exist."""


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    failed_steps: List[str]
    exit_code: int


def _check_step_ids(steps: Sequence[Step], *names: Optional[str]) -> None:
    known = [s.step_id for s in steps]
    for name in names:
        if name is not None and name not in known:
            raise UnknownStepError(f"Unknown step id {name!r} (known: {', '.join(known)})")


def run_pipeline(
    *,
    ctx: ProvisionCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    fail_fast: bool = False,
) -> PipelineResult:
    """Run steps in order.

    A failing step is recorded and the next step still runs, unless
    fail_fast is set. The exit code is that of the last failure.
    """

    _check_step_ids(steps, start_at, stop_after)

    ran: List[str] = []
    failed: List[str] = []
    exit_code = 0

    begin_run(state)
    started = start_at is None

    try:
        for step in steps:
            if not started:
                if step.step_id == start_at:
                    started = True
                else:
                    continue

            state.setdefault("execution", {})["current_step"] = step.step_id
            logger.info("Running step %s", step.step_id)
            ran.append(step.step_id)
            try:
                state = step.run(ctx, state)
            except Exception as e:
                rc = exit_status(getattr(e, "returncode", None) or 1)
                record_step_result(state, step.step_id, status="failed", returncode=rc, error=str(e))
                failed.append(step.step_id)
                exit_code = rc
                if fail_fast:
                    logger.error("Step %s failed (%s); stopping (fail-fast)", step.step_id, rc)
                    raise
                logger.error("Step %s failed (%s): %s", step.step_id, rc, e)
            else:
                record_step_result(state, step.step_id, status="ok")

            if stop_after is not None and step.step_id == stop_after:
                logger.info("Stopping after %s", stop_after)
                break
    finally:
        finish_run(state, exit_code=exit_code)

    return PipelineResult(state=state, ran_steps=ran, failed_steps=failed, exit_code=exit_code)
