from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Optional

import yaml

from .config import load_config
from .lib.command import CommandError, exit_status
from .lib.env import Paths
from .logging_utils import configure_logging
from .pipeline import ProvisionCtx, UnknownStepError, run_pipeline
from .state_store import ensure_defaults, load_state_or_reset, save_state
from .steps import (
    AddCrossTargetStep,
    InstallBuildPackagesStep,
    InstallCrossCompilerStep,
    InstallInferenceRuntimeStep,
    InstallToolchainManagerStep,
    LoadToolchainEnvStep,
    PersistToolchainEnvStep,
    PostInstallChecksStep,
    RefreshPackageIndexStep,
)

logger = logging.getLogger(__name__)


def build_steps(*, verify: bool = False):
    steps = [
        RefreshPackageIndexStep(),
        InstallBuildPackagesStep(),
        InstallInferenceRuntimeStep(),
        InstallToolchainManagerStep(),
        PersistToolchainEnvStep(),
        LoadToolchainEnvStep(),
        AddCrossTargetStep(),
        InstallCrossCompilerStep(),
    ]
    if verify:
        steps.append(PostInstallChecksStep())
    return steps


def run(
    *,
    config_path: Optional[str] = None,
    home: Optional[str] = None,
    state_path: Optional[str] = None,
    log_path: Optional[str] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
    fail_fast: bool = False,
    verify: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Provision the host, recording every step result in the state file."""

    paths = Paths(home=home) if home else Paths()
    state_path = state_path or paths.state_default
    log_path = log_path or paths.log_default

    actual_log_path = configure_logging(log_path=log_path, verbose=verbose)

    state = ensure_defaults(load_state_or_reset(state_path))
    state["execution"]["paths"] = {
        "log_path_requested": log_path,
        "log_path_actual": actual_log_path,
        "home": paths.home,
    }

    try:
        cfg = load_config(config_path)
        ctx = ProvisionCtx(cfg=cfg, home=paths.home, dry_run=dry_run)
        result = run_pipeline(
            ctx=ctx,
            state=state,
            steps=build_steps(verify=verify),
            start_at=start_at,
            stop_after=stop_after,
            fail_fast=fail_fast,
        )
        state = result.state
        state["execution"]["summary"] = {
            "ran_steps": result.ran_steps,
            "failed_steps": result.failed_steps,
            "exit_code": result.exit_code,
            "dry_run": dry_run,
        }
        if result.failed_steps:
            logger.warning(
                "Finished with failures in %s (exit %s)", ", ".join(result.failed_steps), result.exit_code
            )
        else:
            logger.info("Provisioning finished")
        return state
    except UnknownStepError:
        raise
    except CommandError as e:
        logger.error("Provisioning stopped: %s", e)
        raise
    except Exception:
        logger.exception("Provisioning failed")
        raise
    finally:
        save_state(state_path, state)


def list_steps(*, config_path: Optional[str] = None, home: Optional[str] = None, verify: bool = False) -> list[str]:
    paths = Paths(home=home) if home else Paths()
    ctx = ProvisionCtx(cfg=load_config(config_path), home=paths.home)
    lines: list[str] = []
    for step in build_steps(verify=verify):
        for cmd in step.describe(ctx):
            lines.append(f"{step.step_id}: {cmd}")
    return lines


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="edgecam-bootstrap",
        description="Install the build, vision, inference and cross-compile toolchain on this host.",
    )
    p.add_argument("--config", default=None, help="YAML file overriding the bundled manifest")
    p.add_argument("--home", default=None, help="Home directory to provision (default: current user)")
    p.add_argument("--state", default=None, help="Path to run record (json|yaml)")
    p.add_argument("--log", default=None, help="Path to log file")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 30_install_toolchain_manager)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--fail-fast", action="store_true", help="Stop at the first failing step")
    p.add_argument("--verify", action="store_true", help="Run post-install checks at the end")
    p.add_argument("--list-steps", action="store_true", help="Print the command sequence and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Log command output")

    args = p.parse_args(argv)

    if args.list_steps:
        try:
            lines = list_steps(config_path=args.config, home=args.home, verify=args.verify)
        except (OSError, KeyError, ValueError, yaml.YAMLError) as e:
            p.error(f"cannot load config: {e}")
        for line in lines:
            sys.stdout.write(line + "\n")
        return 0

    try:
        state = run(
            config_path=args.config,
            home=args.home,
            state_path=args.state,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            dry_run=bool(args.dry_run),
            fail_fast=bool(args.fail_fast),
            verify=bool(args.verify),
            verbose=bool(args.verbose),
        )
    except UnknownStepError as e:
        p.error(str(e))
    except Exception as e:
        # fail-fast or setup failure; already logged by run().
        return exit_status(getattr(e, "returncode", None) or 1)

    return int(state["execution"]["summary"]["exit_code"])


if __name__ == "__main__":
    raise SystemExit(main())
