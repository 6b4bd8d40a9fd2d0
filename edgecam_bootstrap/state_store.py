from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# Runs kept in state["history"]; older entries are dropped.
HISTORY_LIMIT = 50


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"yaml", "yml"}:
        return "yaml"
    # Default to JSON for unknown extensions.
    return "json"


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    if _detect_format(p) == "yaml":
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def load_state_or_reset(path: str) -> Dict[str, Any]:
    """Load the run record, moving an unreadable one aside.

    The record never decides which steps run, so a corrupt file only costs
    the old history.
    """

    try:
        return load_state(path)
    except (ValueError, yaml.YAMLError) as e:
        p = Path(path)
        aside = p.with_name(p.name + ".corrupt")
        p.replace(aside)
        logger.warning("Unreadable state file %s moved to %s: %s", p, aside, e)
        return {}


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) == "yaml":
        p.write_text(yaml.safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with defaults (without overriding recorded values)."""

    state.setdefault("version", "1")
    state.setdefault("execution", {})
    state.setdefault("history", [])

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("steps", {})
    exe.setdefault("errors", [])
    exe.setdefault("warnings", [])
    exe.setdefault("env", {})

    return state


def begin_run(state: Dict[str, Any]) -> None:
    """Reset per-run fields. The previous run stays in history."""

    exe = state.setdefault("execution", {})
    exe["steps"] = {}
    exe["errors"] = []
    exe["warnings"] = []
    exe["env"] = {}
    exe["started_at"] = time.time()


def record_step_result(
    state: Dict[str, Any],
    step_id: str,
    *,
    status: str,
    returncode: int = 0,
    error: Optional[str] = None,
) -> None:
    exe = state.setdefault("execution", {})
    entry: Dict[str, Any] = {"status": status, "returncode": returncode}
    if error:
        entry["error"] = error
        exe.setdefault("errors", []).append({"step": step_id, "returncode": returncode, "error": error})
    exe.setdefault("steps", {})[step_id] = entry


def finish_run(state: Dict[str, Any], *, exit_code: int) -> None:
    exe = state.setdefault("execution", {})
    exe["current_step"] = None
    history = state.setdefault("history", [])
    history.append(
        {
            "started_at": exe.get("started_at"),
            "finished_at": time.time(),
            "exit_code": exit_code,
            "steps": dict(exe.get("steps") or {}),
        }
    )
    del history[:-HISTORY_LIMIT]
