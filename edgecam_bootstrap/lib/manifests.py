from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml


def _manifest_root() -> Path:
    # edgecam_bootstrap/lib/manifests.py -> edgecam_bootstrap/manifests
    return Path(__file__).resolve().parents[1] / "manifests"


def load_yaml_file(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping/dict: {p}")
    return data


def load_yaml_rel(rel_path: str) -> Dict[str, Any]:
    """Load a YAML file bundled with the package (manifests/...)."""
    return load_yaml_file(_manifest_root() / rel_path.lstrip("/"))


def load_provision_manifest() -> Dict[str, Any]:
    return load_yaml_rel("provision.yaml")
