from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .lib.manifests import load_provision_manifest, load_yaml_file


@dataclass(frozen=True)
class PackageGroup:
    name: str
    tool: str
    assume_yes: bool
    packages: List[str]


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any]

    @property
    def privilege(self) -> List[str]:
        return [str(x) for x in ((self.raw.get("package_manager") or {}).get("privilege") or [])]

    @property
    def index_tool(self) -> str:
        return str(((self.raw.get("package_manager") or {}).get("index_tool")) or "apt-get")

    @property
    def package_groups(self) -> Dict[str, PackageGroup]:
        groups = self.raw.get("package_groups") or {}
        if not isinstance(groups, dict):
            raise ValueError("package_groups must be a mapping")
        return {name: self._group(name, obj or {}) for name, obj in groups.items()}

    def package_group(self, name: str) -> PackageGroup:
        groups = self.package_groups
        if name not in groups:
            raise KeyError(f"Unknown package group: {name}")
        return groups[name]

    @staticmethod
    def _group(name: str, obj: Dict[str, Any]) -> PackageGroup:
        pkgs = obj.get("packages") or []
        if not isinstance(pkgs, list):
            raise ValueError(f"Package group {name} packages must be a list")
        return PackageGroup(
            name=name,
            tool=str(obj.get("tool") or "apt-get"),
            assume_yes=bool(obj.get("assume_yes", True)),
            packages=[str(p).strip() for p in pkgs if str(p).strip()],
        )

    @property
    def _toolchain(self) -> Dict[str, Any]:
        return self.raw.get("toolchain") or {}

    @property
    def installer_url(self) -> str:
        return str(self._toolchain.get("installer_url") or "https://sh.rustup.rs")

    @property
    def installer_protocols(self) -> str:
        return str(self._toolchain.get("protocols") or "=https")

    @property
    def installer_tls(self) -> str:
        return str(self._toolchain.get("tls") or "tlsv1.2")

    @property
    def installer_shell(self) -> str:
        return str(self._toolchain.get("shell") or "sh")

    @property
    def env_file(self) -> str:
        return str(self._toolchain.get("env_file") or ".cargo/env")

    @property
    def profile_file(self) -> str:
        return str(self._toolchain.get("profile_file") or ".bash_profile")

    @property
    def cross_targets(self) -> List[str]:
        return [str(t) for t in (self._toolchain.get("cross_targets") or [])]

    @property
    def check_tools(self) -> List[str]:
        return [str(t) for t in ((self.raw.get("checks") or {}).get("tools") or [])]

    @property
    def check_pkg_config_modules(self) -> List[str]:
        return [str(m) for m in ((self.raw.get("checks") or {}).get("pkg_config_modules") or [])]


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _deep_merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def load_config(path: Optional[str] = None) -> ProvisionConfig:
    """Bundled manifest, optionally overridden by a user YAML file.

    Lists are replaced, not concatenated.
    """

    raw = load_provision_manifest()
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(path)
        if p.suffix.lower() not in {".yaml", ".yml"}:
            raise ValueError("config must be YAML")
        raw = _deep_merge(raw, load_yaml_file(p))
    return ProvisionConfig(raw=raw)
