"""Shared pytest fixtures for edgecam_bootstrap tests."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import pytest

from edgecam_bootstrap.config import load_config
from edgecam_bootstrap.lib import command
from edgecam_bootstrap.pipeline import ProvisionCtx


@dataclass
class Call:
    argv: list[str]
    kwargs: dict[str, Any]

    @property
    def env(self) -> dict[str, str]:
        return self.kwargs.get("env") or {}


@dataclass
class FakeRun:
    """Stand-in for subprocess.run that records argv and answers by prefix."""

    calls: list[Call] = field(default_factory=list)
    rules: list[tuple[tuple[str, ...], int, str]] = field(default_factory=list)
    missing: set[str] = field(default_factory=set)
    hooks: dict[tuple[str, ...], Callable[[], None]] = field(default_factory=dict)

    def respond(self, prefix: tuple[str, ...], *, returncode: int = 0, stdout: str = "") -> None:
        self.rules.insert(0, (prefix, returncode, stdout))

    def on(self, prefix: tuple[str, ...], hook: Callable[[], None]) -> None:
        self.hooks[prefix] = hook

    @property
    def argvs(self) -> list[list[str]]:
        return [c.argv for c in self.calls]

    def _match(self, argv: list[str]) -> tuple[int, str]:
        for prefix, rc, out in self.rules:
            if tuple(argv[: len(prefix)]) == prefix:
                return rc, out
        return 0, ""

    def __call__(self, argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        argv = list(argv)
        self.calls.append(Call(argv=argv, kwargs=kwargs))
        if argv[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        for prefix, hook in self.hooks.items():
            if tuple(argv[: len(prefix)]) == prefix:
                hook()
        rc, out = self._match(argv)
        captured = kwargs.get("stdout") is not None
        return subprocess.CompletedProcess(
            argv,
            rc,
            stdout=out if captured else None,
            stderr="boom" if captured and rc else ("" if captured else None),
        )


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(command.subprocess, "run", fake)
    return fake


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def cargo_env(home: Path) -> Path:
    """Pretend the toolchain installer already ran."""
    env = home / ".cargo" / "env"
    env.parent.mkdir(parents=True, exist_ok=True)
    env.write_text('export PATH="$HOME/.cargo/bin:$PATH"\n', encoding="utf-8")
    return env


@pytest.fixture
def ctx(home: Path) -> ProvisionCtx:
    return ProvisionCtx(cfg=load_config(), home=str(home))


@pytest.fixture(autouse=True)
def _restore_logging() -> Any:
    """Undo configure_logging() between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for h in root.handlers:
        if h not in original_handlers:
            h.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
