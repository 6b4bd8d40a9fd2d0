from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    home: str = str(Path.home())

    @property
    def state_dir(self) -> Path:
        return Path(self.home) / ".local/state/edgecam-bootstrap"

    @property
    def state_default(self) -> str:
        return str(self.state_dir / "state.json")

    @property
    def log_default(self) -> str:
        return str(self.state_dir / "bootstrap.log")


PATHS = Paths()
