"""Input snapshot configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import require_env_var

SNAPSHOT_PATH_ENV = "PROPLEDGER_SNAPSHOT"


@dataclass(frozen=True, slots=True)
class SnapshotConfig:
    """Where the JSON snapshot of the four source tables lives."""

    path: Path

    def resolve_path(self) -> Path:
        return self.path.expanduser().resolve()


def get_snapshot_config(*, path: str | Path | None = None) -> SnapshotConfig:
    if path is not None:
        return SnapshotConfig(path=Path(path))
    return SnapshotConfig(path=Path(require_env_var(SNAPSHOT_PATH_ENV)))
