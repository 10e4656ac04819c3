"""Workspace root, path helpers and config.yaml loading for Tasknest."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tasknest.fileio import read_yaml


def workspace_root() -> Path:
    """Get the workspace directory (holds config.yaml, store/ and the log)."""
    return Path(
        os.environ.get("TASKNEST_ROOT", str(Path.home() / ".tasknest"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "config.yaml"


def store_dir(root: Path | None = None, config: Config | None = None) -> Path:
    if root is None:
        root = workspace_root()
    if config is None:
        config = load_config(root)
    return root / config.store_dir


def log_path(root: Path | None = None, config: Config | None = None) -> Path:
    if root is None:
        root = workspace_root()
    if config is None:
        config = load_config(root)
    return root / config.log_file


# ── Config ────────────────────────────────────────────────────


@dataclass
class Config:
    log_level: str = "INFO"
    log_file: str = "tasknest.log"
    store_dir: str = "store"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Config:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            log_level=str(d.get("log_level", "INFO")).upper(),
            log_file=str(d.get("log_file", "tasknest.log")),
            store_dir=str(d.get("store_dir", "store")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "log_level": self.log_level,
            "log_file": self.log_file,
            "store_dir": self.store_dir,
        }


def load_config(root: Path | None = None) -> Config:
    """Load config.yaml from the workspace; missing file -> defaults."""
    return Config.from_dict(read_yaml(config_path(root)))
