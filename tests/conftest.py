"""Shared test fixtures for Tasknest tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from tasknest.state import AppState

from .fakes import FakeEnvironment, FakeStore


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a config.yaml."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)
    config = {"log_level": "debug", "store_dir": "data"}
    (root / "config.yaml").write_text(yaml.dump(config), encoding="utf-8")

    os.environ["TASKNEST_ROOT"] = str(root)
    yield root
    if "TASKNEST_ROOT" in os.environ:
        del os.environ["TASKNEST_ROOT"]


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def environment() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture
def state(store: FakeStore, environment: FakeEnvironment) -> AppState:
    """AppState over the in-memory store; call `await state.load()` in the test."""
    return AppState(store, environment)
