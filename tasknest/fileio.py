"""Atomic file I/O and JSON record encoding for Tasknest."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from tasknest.errors import StorageReadError


def read_text(path: Path) -> str | None:
    """Read a text file, returning None if missing."""
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML file, returning empty dict if missing or empty."""
    text = read_text(path)
    if not text or not text.strip():
        return {}
    result = yaml.safe_load(text)
    return result if isinstance(result, dict) else {}


def write_text_atomic(path: Path, content: str) -> None:
    """Atomic write: temp file in the same directory + fsync + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=".txt")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def encode_records(records: list[dict[str, Any]]) -> str:
    """Serialize an ordered list of records to compact JSON text."""
    return json.dumps(records, ensure_ascii=False)


def decode_records(key: str, text: str) -> list[dict[str, Any]]:
    """Parse JSON text into a list of records.

    Non-object entries are dropped. Anything that is not a JSON array raises
    StorageReadError.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageReadError(key, f"invalid JSON ({e.msg})") from e
    except RecursionError as e:
        raise StorageReadError(key, "JSON nested too deeply") from e
    if not isinstance(data, list):
        raise StorageReadError(key, f"expected a list, got {type(data).__name__}")
    return [item for item in data if isinstance(item, dict)]
