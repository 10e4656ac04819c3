"""Durable key-value store and fire-and-forget write-through.

The store maps string keys to string values. There are no transactions and
no atomicity across keys. Writes issued through WriteBehind never block the
caller; writes to the same key are chained so that the value on disk always
ends up as the most recently submitted snapshot.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

from tasknest.errors import StorageReadError, StorageWriteError
from tasknest.fileio import read_text, write_text_atomic

logger = logging.getLogger(__name__)

TASKS_KEY = "@tasknest:tasks"
CATEGORIES_KEY = "@tasknest:categories"
THEME_KEY = "@tasknest:theme"
LANGUAGE_KEY = "@tasknest:language"


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None:
        """Stored value, or None if absent. Raises StorageReadError if unreadable."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Persist value under key. Raises StorageWriteError on failure."""
        ...


class FileKeyValueStore:
    """
    One file per key under a directory.

    Blocking file I/O runs in a worker thread so the event loop stays free.
    Each write goes to a temp file first and is renamed over the target.
    """

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)
        logger.info("FileKeyValueStore ready dir=%s", self._dir)

    def path_for(self, key: str) -> Path:
        return self._dir / quote(key, safe="")

    async def get(self, key: str) -> str | None:
        """Raises StorageReadError if the stored bytes are not UTF-8."""
        try:
            return await asyncio.to_thread(read_text, self.path_for(key))
        except UnicodeDecodeError as e:
            raise StorageReadError(key, f"not UTF-8 text ({e.reason})") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(write_text_atomic, self.path_for(key), value)
        except OSError as e:
            raise StorageWriteError(key, str(e)) from e


class WriteBehind:
    """
    Schedules writes without waiting for them.

    Failures are logged and dropped; the next successful write of the same
    key reconciles memory and disk. Nothing is retried.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._tails: dict[str, asyncio.Task[None]] = {}

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def schedule(self, key: str, value: str) -> asyncio.Task[None]:
        """Queue a write of value under key. Must be called on the event loop."""
        previous = self._tails.get(key)
        task = asyncio.get_running_loop().create_task(self._write(key, value, previous))
        self._tails[key] = task
        task.add_done_callback(lambda t, k=key: self._forget(k, t))
        return task

    def pending(self) -> int:
        return len(self._tails)

    async def flush(self) -> None:
        """Wait for every write scheduled so far."""
        while self._tails:
            await asyncio.gather(*list(self._tails.values()))

    async def _write(self, key: str, value: str, previous: asyncio.Task[None] | None) -> None:
        if previous is not None:
            # _write never raises, so waiting here only orders the writes.
            await previous
        try:
            await self._store.set(key, value)
        except StorageWriteError as e:
            logger.error("Write dropped key=%s: %s", key, e.reason)
        except Exception:
            logger.exception("Write dropped key=%s", key)
        else:
            logger.debug("Wrote key=%s bytes=%d", key, len(value))

    def _forget(self, key: str, task: asyncio.Task[None]) -> None:
        if self._tails.get(key) is task:
            del self._tails[key]
