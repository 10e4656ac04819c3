"""Theme and language preferences, and their resolution against the OS.

A preference is what the user picked ('system', 'light', 'dark', or a locale
code). The active value is what the app actually uses after consulting the
host environment.
"""

from __future__ import annotations

import locale as _locale
import logging
import os
from dataclasses import dataclass
from typing import Protocol

from tasknest.errors import StorageReadError
from tasknest.i18n import BASE_LOCALE, SUPPORTED_LOCALES
from tasknest.storage import LANGUAGE_KEY, THEME_KEY, WriteBehind

logger = logging.getLogger(__name__)

SYSTEM = "system"
THEME_PREFERENCES = ("system", "light", "dark")


# ── Palettes ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Palette:
    name: str
    is_dark: bool
    background: str
    card: str
    text: str
    text_secondary: str
    input: str
    border: str
    primary: str


LIGHT_PALETTE = Palette(
    name="light",
    is_dark=False,
    background="#f7f8fa",
    card="#ffffff",
    text="#333333",
    text_secondary="#888888",
    input="#f0f0f0",
    border="#eeeeee",
    primary="#000000",
)

DARK_PALETTE = Palette(
    name="dark",
    is_dark=True,
    background="#1a1a1a",
    card="#2c2c2c",
    text="#f5f5f5",
    text_secondary="#999999",
    input="#3b3b3b",
    border="#444444",
    primary="#ffffff",
)


# ── Host environment ──────────────────────────────────────────


class SystemEnvironment(Protocol):
    def locale(self) -> str | None:
        """OS locale such as 'en_US' or 'tr-TR', or None if unknown."""
        ...

    def theme(self) -> str:
        """'light' or 'dark'."""
        ...


class HostEnvironment:
    """Reads the locale from the C library and the theme from the terminal.

    Terminals that set COLORFGBG ("fg;bg") report their background color
    index; 7 and 15 are light backgrounds, everything else is dark.
    """

    def locale(self) -> str | None:
        try:
            code, _encoding = _locale.getlocale()
        except ValueError:
            return None
        return code

    def theme(self) -> str:
        raw = os.environ.get("COLORFGBG", "")
        bg = raw.rsplit(";", 1)[-1].strip()
        if not bg.isdigit():
            return "light"
        return "light" if int(bg) in (7, 15) else "dark"


# ── Resolution ────────────────────────────────────────────────


def language_code(system_locale: str | None) -> str:
    """'en_US.UTF-8' -> 'en'; None or empty -> base locale."""
    if not system_locale:
        return BASE_LOCALE
    code = system_locale.replace("-", "_").split("_", 1)[0].split(".", 1)[0]
    return code.lower() or BASE_LOCALE


def resolve_locale(preference: str, system_locale: str | None) -> str:
    code = language_code(system_locale) if preference == SYSTEM else preference
    if code not in SUPPORTED_LOCALES:
        return BASE_LOCALE
    return code


def resolve_palette(preference: str, system_theme: str) -> Palette:
    choice = system_theme if preference == SYSTEM else preference
    return DARK_PALETTE if choice == "dark" else LIGHT_PALETTE


# ── State ─────────────────────────────────────────────────────


class SettingsState:
    """Holds preferences and the values resolved from them.

    initialize() must complete before any user-facing text is produced.
    """

    def __init__(self, writer: WriteBehind, environment: SystemEnvironment) -> None:
        self._writer = writer
        self._env = environment
        self.theme_preference = SYSTEM
        self.language_preference = SYSTEM
        self.active_locale = BASE_LOCALE
        self.active_palette = LIGHT_PALETTE

    async def initialize(self) -> None:
        self.theme_preference = await self._read_preference(THEME_KEY)
        self.language_preference = await self._read_preference(LANGUAGE_KEY)
        self.refresh()
        logger.info(
            "Settings loaded theme=%s language=%s locale=%s",
            self.theme_preference,
            self.language_preference,
            self.active_locale,
        )

    async def _read_preference(self, key: str) -> str:
        try:
            return await self._writer.store.get(key) or SYSTEM
        except (StorageReadError, OSError) as e:
            logger.warning("Could not load %s, using %s: %s", key, SYSTEM, e)
            return SYSTEM

    def refresh(self) -> None:
        """Re-query the host and recompute the active locale and palette."""
        self.active_locale = resolve_locale(self.language_preference, self._env.locale())
        self.active_palette = resolve_palette(self.theme_preference, self._env.theme())

    def set_theme_preference(self, preference: str) -> None:
        self.theme_preference = preference
        self.active_palette = resolve_palette(preference, self._env.theme())
        self._writer.schedule(THEME_KEY, preference)

    def set_language_preference(self, preference: str) -> None:
        self.language_preference = preference
        self.active_locale = resolve_locale(preference, self._env.locale())
        self._writer.schedule(LANGUAGE_KEY, preference)
