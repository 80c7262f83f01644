# src/pocket_tasks/preferences/appearance.py

from __future__ import annotations

import base64
import json
import logging
import mimetypes
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from ..core.ports import KeyValueStorage

logger = logging.getLogger(__name__)


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> Theme:
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT

    @classmethod
    def from_raw(cls, raw: Any, default: Theme | None = None) -> Theme:
        fallback = default or cls.LIGHT
        if not raw or not isinstance(raw, str):
            return fallback
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return fallback


@dataclass(slots=True, frozen=True)
class Palette:
    """ANSI escape sequences used by the console connector."""

    text: str
    accent: str
    muted: str
    important: str
    reset: str = "\033[0m"


_PALETTES: dict[Theme, Palette] = {
    Theme.LIGHT: Palette(text="\033[30m", accent="\033[34m", muted="\033[90m", important="\033[31m"),
    Theme.DARK: Palette(text="\033[97m", accent="\033[96m", muted="\033[37m", important="\033[91m"),
}


def palette_for(theme: Theme) -> Palette:
    return _PALETTES[theme]


class AppearanceStore:
    """
    Theme + wallpaper preferences, each stored under its own key.

    Values are JSON strings, so the stored theme reads `"dark"` (the mobile
    variants kept the theme as a JSON-encoded string as well).
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        theme_key: str = "THEME",
        wallpaper_key: str = "WALLPAPER",
        default_theme: Theme = Theme.LIGHT,
    ) -> None:
        self._storage = storage
        self._theme_key = theme_key
        self._wallpaper_key = wallpaper_key
        self._default_theme = default_theme

        self._theme = Theme.from_raw(self._read(theme_key), default_theme)
        wallpaper = self._read(wallpaper_key)
        self._wallpaper: str | None = wallpaper if isinstance(wallpaper, str) and wallpaper else None

        logger.info("AppearanceStore ready theme=%s wallpaper=%s", self._theme.value, bool(self._wallpaper))

    def _read(self, key: str) -> Any:
        try:
            raw = self._storage.get_item(key)
        except Exception:
            logger.exception("Failed to read preference key=%s", key)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Preference key=%s is not valid JSON; using default.", key)
            return None

    def _write(self, key: str, value: Any) -> None:
        if value is None:
            self._storage.remove_item(key)
            return
        self._storage.set_item(key, json.dumps(value, ensure_ascii=False))

    # ---- theme ----

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def palette(self) -> Palette:
        return palette_for(self._theme)

    def set_theme(self, theme: Theme) -> Theme:
        self._theme = theme
        self._write(self._theme_key, theme.value)
        logger.debug("Theme set to %s", theme.value)
        return theme

    def toggle_theme(self) -> Theme:
        return self.set_theme(self._theme.toggled())

    # ---- wallpaper ----

    @property
    def wallpaper(self) -> str | None:
        return self._wallpaper

    def change_wallpaper(self, src: str | None) -> str | None:
        """Set the wallpaper source (URL or path). Falsy src clears it."""
        src = (src or "").strip() or None
        self._wallpaper = src
        self._write(self._wallpaper_key, src)
        logger.debug("Wallpaper %s", "cleared" if src is None else "changed")
        return src

    def custom_wallpaper(self, path: str | Path | None) -> str | None:
        """
        Use a local image file as wallpaper.

        The file is embedded as a base64 data: URL so the preference survives
        the original file being moved. No path -> nothing changes.
        """
        if not path:
            return None

        p = Path(path).expanduser()
        mime, _ = mimetypes.guess_type(p.name)
        if not mime or not mime.startswith("image/"):
            raise ValueError(f"not an image file: {p.name}")

        data = p.read_bytes()
        url = f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
        self._wallpaper = url
        self._write(self._wallpaper_key, url)
        logger.info("Custom wallpaper loaded from %s (%d bytes)", p, len(data))
        return url
