"""Normal mode; every behaviour comes from the keymap table."""

from __future__ import annotations

from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    name = "normal"
