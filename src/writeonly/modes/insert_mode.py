"""Insert mode: keymap lookups first, then literal text insertion."""

from __future__ import annotations

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode

CHORD_MODIFIERS = {"ctrl", "control", "alt", "meta"}


class InsertMode(KeymapMode):
    name = "insert"
    reports_text_changes = True

    def handle_unmapped(self, key: KeyInput) -> ModeResult:
        text = key.text
        if text is None and key.key == "SPACE":
            text = " "
        chord = any(mod.lower() in CHORD_MODIFIERS for mod in key.modifiers)
        if not text or not text.isprintable() or chord:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        self.context.buffer.insert_text(text)
        return ModeResult(consumed=True, status="inserted")
