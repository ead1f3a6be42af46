"""Host editor modes, event bus and key dispatch."""

from .base_mode import (
    MESSAGE,
    MODE_SWITCH,
    TEXT_CHANGED,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
)
from .insert_mode import InsertMode
from .normal_mode import NormalMode

__all__ = [
    "MESSAGE",
    "MODE_SWITCH",
    "TEXT_CHANGED",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "InsertMode",
    "NormalMode",
]
