"""Host editor interface and the in-process reference host."""

from .editor import Editor, group_flag
from .protocol import EditorHost, KeyHandler, TextChangedCallback

__all__ = [
    "Editor",
    "EditorHost",
    "KeyHandler",
    "TextChangedCallback",
    "group_flag",
]
