"""Editing verbs bound by the default keymaps."""

from .core import append_after_cursor, enter_insert_mode, exit_to_normal_mode, noop_action
from .editing import (
    delete_backward,
    delete_forward,
    delete_previous_word,
    insert_newline,
    move_down,
    move_left,
    move_right,
    move_up,
)

__all__ = [
    "append_after_cursor",
    "enter_insert_mode",
    "exit_to_normal_mode",
    "noop_action",
    "delete_backward",
    "delete_forward",
    "delete_previous_word",
    "insert_newline",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
]
