"""Built-in host keymaps for normal and insert mode."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry


def default_actions() -> tuple[ActionRef, ...]:
    # Imported here: the actions package depends on modes, which depend on us.
    from writeonly.actions import core, editing

    return (
        ActionRef("core.enter_insert", core.enter_insert_mode, "Enter insert mode"),
        ActionRef("core.append", core.append_after_cursor, "Append after cursor"),
        ActionRef("core.exit_to_normal", core.exit_to_normal_mode, "Leave insert mode"),
        ActionRef("core.noop", core.noop_action, "Do nothing"),
        ActionRef("edit.delete_backward", editing.delete_backward, "Delete before cursor"),
        ActionRef("edit.delete_forward", editing.delete_forward, "Delete under cursor"),
        ActionRef("edit.delete_word", editing.delete_previous_word, "Delete previous word"),
        ActionRef("edit.newline", editing.insert_newline, "Insert a line break"),
        ActionRef("cursor.left", editing.move_left, "Cursor left"),
        ActionRef("cursor.right", editing.move_right, "Cursor right"),
        ActionRef("cursor.up", editing.move_up, "Cursor up"),
        ActionRef("cursor.down", editing.move_down, "Cursor down"),
    )


def _bind(mode: str, key: str, action_id: str) -> Binding:
    stroke = KeyStroke.parse(key)
    return Binding(
        id=f"{mode}.{stroke.token}",
        mode=mode,
        stroke=stroke,
        action_id=action_id,
        source="defaults",
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", "i", "core.enter_insert"),
    _bind("normal", "a", "core.append"),
    _bind("normal", "ESC", "core.noop"),
    _bind("normal", "h", "cursor.left"),
    _bind("normal", "l", "cursor.right"),
    _bind("normal", "k", "cursor.up"),
    _bind("normal", "j", "cursor.down"),
    _bind("normal", "LEFT", "cursor.left"),
    _bind("normal", "RIGHT", "cursor.right"),
    _bind("normal", "UP", "cursor.up"),
    _bind("normal", "DOWN", "cursor.down"),
    _bind("insert", "ESC", "core.exit_to_normal"),
    _bind("insert", "BACKSPACE", "edit.delete_backward"),
    _bind("insert", "DELETE", "edit.delete_forward"),
    _bind("insert", "ctrl+w", "edit.delete_word"),
    _bind("insert", "ENTER", "edit.newline"),
    _bind("insert", "LEFT", "cursor.left"),
    _bind("insert", "RIGHT", "cursor.right"),
    _bind("insert", "UP", "cursor.up"),
    _bind("insert", "DOWN", "cursor.down"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    exclude_bindings: Sequence[str] | None = None,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register built-in actions and bindings for ``normal`` and ``insert``."""

    excluded = set(exclude_bindings or ())
    for action in default_actions():
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        if binding.id not in excluded:
            registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "default_actions", "DEFAULT_BINDINGS"]
