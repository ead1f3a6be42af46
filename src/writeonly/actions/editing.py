"""Editing and cursor verbs available in insert mode."""

from __future__ import annotations

from typing import TYPE_CHECKING

from writeonly.modes.base_mode import ModeContext, ModeResult

if TYPE_CHECKING:
    from writeonly.keymaps.resolver import ResolutionMatch


def _edited(changed: bool) -> ModeResult:
    return ModeResult(consumed=True, status="edited" if changed else "noop")


def delete_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _edited(context.buffer.delete_backward() is not None)


def delete_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _edited(context.buffer.delete_forward() is not None)


def delete_previous_word(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _edited(context.buffer.delete_previous_word() is not None)


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.insert_text("\n")
    return _edited(True)


def _moved(context: ModeContext) -> ModeResult:
    return ModeResult(
        consumed=True, status="moved", message=str(context.buffer.state.cursor)
    )


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move_horizontal(-1)
    return _moved(context)


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move_horizontal(1)
    return _moved(context)


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move_vertical(-1)
    return _moved(context)


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move_vertical(1)
    return _moved(context)


__all__ = [
    "delete_backward",
    "delete_forward",
    "delete_previous_word",
    "insert_newline",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
]
