"""Mode transition actions shared by the default keymaps."""

from __future__ import annotations

from typing import TYPE_CHECKING

from writeonly.modes.base_mode import ModeContext, ModeResult

if TYPE_CHECKING:
    from writeonly.keymaps.resolver import ResolutionMatch


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def append_after_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.buffer.move_horizontal(1)
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="exit_insert")


def noop_action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "enter_insert_mode",
    "append_after_cursor",
    "exit_to_normal_mode",
    "noop_action",
]
