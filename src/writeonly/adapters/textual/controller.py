"""Adapter wiring the reference host and controller into Textual callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from writeonly.buffer import BufferMirror
from writeonly.controller import WriteOnlyController
from writeonly.host import Editor
from writeonly.keymaps import KeyStroke
from writeonly.modes import MESSAGE, MODE_SWITCH, TEXT_CHANGED, KeyInput, ModeResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def translate_key(key: str, character: Optional[str] = None) -> KeyInput:
    """Turn a Textual key name plus its character into a ``KeyInput``.

    Printable characters win over Textual's symbolic names (``full_stop``,
    ``space``) unless a ctrl/alt chord is held.
    """

    chord = key.startswith(("ctrl+", "alt+"))
    if character and len(character) == 1 and character.isprintable() and not chord:
        return KeyInput(key=character, text=character)
    stroke = KeyStroke.parse(key)
    return KeyInput(key=stroke.key, modifiers=stroke.modifiers)


class TextualWriteOnlyAdapter:
    def __init__(
        self,
        editor: Editor,
        controller: WriteOnlyController,
        hooks: TextualUIHooks,
    ) -> None:
        self.editor = editor
        self.controller = controller
        self.hooks = hooks
        self._last_message = ""
        for event in (MESSAGE, MODE_SWITCH, TEXT_CHANGED):
            editor.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self._refresh()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> ModeResult:
        key_input = translate_key(key, character)
        self._log("key ->", key=key_input.key, mods=key_input.modifiers or None)
        result = self.editor.handle_key(key_input)
        self._log(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        self._refresh()
        return result

    def status_line(self) -> str:
        session = self.controller.session
        if session is not None:
            label = (
                f"WRITING  exits left: {session.remaining_exits}"
                f"  delete: {'ready' if session.delete_stage == 0 else 'locked'}"
            )
        else:
            label = self.editor.mode.upper()
        if self._last_message:
            return f"{label}  |  {self._last_message}"
        return label

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log("event ->", event=name)
        if name == MESSAGE and isinstance(payload, str):
            self._last_message = payload
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.editor.buffer.mirror())
        self.hooks.update_status(self.status_line())

    def _log(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "mode": self.controller.mode.value,
            "host_mode": self.editor.mode,
            "cursor": self.editor.buffer.state.cursor,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["TextualUIHooks", "TextualWriteOnlyAdapter", "translate_key"]
