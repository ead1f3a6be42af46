from __future__ import annotations

from typing import List

from writeonly.adapters.textual import (
    TextualUIHooks,
    TextualWriteOnlyAdapter,
    translate_key,
)
from writeonly.buffer import Buffer, BufferMirror
from writeonly.config import WriteOnlyConfig
from writeonly.controller import WriteOnlyController
from writeonly.host import Editor


def make_adapter(
    *, threshold: int = 3
) -> tuple[TextualWriteOnlyAdapter, List[BufferMirror], List[str], List[str]]:
    editor = Editor(Buffer())
    controller = WriteOnlyController(editor, WriteOnlyConfig(threshold=threshold))
    mirrors: List[BufferMirror] = []
    statuses: List[str] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=mirrors.append,
        update_status=statuses.append,
        log=logs.append,
    )
    adapter = TextualWriteOnlyAdapter(editor, controller, hooks)
    controller.enable()
    return adapter, mirrors, statuses, logs


def test_translate_key() -> None:
    assert translate_key("a", "a").text == "a"
    assert translate_key("full_stop", ".").key == "."
    assert translate_key("space", " ").text == " "
    assert translate_key("escape", "\x1b").key == "ESC"
    assert translate_key("backspace", "\x7f").key == "BACKSPACE"
    ctrl_w = translate_key("ctrl+w", "\x17")
    assert (ctrl_w.key, ctrl_w.modifiers) == ("w", ("ctrl",))


def test_adapter_types_and_blocks() -> None:
    adapter, mirrors, _, _ = make_adapter()

    for char in "hi":
        adapter.handle_textual_key(char, character=char)
    adapter.handle_textual_key("backspace", character="\x7f")

    assert mirrors[-1].text == "hi"
    assert mirrors[-1].cursor == (0, 2)


def test_adapter_status_tracks_escapes() -> None:
    adapter, _, statuses, _ = make_adapter(threshold=2)

    assert adapter.status_line().startswith("WRITING  exits left: 2")

    adapter.handle_textual_key("escape")
    assert statuses[-1] == "WRITING  exits left: 1  delete: ready  |  pressed escape: 1/2"

    adapter.handle_textual_key("escape")
    assert statuses[-1] == "NORMAL  |  pressed escape: 2/2"


def test_adapter_reports_delete_lock() -> None:
    adapter, _, statuses, _ = make_adapter()
    for char in "one two":
        adapter.handle_textual_key(char, character=char)

    adapter.handle_textual_key("ctrl+w", character="\x17")

    assert "delete: locked" in statuses[-1]
    assert adapter.editor.buffer.text == "one "


def test_adapter_emits_log_lines() -> None:
    adapter, _, _, logs = make_adapter()

    adapter.handle_textual_key("x", character="x")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("event ->") and "text.changed" in line for line in logs)
